"""Register a user directory entry and print an access token for it."""

from __future__ import annotations

import argparse

from app.domain.entities import ROLE_ADMIN, ROLE_EMPLOYEE, ROLE_HR
from app.domain.exceptions import StorageError
from app.infrastructure.database import SessionLocal, initialize_database
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import create_user_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the token request."""

    parser = argparse.ArgumentParser(
        description="Register a user and issue a bearer token for the notification API.",
    )
    parser.add_argument("--name", default="Administrador", help="Nome do usuário")
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="E-mail do usuário (chave do cadastro; padrão: admin@example.com)",
    )
    parser.add_argument(
        "--role",
        default=ROLE_ADMIN,
        choices=[ROLE_ADMIN, ROLE_HR, ROLE_EMPLOYEE],
        help="Perfil do usuário",
    )
    parser.add_argument(
        "--company-id",
        type=int,
        default=1,
        help="Empresa à qual o usuário pertence",
    )
    return parser.parse_args()


def main() -> None:
    """Create or update the user and print a signed token."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        user = UserRepository(session).save(
            name=args.name,
            email=args.email,
            role=args.role,
            company_id=args.company_id,
        )
    except StorageError as exc:
        raise SystemExit(f"Não foi possível registrar o usuário: {exc}") from exc
    finally:
        session.close()

    print(
        "Usuário registrado:\n"
        f"  ID: {user.user_id}\n"
        f"  Perfil: {user.role}\n"
        f"  Empresa: {user.company_id}\n"
        f"  Token: {create_user_token(user.user_id)}"
    )


if __name__ == "__main__":
    main()
