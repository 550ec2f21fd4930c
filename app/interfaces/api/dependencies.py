"""FastAPI dependency utilities."""

import hmac

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.domain.entities import UserContext
from app.domain.exceptions import StorageError
from app.infrastructure.database import get_db
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def _credentials_exception(detail: str = "Credenciais inválidas") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> UserContext:
    """Resolve the user directory entry for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_exception() from exc

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as exc:
        raise _credentials_exception() from exc

    try:
        user = UserRepository(db).get_context(user_id)
    except StorageError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Serviço de usuários indisponível",
        ) from exc
    if user is None:
        raise _credentials_exception("Usuário não encontrado")
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> UserContext:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_current_active_user(
    current_user: UserContext = Depends(get_current_user),
) -> UserContext:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Usuário inativo",
        )
    return current_user


def require_admin(
    current_user: UserContext = Depends(get_current_active_user),
) -> UserContext:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Acesso negado. Permissões de administrador requeridas.",
        )
    return current_user


def verify_webhook_token(
    x_webhook_token: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Check the shared secret when ``NOTIFICATION_WEBHOOK_TOKEN`` is configured."""

    expected = settings.notification_webhook_token
    if not expected:
        return
    if x_webhook_token is None or not hmac.compare_digest(x_webhook_token, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token de webhook inválido",
        )
