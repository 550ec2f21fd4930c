"""Lookup of user identity context from the user directory."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import UserContext
from app.infrastructure.models import UserModel

from .errors import storage_guard


class UserRepository:
    """Read (and, for local tooling, register) user directory entries."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_context(self, user_id: int) -> UserContext | None:
        with storage_guard(self.session, "user lookup"):
            model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def save(
        self,
        *,
        name: str,
        email: str,
        role: str,
        company_id: int | None,
        user_id: int | None = None,
        is_active: bool = True,
    ) -> UserContext:
        """Insert the user, or update the entry sharing ``email``."""

        with storage_guard(self.session, "user registration"):
            model = (
                self.session.query(UserModel)
                .filter(UserModel.email == email)
                .one_or_none()
            )
            if model is None:
                model = UserModel(email=email)
                if user_id is not None:
                    model.id = user_id
            model.name = name
            model.role = role.strip().upper()
            model.company_id = company_id
            model.is_active = is_active
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> UserContext:
        return UserContext(
            user_id=model.id,
            company_id=model.company_id,
            role=model.role,
            email=model.email,
            is_active=bool(model.is_active),
        )


__all__ = ["UserRepository"]
