"""Identity context used to decide which notifications a user can see."""

from dataclasses import dataclass

from .notification import ROLE_ADMIN


@dataclass(frozen=True)
class UserContext:
    """Read-only view of a user supplied by the user directory."""

    user_id: int
    company_id: int | None
    role: str
    email: str | None = None
    is_active: bool = True

    def has_role(self, role: str) -> bool:
        """Return ``True`` when the user's role matches ``role``."""

        return self.role.upper() == role.upper()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ROLE_ADMIN)


__all__ = ["UserContext"]
