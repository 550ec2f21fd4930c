"""SQLAlchemy model for the user directory."""

from sqlalchemy import Boolean, Column, Integer, String
from sqlalchemy.sql import expression

from app.infrastructure.database import Base


class UserModel(Base):
    """Minimal projection of an application user: company and role."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    company_id = Column(Integer, nullable=True, index=True)
    role = Column(String(30), nullable=False)
    is_active = Column(
        Boolean,
        nullable=False,
        default=True,
        server_default=expression.true(),
    )


__all__ = ["UserModel"]
