"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, status

from app.config import get_settings
from app.domain.exceptions import (
    NotFoundError,
    NotificationError,
    StorageError,
    ValidationError,
)

GENERIC_STORAGE_MESSAGE = "Erro interno do servidor"


def to_http_exception(exc: NotificationError) -> HTTPException:
    """Map a domain error onto the HTTP status reported to the client.

    Storage failures only expose their message in development.
    """

    if isinstance(exc, ValidationError):
        detail = {"message": exc.message, "field": exc.field}
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)
    if isinstance(exc, StorageError) and get_settings().is_development:
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.message
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=GENERIC_STORAGE_MESSAGE,
    )


def parse_csv(value: str | None) -> frozenset[str]:
    """Split a comma-separated query parameter into a set of tokens."""

    if not value:
        return frozenset()
    return frozenset(part.strip() for part in value.split(",") if part.strip())


__all__ = ["GENERIC_STORAGE_MESSAGE", "parse_csv", "to_http_exception"]
