"""Exceptions raised by the notification core."""

from __future__ import annotations


class NotificationError(Exception):
    """Base class for errors raised while handling notifications."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(NotificationError):
    """Malformed input: missing field, invalid enum value or audience mismatch."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class NotFoundError(NotificationError):
    """The referenced resource does not exist."""

    def __init__(self, resource: str, identifier: object | None = None) -> None:
        self.resource = resource
        self.identifier = identifier
        if identifier is None:
            message = f"{resource} não encontrado(a)"
        else:
            message = f"{resource} '{identifier}' não encontrado(a)"
        super().__init__(message)


class StorageError(NotificationError):
    """The persistence layer failed; the operation was rolled back."""


__all__ = ["NotFoundError", "NotificationError", "StorageError", "ValidationError"]
