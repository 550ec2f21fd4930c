"""Translate persistence failures into :class:`StorageError`."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def storage_guard(session: Session, operation: str) -> Iterator[None]:
    """Roll back and re-raise any SQLAlchemy failure as :class:`StorageError`."""

    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Database error during %s", operation)
        raise StorageError(f"Falha de persistência em {operation}: {exc}") from exc


__all__ = ["storage_guard"]
