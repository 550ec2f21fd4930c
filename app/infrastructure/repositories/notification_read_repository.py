"""Persistence helpers for notification read receipts."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.entities import ReadReceipt
from app.infrastructure.models import NotificationReadModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone

from .errors import storage_guard

_CONFLICT_INSERTS = {
    "sqlite": sqlite_insert,
    "postgresql": postgresql_insert,
}


class NotificationReadRepository:
    """Insert-or-ignore storage for ``(notification_id, user_id)`` receipts."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def mark_as_read(
        self,
        notification_ids: Iterable[int],
        *,
        user_id: int,
        read_at: datetime | None = None,
    ) -> int:
        """Record receipts for every id in one transaction.

        Existing receipts are left untouched. Returns the number of distinct
        ids requested.
        """

        ids = sorted({int(notification_id) for notification_id in notification_ids})
        if not ids:
            return 0

        timestamp = ensure_app_naive_datetime(read_at or now_in_app_timezone())
        rows = [
            {"notification_id": notification_id, "user_id": user_id, "read_at": timestamp}
            for notification_id in ids
        ]
        with storage_guard(self.session, "read receipt insertion"):
            insert = _CONFLICT_INSERTS.get(self.session.get_bind().dialect.name)
            if insert is not None:
                statement = (
                    insert(NotificationReadModel)
                    .values(rows)
                    .on_conflict_do_nothing(index_elements=["notification_id", "user_id"])
                )
                self.session.execute(statement)
            else:
                self._insert_missing(rows, user_id=user_id)
            self.session.commit()
        return len(ids)

    def _insert_missing(self, rows: list[dict], *, user_id: int) -> None:
        # A concurrent writer may win the race between the lookup and the
        # flush; the unique constraint then reports the pair as already read.
        for attempt in range(2):
            existing = self._existing_ids(
                [row["notification_id"] for row in rows], user_id=user_id
            )
            self.session.add_all(
                NotificationReadModel(**row)
                for row in rows
                if row["notification_id"] not in existing
            )
            try:
                self.session.flush()
                return
            except IntegrityError:
                self.session.rollback()
                if attempt:
                    raise

    def _existing_ids(self, notification_ids: list[int], *, user_id: int) -> set[int]:
        query = (
            self.session.query(NotificationReadModel.notification_id)
            .filter(NotificationReadModel.user_id == user_id)
            .filter(NotificationReadModel.notification_id.in_(notification_ids))
        )
        return {notification_id for (notification_id,) in query.all()}

    def get(self, notification_id: int, *, user_id: int) -> ReadReceipt | None:
        with storage_guard(self.session, "read receipt lookup"):
            model = (
                self.session.query(NotificationReadModel)
                .filter(NotificationReadModel.notification_id == notification_id)
                .filter(NotificationReadModel.user_id == user_id)
                .one_or_none()
            )
        return self._to_entity(model) if model else None

    def read_times_for_user(self, user_id: int) -> dict[int, datetime]:
        """Map every notification id the user has read to its receipt time."""

        with storage_guard(self.session, "read receipt listing"):
            rows = (
                self.session.query(
                    NotificationReadModel.notification_id, NotificationReadModel.read_at
                )
                .filter(NotificationReadModel.user_id == user_id)
                .all()
            )
        return {
            notification_id: ensure_app_timezone(read_at)
            for notification_id, read_at in rows
        }

    def count_by_notification(self) -> dict[int, int]:
        """Return the number of receipts recorded for each notification."""

        with storage_guard(self.session, "read receipt aggregation"):
            rows = (
                self.session.query(
                    NotificationReadModel.notification_id,
                    func.count(NotificationReadModel.id),
                )
                .group_by(NotificationReadModel.notification_id)
                .all()
            )
        return {notification_id: count for notification_id, count in rows}

    @staticmethod
    def _to_entity(model: NotificationReadModel) -> ReadReceipt:
        return ReadReceipt(
            notification_id=model.notification_id,
            user_id=model.user_id,
            read_at=ensure_app_timezone(model.read_at),
        )


__all__ = ["NotificationReadRepository"]
