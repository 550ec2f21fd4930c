"""Shared fixtures: a throwaway SQLite database and seeded users."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "notification-service-tests.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["APP_TIMEZONE"] = "America/Sao_Paulo"
os.environ["ENVIRONMENT"] = "test"
os.environ.pop("NOTIFICATION_WEBHOOK_TOKEN", None)

ADMIN_ID = 1
HR_ID = 2
EMPLOYEE_ID = 4
OTHER_COMPANY_ID = 7
OTHER_EMPLOYEE_ID = 9


@pytest.fixture()
def session():
    """Yield a session bound to freshly created tables."""

    from app.infrastructure import database
    from app.infrastructure import models  # noqa: F401

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.Base.metadata.create_all(bind=database.engine)
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
        database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)


@pytest.fixture()
def users(session):
    """Register an administrator, an HR analyst and two employees."""

    from app.infrastructure.repositories import UserRepository

    repository = UserRepository(session)
    return {
        "admin": repository.save(
            user_id=ADMIN_ID,
            name="João Silva",
            email="joao.silva@techcorp.com.br",
            role="ADMINISTRADOR",
            company_id=1,
        ),
        "hr": repository.save(
            user_id=HR_ID,
            name="Maria Santos",
            email="maria.santos@techcorp.com.br",
            role="RH",
            company_id=1,
        ),
        "employee": repository.save(
            user_id=EMPLOYEE_ID,
            name="Carlos Ferreira",
            email="carlos.ferreira@techcorp.com.br",
            role="FUNCIONARIO",
            company_id=1,
        ),
        "other_employee": repository.save(
            user_id=OTHER_EMPLOYEE_ID,
            name="Ana Costa",
            email="ana.costa@outra.com.br",
            role="FUNCIONARIO",
            company_id=OTHER_COMPANY_ID,
        ),
    }


@pytest.fixture()
def make_spec():
    """Build a :class:`NotificationSpec` with sensible defaults."""

    from app.domain.entities import NotificationSpec

    def _make(**overrides):
        values = {
            "title": "Manutenção programada",
            "message": "O sistema ficará indisponível às 22h.",
            "created_by": "joao.silva@techcorp.com.br",
        }
        values.update(overrides)
        return NotificationSpec(**values)

    return _make
