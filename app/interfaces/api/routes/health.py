"""Rota de verificação de saúde da API."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.infrastructure.database import check_database_connection, get_db
from app.interfaces.api.schemas import HealthRead
from app.utils import now_in_app_timezone

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/", response_model=HealthRead)
def health_check(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> HealthRead:
    """Informa se a API está no ar e se o banco responde."""

    error = check_database_connection(db)
    return HealthRead(
        status="ok" if error is None else "degraded",
        database="connected" if error is None else "disconnected",
        environment=settings.environment,
        timestamp=now_in_app_timezone(),
    )
