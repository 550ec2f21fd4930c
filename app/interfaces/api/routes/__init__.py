from fastapi import FastAPI

from .health import router as health_router
from .notifications import router as notifications_router


def register_routes(app: FastAPI) -> None:
    """Registra todos os routers da API na aplicação FastAPI."""

    app.include_router(health_router)
    app.include_router(notifications_router)
