from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.config import configure_logging, get_settings
from app.interfaces.api.routes import register_routes
from app.infrastructure.database import initialize_database, engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Inicializa o banco ao subir e libera os recursos ao encerrar."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI principal."""

    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(title="Notification Service", lifespan=lifespan)

    # Autoriza o front-end React (dev servers locais por padrão).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
