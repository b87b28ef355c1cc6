# app/backend/main.py
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.backend.core.config import Settings
from app.backend.core.errors import register_error_handlers
from app.backend.core.logging_config import setup_logging
from app.backend.core.tokens import TokenService
from app.backend.routers import auth, health, task
from app.db.session import build_engine, create_all_tables

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Ensure-created bootstrap; managed deployments run `alembic upgrade head` instead.
    create_all_tables(app.state.engine)
    logger.info("TaskTracker API ready (env=%s)", app.state.settings.app_env)
    yield
    app.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    setup_logging(settings.log_level.upper())

    app = FastAPI(
        title="TaskTracker API",
        version=os.getenv("APP_VERSION", "1.0.0"),
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.token_service = TokenService(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(task.router)

    return app
