"""Simple Users API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to {"error", "message"} JSON
    - CORS is permissive by default and applied to every response
    - The Storage Gateway lives on app.state, created by the lifespan unless
      one was injected into create_app()

Design Decisions:
    - Lifespan over @app.on_event: cleaner startup/shutdown pairing
    - create_app() factory: the CLI, tests and uvicorn each get their own app
      and their own gateway, no process-wide database handle
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from simple_api.api.error_handlers import register_error_handlers
from simple_api.api.routes import health, users
from simple_api.config import API_VERSION, Settings, get_settings
from simple_api.core.repository_protocols import UserRepository
from simple_api.infrastructure.database import build_user_repository
from simple_api.infrastructure.observability import setup_logging
from simple_api.services.seed_users import seed_users

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    repository: UserRepository | None = None,
) -> FastAPI:
    """Build the FastAPI application; `repository` overrides the configured gateway."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        manager = None
        if getattr(app.state, "user_repository", None) is None:
            app.state.user_repository, manager = build_user_repository(settings)
        try:
            if settings.seed_on_startup:
                logger.info("Seeding data on startup")
                await seed_users(app.state.user_repository)
            logger.info("Simple Users API started")
            yield
        finally:
            if manager is not None:
                await manager.close()
                app.state.user_repository = None
            logger.info("Simple Users API shutting down")

    app = FastAPI(
        title="Simple Users API", version=API_VERSION, lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.user_repository = repository

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(users.router)
    return app


app = create_app()
