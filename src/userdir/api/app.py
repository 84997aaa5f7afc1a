"""
userdir.api.app

FastAPI app factory for the user-directory service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/exception handlers.
- Initialize and dispose shared infrastructure (DB engine, email HTTP client).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from userdir import __version__
from userdir.api.envelope import register_exception_handlers
from userdir.api.routers.admins import router as admins_router
from userdir.api.routers.auth import router as auth_router
from userdir.api.routers.customers import router as customers_router
from userdir.api.routers.health import router as health_router
from userdir.db.init_db import init_db
from userdir.db.session import create_engine, create_sessionmaker
from userdir.notifications.email import HttpEmailNotifier
from userdir.observability.logging import configure_logging, get_logger
from userdir.observability.middleware import RequestContextMiddleware
from userdir.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Prod runs Alembic migrations instead.
            await init_db(engine)

        http = HttpEmailNotifier.build_client(settings)
        app.state.notifier = HttpEmailNotifier(http=http)
        try:
            yield
        finally:
            await http.aclose()
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="User Directory Service",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router)
    app.include_router(customers_router)
    app.include_router(admins_router)

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; flows live in services, persistence in repositories.
