"""
authcore.api.app

FastAPI app factory for the auth service.

Responsibilities:
- Build the auth core (credentials, signer, refresh store, orchestrator) once.
- Register routers/middleware.
- Create and dispose the durable store's engine when `refresh_store=sql`.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from authcore.api.routers.auth import router as auth_router
from authcore.api.routers.health import router as health_router
from authcore.auth.store import InMemoryRefreshTokenStore, RefreshTokenStore
from authcore.db.init_db import init_db
from authcore.db.repositories.refresh_tokens import SqlRefreshTokenStore
from authcore.db.session import create_engine, create_sessionmaker
from authcore.observability.logging import configure_logging, get_logger
from authcore.observability.middleware import RequestContextMiddleware
from authcore.services.auth_service import AuthService
from authcore.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    engine = None
    store: RefreshTokenStore
    if settings.refresh_store == "sql":
        engine = create_engine(settings)
        store = SqlRefreshTokenStore(create_sessionmaker(engine))
    else:
        store = InMemoryRefreshTokenStore()

    # Signer misconfiguration (e.g. empty key) raises here, before serving anything.
    service = AuthService.from_settings(settings, store=store)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info(
            "startup",
            env=settings.env,
            refresh_store=settings.refresh_store,
            principals=len(settings.principals),
        )
        if engine is not None and settings.env in ("dev", "test"):
            await init_db(engine)
        try:
            yield
        finally:
            if engine is not None:
                await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="authcore",
        version="0.1.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.refresh_store = store
    app.state.signer = service.signer
    app.state.auth_service = service

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router)

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; token semantics live in `services.auth_service`.
