"""FastAPI entrypoint and HTTP routes."""

from __future__ import annotations

import contextlib
from typing import AsyncIterator

from fastapi import FastAPI

from badge_registry.api.badges import router as badges_router
from badge_registry.config.settings import get_settings
from badge_registry.db.session import get_engine, init_db
from badge_registry.monitoring.logging import configure_logging
from badge_registry.services.badges import RegistrationCoordinator
from badge_registry.services.wiring import build_coordinator


def create_app(coordinator: RegistrationCoordinator | None = None) -> FastAPI:
    """Initialise the FastAPI application."""

    settings = get_settings()

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if coordinator is not None:
            yield
            return
        configure_logging()
        engine = get_engine()
        await init_db(engine)
        app.state.coordinator = build_coordinator(engine)
        try:
            yield
        finally:
            await engine.dispose()

    app = FastAPI(
        title="Fursuit Badge Registry",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
        lifespan=lifespan,
    )
    if coordinator is not None:
        app.state.coordinator = coordinator

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness checks."""

        return {"status": "ok"}

    app.include_router(badges_router)
    return app


app = create_app()
