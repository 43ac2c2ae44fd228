"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from visitlog.application.interfaces import VisitRecordRepository
from visitlog.application.services import VisitService, seed_sample_visits
from visitlog.config import Settings, get_settings
from visitlog.domain.exceptions import StoreError
from visitlog.infrastructure.database.repositories import build_visit_record_repository
from visitlog.infrastructure.logging.log_config import setup_logging
from visitlog.presentation.api.v1.router import router as v1_router

logger = logging.getLogger(__name__)


async def _seed_sample_data(repository: VisitRecordRepository) -> None:
    """Insert the sample visits into an empty store.

    Failures are logged and never stop the application from starting.
    """
    try:
        await seed_sample_visits(VisitService(repository))
    except Exception as exc:
        logger.warning("Could not seed sample visits: %s", exc)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: build the repository, create tables, seed data."""
    settings: Settings = app.state.settings
    setup_logging(settings)

    # 1. Build the one repository instance unless one was injected
    owns_repository = app.state.visit_repository is None
    if owns_repository:
        app.state.visit_repository = build_visit_record_repository(settings)
    repository: VisitRecordRepository = app.state.visit_repository

    # 2. Create tables (and the PostgreSQL database) if missing
    await repository.initialize()

    # 3. Sample data for local development
    if settings.should_seed_sample_data:
        await _seed_sample_data(repository)

    yield

    # Shutdown
    if owns_repository:
        await repository.close()
        app.state.visit_repository = None


def create_app(
    settings: Settings | None = None,
    repository: VisitRecordRepository | None = None,
) -> FastAPI:
    """Factory function that builds and configures the FastAPI application.

    ``repository`` lets callers (tests, scripts) inject an already built
    store; otherwise the lifespan builds one from settings.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.visit_repository = repository

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
        detail = "Internal server error" if settings.is_production else str(exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": detail},
        )

    # Mount API routes
    app.include_router(v1_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "visitlog.main:app",
        host="0.0.0.0",
        port=3000,
        reload=True,
    )
