"""Health check endpoint: no store access, always available."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from visitlog.config import Settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request) -> dict:
    """Returns the current application health status."""
    settings: Settings = request.app.state.settings
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "backend": settings.database_backend,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
