"""V1 API router: aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from visitlog.presentation.api.v1.endpoints.health import router as health_router
from visitlog.presentation.api.v1.endpoints.visits import router as visits_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(visits_router)
