"""FastAPI dependency injection: wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Request

from visitlog.application.interfaces import VisitRecordRepository
from visitlog.application.services import VisitService


def get_visit_record_repository(request: Request) -> VisitRecordRepository:
    """The repository built once at startup and kept on the application state."""
    repository = getattr(request.app.state, "visit_repository", None)
    if repository is None:
        raise RuntimeError("Visit repository has not been initialised")
    return repository


async def get_visit_service(request: Request) -> AsyncGenerator[VisitService, None]:
    """Provides a VisitService instance with its repository wired up."""
    yield VisitService(get_visit_record_repository(request))
