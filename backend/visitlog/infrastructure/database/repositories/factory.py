"""Startup-time selection of the visit repository backend."""

import logging

from visitlog.application.interfaces import VisitRecordRepository
from visitlog.config import Settings
from visitlog.infrastructure.database.repositories.memory_visit_repository import (
    InMemoryVisitRecordRepository,
)
from visitlog.infrastructure.database.repositories.visit_record_repository import (
    PostgresVisitRecordRepository,
    SQLiteVisitRecordRepository,
)

logger = logging.getLogger(__name__)


def build_visit_record_repository(settings: Settings) -> VisitRecordRepository:
    """Build the single repository instance the application will use."""
    backend = settings.database_backend
    echo = settings.log_level_sql.upper() == "DEBUG"

    if backend == "memory":
        repository: VisitRecordRepository = InMemoryVisitRecordRepository()
    elif backend == "sqlite":
        repository = SQLiteVisitRecordRepository(settings.database_url, echo=echo)
    elif backend == "postgresql":
        repository = PostgresVisitRecordRepository(settings.database_url, echo=echo)
    else:
        raise ValueError(f"Unsupported database backend: {backend!r}")

    logger.info("Using %s visit repository", backend)
    return repository
