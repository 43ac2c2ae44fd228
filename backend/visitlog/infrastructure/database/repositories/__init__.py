from .memory_visit_repository import InMemoryVisitRecordRepository
from .visit_record_repository import (
    PostgresVisitRecordRepository,
    SQLAlchemyVisitRecordRepository,
    SQLiteVisitRecordRepository,
)
from .factory import build_visit_record_repository

__all__ = [
    "InMemoryVisitRecordRepository",
    "PostgresVisitRecordRepository",
    "SQLAlchemyVisitRecordRepository",
    "SQLiteVisitRecordRepository",
    "build_visit_record_repository",
]
