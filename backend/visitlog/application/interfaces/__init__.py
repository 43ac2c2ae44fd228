from .visit_record_repository import QueryResult, VisitRecordRepository

__all__ = [
    "QueryResult",
    "VisitRecordRepository",
]
