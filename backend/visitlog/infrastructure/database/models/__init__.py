from .visit_record import CATEGORY_CONSTRAINT, MAX_VISIT_ID, VisitRecordModel

__all__ = [
    "CATEGORY_CONSTRAINT",
    "MAX_VISIT_ID",
    "VisitRecordModel",
]
