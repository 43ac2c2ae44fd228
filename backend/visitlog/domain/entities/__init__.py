from visitlog.domain.categories import VisitCategory
from .visit_record import StoredVisit, VisitRecord
from .visit_statistics import VisitStatistics

__all__ = [
    "StoredVisit",
    "VisitCategory",
    "VisitRecord",
    "VisitStatistics",
]
