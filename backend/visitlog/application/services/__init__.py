from .visit_service import VisitService
from .sample_data import SAMPLE_VISITS, seed_sample_visits

__all__ = [
    "VisitService",
    "SAMPLE_VISITS",
    "seed_sample_visits",
]
