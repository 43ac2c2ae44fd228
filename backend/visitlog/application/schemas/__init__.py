from .visit import (
    ValidationErrorResponse,
    VisitPayload,
    VisitResponse,
    VisitStatisticsResponse,
)

__all__ = [
    "ValidationErrorResponse",
    "VisitPayload",
    "VisitResponse",
    "VisitStatisticsResponse",
]
