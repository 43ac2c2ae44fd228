"""Closed classification of visits."""

from enum import Enum
from typing import Any


class VisitCategory(str, Enum):
    """The three kinds of psychosocial service visit."""

    PSYCHOLOGICAL = "Psychological"
    PEDAGOGICAL = "Pedagogical"
    SOCIAL_ASSISTANCE = "SocialAssistance"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value: Any) -> "VisitCategory | None":
        """Return the matching member, or ``None`` for anything outside the enumeration."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None
