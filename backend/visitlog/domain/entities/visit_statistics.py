"""Aggregated visit counts per category."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from visitlog.domain.categories import VisitCategory


@dataclass(frozen=True)
class VisitStatistics:
    """Per-category counts; every category is always present."""

    by_category: dict[VisitCategory, int] = field(
        default_factory=lambda: {category: 0 for category in VisitCategory}
    )

    @classmethod
    def from_counts(cls, counts: Mapping[Any, int]) -> "VisitStatistics":
        """Build from raw counts, zero-filling absent categories and dropping unknown keys."""
        by_category = {category: 0 for category in VisitCategory}
        for key, value in counts.items():
            category = VisitCategory.parse(key)
            if category is not None:
                by_category[category] += max(int(value), 0)
        return cls(by_category=by_category)

    @property
    def total(self) -> int:
        return sum(self.by_category.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "byCategory": {category.value: count for category, count in self.by_category.items()},
        }
