"""In-memory repository: process-local storage for demos and tests."""

import asyncio
import logging
from dataclasses import replace
from datetime import datetime, timezone

from visitlog.application.interfaces import QueryResult, VisitRecordRepository
from visitlog.domain.categories import VisitCategory
from visitlog.domain.entities import StoredVisit, VisitRecord
from visitlog.domain.exceptions import ConstraintError
from visitlog.domain.validators import normalize_visit_date
from visitlog.infrastructure.database.models import CATEGORY_CONSTRAINT

logger = logging.getLogger(__name__)


def _category_value(record: VisitRecord) -> str:
    category = VisitCategory.parse(record.category)
    if category is None:
        raise ConstraintError(CATEGORY_CONSTRAINT, f"unknown category {record.category!r}")
    return category.value


def _sorted(rows) -> list[StoredVisit]:
    return sorted(rows, key=lambda row: (row.visit_date, row.id), reverse=True)


class InMemoryVisitRecordRepository(VisitRecordRepository):
    """Implements the VisitRecordRepository port on a dict guarded by an asyncio lock."""

    def __init__(self) -> None:
        self._rows: dict[int, StoredVisit] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def insert(self, record: VisitRecord) -> StoredVisit:
        category = _category_value(record)
        async with self._lock:
            now = datetime.now(timezone.utc)
            row = StoredVisit(
                id=self._next_id,
                name=record.client_name,
                professional=record.professional_name,
                visit_date=normalize_visit_date(record.visit_date),
                category=category,
                notes=record.notes or "",
                created_at=now,
                updated_at=now,
            )
            self._rows[row.id] = row
            self._next_id += 1
        logger.debug("Inserted visit %d", row.id)
        return row

    async def find_by_id(self, visit_id: int) -> StoredVisit | None:
        return self._rows.get(visit_id)

    async def list_all(self) -> QueryResult:
        return QueryResult.of(_sorted(self._rows.values()))

    async def list_by_category(self, category: VisitCategory) -> QueryResult:
        rows = [row for row in self._rows.values() if row.category == category.value]
        return QueryResult.of(_sorted(rows))

    async def update(self, visit_id: int, record: VisitRecord) -> StoredVisit | None:
        category = _category_value(record)
        async with self._lock:
            current = self._rows.get(visit_id)
            if current is None:
                return None
            row = replace(
                current,
                name=record.client_name,
                professional=record.professional_name,
                visit_date=normalize_visit_date(record.visit_date),
                category=category,
                notes=record.notes or "",
                updated_at=datetime.now(timezone.utc),
            )
            self._rows[visit_id] = row
        logger.debug("Updated visit %d", visit_id)
        return row

    async def remove(self, visit_id: int) -> int:
        async with self._lock:
            removed = self._rows.pop(visit_id, None)
        if removed is None:
            return 0
        logger.debug("Removed visit %d", visit_id)
        return 1

    async def aggregate_by_category(self) -> dict[VisitCategory, int]:
        counts = {category: 0 for category in VisitCategory}
        for row in self._rows.values():
            counts[VisitCategory(row.category)] += 1
        return counts

    async def count(self) -> int:
        return len(self._rows)
