"""Application service (use case) for visit record operations."""

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from visitlog.application.interfaces import VisitRecordRepository
from visitlog.domain.categories import VisitCategory
from visitlog.domain.entities import VisitRecord, VisitStatistics
from visitlog.domain.exceptions import StoreError, ValidationError
from visitlog.domain.validators import CATEGORY_ERROR

logger = logging.getLogger(__name__)


@contextmanager
def _store_call(operation: str) -> Iterator[None]:
    """Surface repository failures as StoreError, logging the original."""
    try:
        yield
    except StoreError:
        logger.exception("Store error during %s", operation)
        raise
    except Exception as exc:
        logger.exception("Unexpected repository failure during %s", operation)
        raise StoreError(f"Failed to {operation}") from exc


class VisitService:
    """Orchestrates visit CRUD logic. Depends on the repository port (DI).

    Every mutating call re-validates the full record before the
    repository is touched, so a rejected request never writes anything.
    """

    def __init__(self, repository: VisitRecordRepository):
        self._repository = repository

    def _prepare(self, data: Mapping[str, Any] | None) -> VisitRecord:
        record = VisitRecord.from_input(data)
        result = record.validate()
        if not result.valid:
            raise ValidationError(result.errors)
        return record.update(visit_date=record.visit_date)

    async def create(self, data: Mapping[str, Any] | None) -> VisitRecord:
        record = self._prepare(data)
        with _store_call("create visit"):
            row = await self._repository.insert(record)
        logger.info("Created visit %d (%s)", row.id, row.category)
        return VisitRecord.from_stored_row(row)

    async def update(self, visit_id: int, data: Mapping[str, Any] | None) -> VisitRecord | None:
        with _store_call("load visit"):
            existing = await self._repository.find_by_id(visit_id)
        if existing is None:
            return None

        record = self._prepare(data)
        with _store_call("update visit"):
            row = await self._repository.update(visit_id, record)
        if row is None:
            # Removed between the lookup and the write
            return None
        logger.info("Updated visit %d", visit_id)
        return VisitRecord.from_stored_row(row)

    async def remove(self, visit_id: int) -> bool:
        with _store_call("remove visit"):
            removed = await self._repository.remove(visit_id)
        if removed:
            logger.info("Removed visit %d", visit_id)
        return removed > 0

    async def list_all(self) -> list[VisitRecord]:
        with _store_call("list visits"):
            result = await self._repository.list_all()
        return [VisitRecord.from_stored_row(row) for row in result.rows]

    async def list_by_category(self, category: VisitCategory | str) -> list[VisitRecord]:
        parsed = VisitCategory.parse(category)
        if parsed is None:
            raise ValidationError([CATEGORY_ERROR])
        with _store_call("list visits by category"):
            result = await self._repository.list_by_category(parsed)
        return [VisitRecord.from_stored_row(row) for row in result.rows]

    async def find_by_id(self, visit_id: int) -> VisitRecord | None:
        with _store_call("load visit"):
            row = await self._repository.find_by_id(visit_id)
        return VisitRecord.from_stored_row(row) if row else None

    async def statistics(self) -> VisitStatistics:
        with _store_call("aggregate visits"):
            counts = await self._repository.aggregate_by_category()
        return VisitStatistics.from_counts(counts)

    async def is_empty(self) -> bool:
        with _store_call("count visits"):
            return await self._repository.count() == 0
