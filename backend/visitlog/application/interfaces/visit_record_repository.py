"""Abstract repository interface (port) for visit record persistence."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from visitlog.domain.categories import VisitCategory
from visitlog.domain.entities import StoredVisit, VisitRecord


@dataclass(frozen=True)
class QueryResult:
    """Uniform result shape returned by every backend."""

    rows: list[StoredVisit] = field(default_factory=list)
    row_count: int = 0

    @classmethod
    def of(cls, rows: list[StoredVisit]) -> "QueryResult":
        return cls(rows=list(rows), row_count=len(rows))


class VisitRecordRepository(ABC):
    """Port for visit persistence: implemented in the infrastructure layer.

    Implementations must agree on ordering (visit date descending, then
    id descending) and on returning ``None``/``0`` rather than raising
    when an id does not exist.
    """

    async def initialize(self) -> None:
        """Prepare the backing store (create tables, open connections)."""

    async def close(self) -> None:
        """Release any resources held by the backing store."""

    @abstractmethod
    async def insert(self, record: VisitRecord) -> StoredVisit:
        """Persist a new visit and return it with its generated id and timestamps."""
        ...

    @abstractmethod
    async def find_by_id(self, visit_id: int) -> StoredVisit | None:
        """Retrieve a single visit, or ``None`` when absent."""
        ...

    @abstractmethod
    async def list_all(self) -> QueryResult:
        """Retrieve every visit, most recent visit date first."""
        ...

    @abstractmethod
    async def list_by_category(self, category: VisitCategory) -> QueryResult:
        """Retrieve the visits of one category, most recent visit date first."""
        ...

    @abstractmethod
    async def update(self, visit_id: int, record: VisitRecord) -> StoredVisit | None:
        """Replace the editable fields of a visit. Returns ``None`` if not found."""
        ...

    @abstractmethod
    async def remove(self, visit_id: int) -> int:
        """Delete a visit. Returns the number of rows removed."""
        ...

    @abstractmethod
    async def aggregate_by_category(self) -> dict[VisitCategory, int]:
        """Count visits per category; categories without visits map to 0."""
        ...

    @abstractmethod
    async def count(self) -> int:
        """Total number of stored visits."""
        ...
