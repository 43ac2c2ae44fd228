"""Domain entity: an immutable view of one psychosocial service visit."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any

from visitlog.domain.categories import VisitCategory
from visitlog.domain.exceptions import InvalidFieldError
from visitlog.domain.validators import (
    CATEGORY_ERROR,
    DATE_ERROR,
    NAME_ERROR,
    PROFESSIONAL_ERROR,
    ValidationResult,
    is_valid_category,
    is_valid_date,
    is_valid_name,
    normalize_visit_date,
    sanitize_text,
    validate_visit_fields,
)

# Input keys accepted for each attribute, first match wins.
_INPUT_KEYS: dict[str, tuple[str, ...]] = {
    "client_name": ("name", "clientName", "client_name"),
    "professional_name": ("professional", "professionalName", "professional_name"),
    "visit_date": ("visitDate", "visit_date"),
    "category": ("category",),
    "notes": ("notes",),
}


def _pick(data: Mapping[str, Any], attribute: str) -> Any:
    for key in _INPUT_KEYS[attribute]:
        if key in data:
            return data[key]
    return None


@dataclass(frozen=True)
class StoredVisit:
    """A row as persisted by a repository, already trusted as valid."""

    id: int
    name: str
    professional: str
    visit_date: date
    category: str
    notes: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class VisitRecord:
    """Core domain entity for a single visit.

    Instances built with ``from_input`` may hold invalid data; nothing is
    checked until ``validate()`` runs. ``update()`` is the mutation
    boundary: it checks every changed field and returns a new record.
    """

    client_name: str = ""
    professional_name: str = ""
    visit_date: date | str | None = None
    category: VisitCategory | str | None = None
    notes: str = ""
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_input(cls, data: Mapping[str, Any] | None) -> "VisitRecord":
        """Wrap raw input; unknown keys are ignored and missing ones default."""
        data = data or {}
        category = _pick(data, "category")
        return cls(
            client_name=sanitize_text(_pick(data, "client_name")),
            professional_name=sanitize_text(_pick(data, "professional_name")),
            visit_date=_pick(data, "visit_date"),
            category=VisitCategory.parse(category) or category,
            notes=sanitize_text(_pick(data, "notes")),
        )

    @classmethod
    def from_stored_row(cls, row: StoredVisit) -> "VisitRecord":
        return cls(
            id=row.id,
            client_name=row.name,
            professional_name=row.professional,
            visit_date=row.visit_date,
            category=VisitCategory.parse(row.category) or row.category,
            notes=row.notes or "",
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def update(self, **changes: Any) -> "VisitRecord":
        """Return a copy with ``changes`` applied, rejecting any invalid field."""
        cleaned: dict[str, Any] = {}
        for name, value in changes.items():
            if name == "client_name":
                if not is_valid_name(value):
                    raise InvalidFieldError(name, NAME_ERROR)
                cleaned[name] = value.strip()
            elif name == "professional_name":
                if not is_valid_name(value):
                    raise InvalidFieldError(name, PROFESSIONAL_ERROR)
                cleaned[name] = value.strip()
            elif name == "visit_date":
                if not is_valid_date(value):
                    raise InvalidFieldError(name, DATE_ERROR)
                cleaned[name] = normalize_visit_date(value)
            elif name == "category":
                if not is_valid_category(value):
                    raise InvalidFieldError(name, CATEGORY_ERROR)
                cleaned[name] = VisitCategory.parse(value)
            elif name == "notes":
                cleaned[name] = sanitize_text(value)
            else:
                raise InvalidFieldError(name, f"Unknown or read-only field '{name}'")
        return replace(self, **cleaned)

    def validate(self) -> ValidationResult:
        return validate_visit_fields(
            self.client_name,
            self.professional_name,
            self.visit_date,
            self.category,
        )

    def serialize(self) -> dict[str, Any]:
        """Canonical, field-ordered representation used on the wire."""
        visit_date = self.visit_date
        if isinstance(visit_date, (date, datetime)):
            visit_date = visit_date.isoformat()
        category = self.category.value if isinstance(self.category, VisitCategory) else self.category
        return {
            "id": self.id,
            "name": self.client_name,
            "professional": self.professional_name,
            "visitDate": visit_date,
            "category": category,
            "notes": self.notes,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
