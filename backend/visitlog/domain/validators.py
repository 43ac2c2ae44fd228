"""Pure validation predicates for visit record fields.

Every predicate returns a bool and never raises, so they can be used for
read-only inspection. ``validate_visit_fields`` collects every failing
rule instead of stopping at the first one.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any

from visitlog.domain.categories import VisitCategory

NAME_MIN_LENGTH = 2

NAME_ERROR = f"Name must have at least {NAME_MIN_LENGTH} characters"
PROFESSIONAL_ERROR = f"Professional must have at least {NAME_MIN_LENGTH} characters"
DATE_ERROR = "Invalid date"
CATEGORY_ERROR = "Category must be one of: " + ", ".join(VisitCategory.values())


@dataclass(frozen=True)
class ValidationResult:
    """Aggregated outcome of running every field predicate."""

    errors: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


def sanitize_text(value: Any) -> str:
    """Trim strings; anything that is not a string becomes an empty string."""
    return value.strip() if isinstance(value, str) else ""


def is_valid_name(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) >= NAME_MIN_LENGTH


def _parse_date(value: Any) -> date | None:
    """Best-effort conversion of a date-like input, ``None`` when it does not parse."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        # "Z" suffix is only accepted by fromisoformat on newer interpreters
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def is_valid_date(value: Any) -> bool:
    return _parse_date(value) is not None


def is_valid_category(value: Any) -> bool:
    return VisitCategory.parse(value) is not None


def normalize_visit_date(value: Any) -> date:
    """Convert a valid date input into its canonical calendar date.

    Raises ValueError when the value does not parse; callers are expected
    to validate first.
    """
    parsed = _parse_date(value)
    if parsed is None:
        raise ValueError(f"{DATE_ERROR}: {value!r}")
    return parsed


def validate_visit_fields(
    client_name: Any,
    professional_name: Any,
    visit_date: Any,
    category: Any,
) -> ValidationResult:
    """Run every field predicate and collect all violations."""
    errors: list[str] = []
    if not is_valid_name(client_name):
        errors.append(NAME_ERROR)
    if not is_valid_name(professional_name):
        errors.append(PROFESSIONAL_ERROR)
    if not is_valid_date(visit_date):
        errors.append(DATE_ERROR)
    if not is_valid_category(category):
        errors.append(CATEGORY_ERROR)
    return ValidationResult(errors=errors)
