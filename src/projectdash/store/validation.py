"""Field checks shared by the store's create and update operations.

Each helper either returns the normalized value or raises
:class:`~projectdash.exceptions.ValidationError` naming the entity and field.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, TypeVar

from ..exceptions import ValidationError
from .entities import LabeledEnum

E = TypeVar("E", bound=LabeledEnum)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_text(value: Any, entity: str, field: str) -> str:
    """Return ``value`` as a string; reject None and whitespace-only text."""
    if _is_blank(value):
        raise ValidationError(entity, field, "is required")
    return str(value)


def require_enum(enum_cls: type[E], value: Any, entity: str, field: str) -> E:
    """Parse ``value`` into ``enum_cls``; empty or unknown values are rejected."""
    if _is_blank(value):
        raise ValidationError(entity, field, "is required")
    try:
        return enum_cls.parse(value)  # type: ignore[return-value]
    except ValueError:
        raise ValidationError(entity, field, f"has unknown value {value!r}")


def require_date(value: Any, entity: str, field: str) -> date:
    """Accept a ``date`` or an ISO ``YYYY-MM-DD`` string that names a real day."""
    if _is_blank(value):
        raise ValidationError(entity, field, "is required")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise ValidationError(entity, field, f"is not a valid date: {value!r}")
    raise ValidationError(entity, field, f"is not a valid date: {value!r}")


def require_progress(value: Any, entity: str = "project", field: str = "progress") -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(entity, field, f"must be an integer, got {value!r}")
    if not 0 <= value <= 100:
        raise ValidationError(entity, field, "must be between 0 and 100")
    return value


def optional_ref(value: Any) -> Optional[str]:
    """Normalize an optional reference: blank means absent."""
    if _is_blank(value):
        return None
    return str(value)
