"""Required-field checks that gate a draft before it is finalized."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, FrozenSet, List, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .session import DraftForm


REQUIRED_FIELDS = ["code", "location", "date"]
SUMMARY_MESSAGE = "Compila tutti i campi obbligatori per salvare il servizio."

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of :func:`validate_draft`; ``message`` is set only on failure."""

    valid: bool
    field_errors: FrozenSet[str] = field(default_factory=frozenset)
    message: Optional[str] = None


def is_calendar_date(value: str) -> bool:
    if not _DATE_RE.match(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def _failing_fields(form: "DraftForm") -> List[str]:
    errors = []
    if not (form.code or "").strip():
        errors.append("code")
    if not (form.location or "").strip():
        errors.append("location")
    date_value = (form.date or "").strip()
    if not date_value or not is_calendar_date(date_value):
        errors.append("date")
    return errors


def validate_draft(form: "DraftForm") -> ValidationResult:
    """Check the required fields of ``form`` without touching it.

    Quantities and vehicles are never validated: zero-quantity roles and
    vehicles without a plate are accepted.
    """
    errors = _failing_fields(form)
    if errors:
        return ValidationResult(valid=False, field_errors=frozenset(errors), message=SUMMARY_MESSAGE)
    return ValidationResult(valid=True)


__all__ = [
    "REQUIRED_FIELDS",
    "SUMMARY_MESSAGE",
    "ValidationResult",
    "is_calendar_date",
    "validate_draft",
]
