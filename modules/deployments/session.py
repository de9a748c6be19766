"""Editing session for one deployment record.

``EditorSession`` is the single owner of a draft while it is open: the form
fields, the vehicle roster, the requirement ledger and the record being
edited (if any). Every editor operation goes through the session, which also
tracks the state machine::

    OPEN_NEW -> OPEN_DIRTY <-> OPEN_ERRORED
    any OPEN state -> FINALIZED (successful save) | DISCARDED (cancel)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Tuple

from utils import app_settings

from .exceptions import SessionClosedError
from .ledger import RequirementLedger
from .models import OperationalEvent, Role, VehicleType, VigilanceType, split_time_window
from .reconcile import dropped_assignments
from .roster import VehicleRoster
from .services import EventLifecycleController, SaveOutcome
from .validators import ValidationResult

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("code", "location", "date", "start", "end", "vigilance_type")
_UPPERCASE_FIELDS = {"code", "location"}


class SessionState(str, Enum):
    OPEN_NEW = "OpenNew"
    OPEN_DIRTY = "OpenDirty"
    OPEN_ERRORED = "OpenErrored"
    FINALIZED = "Finalized"
    DISCARDED = "Discarded"

    @property
    def is_open(self) -> bool:
        return self not in (SessionState.FINALIZED, SessionState.DISCARDED)


@dataclass(slots=True)
class DraftForm:
    """Mutable working copy of the record fields shown in the editor."""

    code: str = ""
    location: str = ""
    date: str = ""
    start: str = field(default_factory=lambda: app_settings.DEFAULT_START)
    end: str = field(default_factory=lambda: app_settings.DEFAULT_END)
    vigilance_type: VigilanceType = VigilanceType.STANDARD
    vehicles: VehicleRoster = field(default_factory=VehicleRoster)

    @classmethod
    def from_event(cls, event: OperationalEvent) -> "DraftForm":
        start, end = split_time_window(event.time_window)
        return cls(
            code=event.code,
            location=event.location,
            date=event.date,
            start=start,
            end=end,
            vigilance_type=event.vigilance_type,
            vehicles=VehicleRoster(event.vehicles),
        )


class EditorSession:
    """Session-scoped context for creating or editing one record."""

    def __init__(
        self,
        default_date: str = "",
        initial_event: Optional[OperationalEvent] = None,
        *,
        controller: Optional[EventLifecycleController] = None,
        on_save: Optional[Callable[[OperationalEvent], None]] = None,
        on_cancel: Optional[Callable[[], None]] = None,
    ) -> None:
        self.previous = initial_event
        if initial_event is not None:
            self.form = DraftForm.from_event(initial_event)
            self.ledger = RequirementLedger.from_event(initial_event)
        else:
            self.form = DraftForm(date=default_date)
            self.ledger = RequirementLedger.baseline()
        self.controller = controller or EventLifecycleController()
        self.state = SessionState.OPEN_NEW
        self.field_errors: FrozenSet[str] = frozenset()
        self.global_error: Optional[str] = None
        self.result: Optional[OperationalEvent] = None
        self._on_save = on_save
        self._on_cancel = on_cancel

    # -- State helpers ------------------------------------------------------
    @property
    def is_edit(self) -> bool:
        return self.previous is not None

    def _require_open(self) -> None:
        if not self.state.is_open:
            raise SessionClosedError(self.state.value)

    def _touch(self) -> None:
        self._require_open()
        self.state = SessionState.OPEN_DIRTY

    # -- Form fields --------------------------------------------------------
    def set_field(self, name: str, value: Any) -> None:
        """Update a form field, clearing its error and the summary message."""
        if name not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown field: {name}")
        self._require_open()
        if name == "vigilance_type":
            value = VigilanceType.normalize(value)
        elif name in _UPPERCASE_FIELDS:
            value = (value or "").upper()
        else:
            value = value or ""
        self._touch()
        setattr(self.form, name, value)
        if name in self.field_errors:
            self.field_errors = self.field_errors - {name}
        self.global_error = None

    # -- Vehicles -----------------------------------------------------------
    def add_vehicle(self, vehicle_type: "VehicleType | str") -> None:
        self._touch()
        self.form.vehicles.add_vehicle(vehicle_type)

    def remove_vehicle_at(self, index: int) -> None:
        self._touch()
        self.form.vehicles.remove_vehicle_at(index)

    def set_plate(self, index: int, value: str) -> None:
        self._touch()
        self.form.vehicles.set_plate(index, value)

    # -- Requirements -------------------------------------------------------
    def increment(self, role: "Role | str") -> int:
        self._touch()
        return self.ledger.increment(role)

    def decrement(self, role: "Role | str") -> int:
        self._touch()
        return self.ledger.decrement(role)

    def pending_losses(self) -> Dict[Role, List[Tuple[int, Any]]]:
        """Filled slots per role that saving with the current quantities would drop."""
        if self.previous is None:
            return {}
        losses = {}
        for role, qty in self.ledger.items():
            lost = dropped_assignments(qty, self.previous.requirement_for(role))
            if lost:
                losses[role] = lost
        return losses

    # -- Lifecycle ----------------------------------------------------------
    def save(self) -> SaveOutcome:
        """Finalize the draft, or record the validation errors and stay open."""
        self._require_open()
        outcome = self.controller.save(self.form, self.ledger, self.previous)
        if isinstance(outcome, ValidationResult):
            self.state = SessionState.OPEN_ERRORED
            self.field_errors = outcome.field_errors
            self.global_error = outcome.message
            return outcome
        self.state = SessionState.FINALIZED
        self.field_errors = frozenset()
        self.global_error = None
        self.result = outcome
        if self._on_save is not None:
            self._on_save(outcome)
        return outcome

    def cancel(self) -> None:
        self._require_open()
        self.state = SessionState.DISCARDED
        logger.debug(
            "[deployments] editing session discarded (%s)",
            self.previous.id if self.previous else "new",
        )
        if self._on_cancel is not None:
            self._on_cancel()


__all__ = ["DraftForm", "EditorSession", "EDITABLE_FIELDS", "SessionState"]
