"""Finalization of edited drafts into immutable deployment records."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional, Union
from uuid import uuid4

from utils import app_settings

from .ledger import RequirementLedger
from .models import (
    EventStatus,
    OperationalEvent,
    VigilanceType,
    format_time_window,
)
from .reconcile import reconcile_requirements
from .validators import ValidationResult, validate_draft

if TYPE_CHECKING:  # pragma: no cover
    from .session import DraftForm

logger = logging.getLogger(__name__)

SaveOutcome = Union[OperationalEvent, ValidationResult]


def new_event_id() -> str:
    return f"{app_settings.EVENT_ID_PREFIX}{uuid4().hex[:8].upper()}"


class EventLifecycleController:
    """Turns a validated draft plus its working ledger into an OperationalEvent.

    The controller holds no draft state of its own; the editing session passes
    everything in on each call.
    """

    def __init__(self, id_factory: Optional[Callable[[], str]] = None) -> None:
        self._id_factory = id_factory or new_event_id

    def save(
        self,
        form: "DraftForm",
        ledger: RequirementLedger,
        previous: Optional[OperationalEvent] = None,
    ) -> SaveOutcome:
        """Validate ``form`` and build the finalized record.

        Returns the :class:`ValidationResult` unchanged when validation fails;
        no record is built in that case.
        """
        result = validate_draft(form)
        if not result.valid:
            logger.debug(
                "[deployments] save blocked, missing fields: %s",
                sorted(result.field_errors),
            )
            return result

        if previous is not None:
            event_id = previous.id
            status = previous.status
        else:
            event_id = self._id_factory()
            status = EventStatus.IN_COMPILAZIONE

        event = OperationalEvent(
            id=event_id,
            code=form.code.upper(),
            location=form.location.upper(),
            date=form.date.strip(),
            time_window=format_time_window(form.start, form.end),
            vigilance_type=VigilanceType.normalize(form.vigilance_type),
            status=status,
            requirements=reconcile_requirements(ledger, previous),
            vehicles=form.vehicles.entries(),
        )
        logger.info(
            "[deployments] %s %s (%s, %s)",
            "updated" if previous is not None else "created",
            event.id,
            event.code,
            event.date,
        )
        return event


__all__ = ["EventLifecycleController", "SaveOutcome", "new_event_id"]
