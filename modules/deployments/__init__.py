"""Deployment record ("servizio") editor: composition, validation and reconciliation."""

from .board import EventBoard
from .exceptions import DeploymentError, EventNotFound, SessionClosedError
from .ledger import RequirementLedger
from .models import (
    EventStatus,
    OperationalEvent,
    PersonnelRequirement,
    Role,
    VehicleEntry,
    VehicleType,
    VigilanceType,
)
from .reconcile import dropped_assignments, reconcile_requirement, reconcile_requirements
from .roster import VehicleRoster
from .services import EventLifecycleController
from .session import DraftForm, EditorSession, SessionState
from .validators import ValidationResult, validate_draft


def get_editor_bridge(session, parent=None):
    from .bridge import DeploymentEditorBridge as _impl

    return _impl(session, parent)


__all__ = [
    "DeploymentError",
    "DraftForm",
    "EditorSession",
    "EventBoard",
    "EventLifecycleController",
    "EventNotFound",
    "EventStatus",
    "OperationalEvent",
    "PersonnelRequirement",
    "RequirementLedger",
    "Role",
    "SessionClosedError",
    "SessionState",
    "ValidationResult",
    "VehicleEntry",
    "VehicleRoster",
    "VehicleType",
    "VigilanceType",
    "dropped_assignments",
    "get_editor_bridge",
    "reconcile_requirement",
    "reconcile_requirements",
    "validate_draft",
]
