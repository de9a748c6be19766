"""QObject bridge exposing an editing session to Qt panels and QML."""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal, Slot

from .models import OperationalEvent
from .session import EditorSession
from .validators import ValidationResult

logger = logging.getLogger(__name__)


class DeploymentEditorBridge(QObject):
    """Wraps one :class:`EditorSession` behind Qt slots and signals.

    ``saved`` carries the finalized ``OperationalEvent``; ``validationFailed``
    carries the sorted failing field names and the summary message.
    """

    saved = Signal(object)
    cancelled = Signal()
    validationFailed = Signal(list, str)
    draftChanged = Signal()

    def __init__(self, session: EditorSession, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._session = session

    @property
    def session(self) -> EditorSession:
        return self._session

    # ------------------------------------------------------------------
    @Slot(str, str)
    def setField(self, name: str, value: str) -> None:
        self._session.set_field(name, value)
        self.draftChanged.emit()

    @Slot(str)
    def addVehicle(self, vehicle_type: str) -> None:
        self._session.add_vehicle(vehicle_type)
        self.draftChanged.emit()

    @Slot(int)
    def removeVehicleAt(self, index: int) -> None:
        self._session.remove_vehicle_at(index)
        self.draftChanged.emit()

    @Slot(int, str)
    def setPlate(self, index: int, value: str) -> None:
        self._session.set_plate(index, value)
        self.draftChanged.emit()

    @Slot(str, result=int)
    def incrementRole(self, role: str) -> int:
        qty = self._session.increment(role)
        self.draftChanged.emit()
        return qty

    @Slot(str, result=int)
    def decrementRole(self, role: str) -> int:
        qty = self._session.decrement(role)
        self.draftChanged.emit()
        return qty

    # ------------------------------------------------------------------
    @Slot(result=bool)
    def save(self) -> bool:
        outcome = self._session.save()
        if isinstance(outcome, ValidationResult):
            self.validationFailed.emit(sorted(outcome.field_errors), outcome.message or "")
            return False
        self._broadcast_saved(outcome)
        self.saved.emit(outcome)
        return True

    @Slot()
    def cancel(self) -> None:
        self._session.cancel()
        try:
            from utils.app_signals import app_signals

            app_signals.editCancelled.emit()
        except Exception as e:
            logger.warning("[deployments] failed to emit editCancelled: %s", e)
        self.cancelled.emit()

    def _broadcast_saved(self, event: OperationalEvent) -> None:
        try:
            from utils.app_signals import app_signals

            app_signals.eventSaved.emit(event)
        except Exception as e:
            logger.warning("[deployments] failed to emit eventSaved: %s", e)


__all__ = ["DeploymentEditorBridge"]
