from __future__ import annotations

from PySide6.QtCore import QObject, Signal


class AppSignals(QObject):
    """Global Qt signals for app-wide events.

    Panels can subscribe to these to stay in sync with the deployment board.
    """

    # Emitted with the finalized OperationalEvent handed to the board
    eventSaved = Signal(object)
    # Emitted when an editing session is discarded
    editCancelled = Signal()
    # Emitted with the ISO date the dashboard should display
    selectedDateChanged = Signal(str)


# Global singleton instance
app_signals = AppSignals()


__all__ = ["app_signals", "AppSignals"]
