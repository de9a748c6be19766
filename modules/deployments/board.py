"""In-memory deployment board.

The board is the store finalized records are handed to. It keeps the list of
records shown on the dashboard, applies insert-or-replace by id and tracks
the date the dashboard is currently showing.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .exceptions import EventNotFound
from .models import OperationalEvent
from .services import EventLifecycleController
from .session import EditorSession

logger = logging.getLogger(__name__)


class EventBoard:
    def __init__(
        self,
        events: Iterable[OperationalEvent] = (),
        selected_date: str = "",
        controller: Optional[EventLifecycleController] = None,
    ) -> None:
        self._events: List[OperationalEvent] = list(events)
        self._selected_date = selected_date
        self.controller = controller or EventLifecycleController()

    # ------------------------------------------------------------------
    @property
    def selected_date(self) -> str:
        return self._selected_date

    def set_selected_date(self, value: str) -> None:
        if value == self._selected_date:
            return
        self._selected_date = value
        try:
            from utils.app_signals import app_signals

            app_signals.selectedDateChanged.emit(value)
        except Exception as e:
            logger.warning("[board] failed to emit selectedDateChanged: %s", e)

    # ------------------------------------------------------------------
    def list_events(self) -> List[OperationalEvent]:
        return list(self._events)

    def events_for(self, date: Optional[str] = None) -> List[OperationalEvent]:
        if not date:
            return self.list_events()
        return [event for event in self._events if event.date == date]

    def get(self, event_id: str) -> Optional[OperationalEvent]:
        for event in self._events:
            if event.id == event_id:
                return event
        return None

    def _index_of(self, event_id: str) -> Optional[int]:
        for idx, event in enumerate(self._events):
            if event.id == event_id:
                return idx
        return None

    # ------------------------------------------------------------------
    # Editor callbacks
    def on_save(self, event: OperationalEvent) -> None:
        """Store a finalized record: replace by id, otherwise prepend."""
        idx = self._index_of(event.id)
        if idx is None:
            self._events.insert(0, event)
            logger.info("[board] added %s on %s", event.id, event.date)
        else:
            self._events[idx] = event
            logger.info("[board] replaced %s on %s", event.id, event.date)
        self.set_selected_date(event.date)

    def on_cancel(self) -> None:
        logger.debug("[board] editing cancelled")

    # ------------------------------------------------------------------
    # Session factories
    def start_create(self) -> EditorSession:
        return EditorSession(
            self._selected_date,
            controller=self.controller,
            on_save=self.on_save,
            on_cancel=self.on_cancel,
        )

    def start_edit(self, event_id: str) -> EditorSession:
        event = self.get(event_id)
        if event is None:
            raise EventNotFound(event_id)
        return EditorSession(
            self._selected_date,
            event,
            controller=self.controller,
            on_save=self.on_save,
            on_cancel=self.on_cancel,
        )


__all__ = ["EventBoard"]
