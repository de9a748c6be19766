from __future__ import annotations

from dataclasses import replace

import pytest

from modules.deployments.board import EventBoard
from modules.deployments.exceptions import EventNotFound
from modules.deployments.models import Role
from modules.deployments.session import SessionState


def test_new_record_is_prepended_and_selects_its_date(existing_event, qt_app):
    from utils.app_signals import app_signals

    seen = []

    def _on_date(value):
        seen.append(value)

    app_signals.selectedDateChanged.connect(_on_date)
    try:
        board = EventBoard([existing_event], selected_date="2026-02-17")
        session = board.start_create()
        assert session.form.date == "2026-02-17"
        session.set_field("code", "presidio")
        session.set_field("location", "palazzo del ghiaccio")
        session.set_field("date", "2026-02-20")
        event = session.save()
    finally:
        app_signals.selectedDateChanged.disconnect(_on_date)

    assert board.list_events() == [event, existing_event]
    assert board.selected_date == "2026-02-20"
    assert seen == ["2026-02-20"]


def test_edit_replaces_in_place(existing_event):
    other = replace(existing_event, id="EV-2")
    board = EventBoard([other, existing_event])
    session = board.start_edit(existing_event.id)
    session.decrement(Role.DIR)
    event = session.save()

    assert [e.id for e in board.list_events()] == ["EV-2", existing_event.id]
    assert board.get(existing_event.id) is event
    assert board.selected_date == existing_event.date


def test_start_edit_unknown_id():
    with pytest.raises(EventNotFound):
        EventBoard().start_edit("EV-404")


def test_cancel_leaves_board_unchanged(existing_event):
    board = EventBoard([existing_event], selected_date="2026-02-01")
    session = board.start_edit(existing_event.id)
    session.increment(Role.VIG)
    session.cancel()
    assert session.state is SessionState.DISCARDED
    assert board.list_events() == [existing_event]
    assert board.selected_date == "2026-02-01"


def test_events_for_date(existing_event):
    board = EventBoard([existing_event])
    assert board.events_for("2026-02-17") == [existing_event]
    assert board.events_for("2026-02-18") == []
    assert board.events_for(None) == [existing_event]
