from __future__ import annotations

import logging
from types import SimpleNamespace

from modules.deployments.board import EventBoard
from modules.deployments.bridge import DeploymentEditorBridge
from modules.deployments.models import Role


def test_bridge_save_emits_saved_and_updates_board(qt_app):
    board = EventBoard(selected_date="2026-02-17")
    bridge = DeploymentEditorBridge(board.start_create())
    saved = []
    changes = []
    bridge.saved.connect(lambda event: saved.append(event))
    bridge.draftChanged.connect(lambda: changes.append(1))

    bridge.setField("code", "vigilanza")
    bridge.setField("location", "piazza")
    bridge.addVehicle("APS")
    bridge.setPlate(0, "vf-1")
    assert bridge.incrementRole("VIG") == 2
    assert bridge.decrementRole("ALTRO") == 0
    assert bridge.save() is True

    assert len(saved) == 1
    assert board.list_events() == saved
    assert saved[0].requirement_for(Role.VIG).assigned_ids == (None, None)
    assert len(changes) == 6


def test_bridge_reports_validation_failure(qt_app):
    bridge = DeploymentEditorBridge(EventBoard().start_create())
    failures = []
    bridge.validationFailed.connect(lambda fields, message: failures.append((fields, message)))
    assert bridge.save() is False
    assert failures[0][0] == ["code", "date", "location"]
    assert failures[0][1]


def test_bridge_cancel(qt_app):
    bridge = DeploymentEditorBridge(EventBoard().start_create())
    cancelled = []
    bridge.cancelled.connect(lambda: cancelled.append(True))
    bridge.cancel()
    assert cancelled == [True]


class _BoomSignal:
    def emit(self, *args, **kwargs):
        raise RuntimeError("boom")


def test_cancel_logs_warning_on_signal_failure(monkeypatch, caplog, qt_app):
    failing = SimpleNamespace(editCancelled=_BoomSignal())
    monkeypatch.setattr("utils.app_signals.app_signals", failing)
    bridge = DeploymentEditorBridge(EventBoard().start_create())
    with caplog.at_level(logging.WARNING):
        bridge.cancel()
    assert "failed to emit editCancelled" in caplog.text
