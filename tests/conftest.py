from __future__ import annotations

import os

# Qt objects require a platform plugin.  Offscreen avoids libGL dependencies
# inside the test container.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
from modules.deployments.models import (
    EventStatus,
    OperationalEvent,
    PersonnelRequirement,
    Role,
    VehicleEntry,
    VehicleType,
    VigilanceType,
)


@pytest.fixture(scope="session")
def qt_app():
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


@pytest.fixture()
def existing_event() -> OperationalEvent:
    """A published record with some slots already filled from the staff roster."""
    return OperationalEvent(
        id="EV-1234",
        code="VIGILANZA STADIO",
        location="STADIO OLIMPICO",
        date="2026-02-17",
        time_window="18:00 - 23:30",
        vigilance_type=VigilanceType.RINFORZI,
        status=EventStatus.PUBBLICATO,
        requirements=(
            PersonnelRequirement(Role.DIR, 2, ("P1", "P2"), ("G1", "G2")),
            PersonnelRequirement(Role.CP, 1, ("P5",)),
            PersonnelRequirement(Role.VIG, 1, ("P9",)),
            PersonnelRequirement(Role.ALTRO, 0, ()),
        ),
        vehicles=(
            VehicleEntry(VehicleType.APS, "VF-12345"),
            VehicleEntry(VehicleType.AUTO, ""),
        ),
    )
