from __future__ import annotations

import random

from modules.deployments.ledger import RequirementLedger
from modules.deployments.models import OperationalEvent, PersonnelRequirement, Role, VigilanceType


def test_baseline_quantities_in_order():
    ledger = RequirementLedger.baseline()
    assert ledger.items() == [(Role.DIR, 1), (Role.CP, 1), (Role.VIG, 1), (Role.ALTRO, 0)]


def test_decrement_clamps_at_zero():
    ledger = RequirementLedger.baseline()
    assert ledger.decrement("ALTRO") == 0
    assert ledger.decrement(Role.DIR) == 0
    assert ledger.decrement(Role.DIR) == 0
    assert ledger.increment(Role.DIR) == 1


def test_random_sequences_never_go_negative():
    rng = random.Random(1234)
    ledger = RequirementLedger.baseline()
    roles = list(Role)
    for _ in range(500):
        role = rng.choice(roles)
        if rng.random() < 0.6:
            ledger.decrement(role)
        else:
            ledger.increment(role)
        assert all(qty >= 0 for _, qty in ledger.items())
    assert [role for role, _ in ledger.items()] == roles


def test_from_event_projects_quantities_only(existing_event):
    ledger = RequirementLedger.from_event(existing_event)
    assert ledger.as_dict() == {"DIR": 2, "CP": 1, "VIG": 1, "ALTRO": 0}


def test_from_event_fills_missing_roles():
    event = OperationalEvent(
        id="EV-9",
        code="A",
        location="B",
        date="2026-03-01",
        time_window="08:00 - 16:00",
        vigilance_type=VigilanceType.STANDARD,
        requirements=(PersonnelRequirement(Role.VIG, 3, (None, None, None)),),
    )
    ledger = RequirementLedger.from_event(event)
    assert ledger.items() == [(Role.VIG, 3), (Role.DIR, 0), (Role.CP, 0), (Role.ALTRO, 0)]


def test_from_quantities_overrides_baseline():
    ledger = RequirementLedger.from_quantities({"VIG": 4, Role.ALTRO: -2})
    assert ledger.as_dict() == {"DIR": 1, "CP": 1, "VIG": 4, "ALTRO": 0}


def test_from_quantities_on_existing_event_keeps_unlisted_roles(existing_event):
    ledger = RequirementLedger.from_quantities({"VIG": 3}, base=existing_event)
    assert ledger.as_dict() == {"DIR": 2, "CP": 1, "VIG": 3, "ALTRO": 0}
