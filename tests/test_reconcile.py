from __future__ import annotations

import logging

import pytest

from modules.deployments.ledger import RequirementLedger
from modules.deployments.models import PersonnelRequirement, Role
from modules.deployments.reconcile import (
    dropped_assignments,
    reconcile_requirement,
    reconcile_requirements,
)


def _previous(*people, groups=None):
    return PersonnelRequirement(
        Role.VIG,
        len(people),
        tuple(people),
        tuple(groups) if groups is not None else None,
    )


@pytest.mark.parametrize("people", [(), ("P1",), ("P1", None, "P3")])
def test_same_quantity_is_identity(people):
    previous = _previous(*people)
    result = reconcile_requirement(Role.VIG, len(people), previous)
    assert result.assigned_ids == previous.assigned_ids


def test_growth_appends_empty_slots():
    previous = _previous("P1", "P2")
    result = reconcile_requirement(Role.VIG, 5, previous)
    assert result.qty == 5
    assert result.assigned_ids == ("P1", "P2", None, None, None)


def test_shrink_keeps_lowest_indices():
    previous = _previous("P1", "P2", "P3", "P4")
    result = reconcile_requirement(Role.VIG, 2, previous)
    assert result.assigned_ids == ("P1", "P2")
    assert reconcile_requirement(Role.VIG, 0, previous).assigned_ids == ()


def test_no_previous_gives_empty_slots_and_no_groups():
    result = reconcile_requirement("DIR", 3)
    assert result.role is Role.DIR
    assert result.assigned_ids == (None, None, None)
    assert result.entrusted_groups is None


def test_entrusted_groups_follow_assignments():
    previous = _previous("P1", "P2", groups=("G1", "G2"))
    grown = reconcile_requirement(Role.VIG, 3, previous)
    assert grown.entrusted_groups == ("G1", "G2", None)
    shrunk = reconcile_requirement(Role.VIG, 1, previous)
    assert shrunk.entrusted_groups == ("G1",)


def test_dropped_assignments_reports_filled_slots_only():
    previous = _previous("P1", None, "P3", "P4")
    assert dropped_assignments(1, previous) == [(2, "P3"), (3, "P4")]
    assert dropped_assignments(4, previous) == []
    assert dropped_assignments(0, None) == []


def test_reconcile_requirements_covers_every_role(existing_event, caplog):
    ledger = RequirementLedger.from_event(existing_event)
    ledger.decrement(Role.DIR)
    with caplog.at_level(logging.INFO):
        result = reconcile_requirements(ledger, existing_event)
    assert [req.role for req in result] == [Role.DIR, Role.CP, Role.VIG, Role.ALTRO]
    assert result[0].assigned_ids == ("P1",)
    assert result[0].entrusted_groups == ("G1",)
    assert result[1].assigned_ids == ("P5",)
    assert "drops assignments ['P2']" in caplog.text
