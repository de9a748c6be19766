"""Positional merge of assignment slots when a requirement's quantity changes.

Slots have no identity of their own, so the only correlation between the
record before and after an edit is the slot index. The lowest indices
survive: growing a role appends empty slots, shrinking it drops the highest
ones.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from .ledger import RequirementLedger
from .models import OperationalEvent, PersonnelRequirement, Role

logger = logging.getLogger(__name__)


def reconcile_requirement(
    role: "Role | str",
    new_qty: int,
    previous: Optional[PersonnelRequirement] = None,
) -> PersonnelRequirement:
    """Build the requirement for ``role`` with ``new_qty`` slots.

    Slot ``i`` of ``previous`` (person and entrusted group) is copied for
    every ``i < min(new_qty, previous.qty)``. Without a previous requirement
    every slot is empty and no entrusted groups are tracked.
    """
    role = Role.normalize(role)
    new_qty = max(0, int(new_qty))
    assigned: List[Any] = [None] * new_qty
    groups: Optional[List[Any]] = None

    if previous is not None:
        if previous.entrusted_groups is not None:
            groups = [None] * new_qty
        for i in range(min(new_qty, previous.qty)):
            assigned[i] = previous.assigned_ids[i]
            if groups is not None:
                groups[i] = previous.entrusted_groups[i]

    return PersonnelRequirement(
        role=role,
        qty=new_qty,
        assigned_ids=tuple(assigned),
        entrusted_groups=tuple(groups) if groups is not None else None,
    )


def dropped_assignments(
    new_qty: int, previous: Optional[PersonnelRequirement]
) -> List[Tuple[int, Any]]:
    """Return ``(index, person)`` for filled slots a shrink to ``new_qty`` discards."""
    if previous is None:
        return []
    return [
        (index, person)
        for index, person in enumerate(previous.assigned_ids)
        if index >= max(0, new_qty) and person is not None
    ]


def reconcile_requirements(
    ledger: RequirementLedger, previous_event: Optional[OperationalEvent] = None
) -> Tuple[PersonnelRequirement, ...]:
    """Reconcile every ledger role against ``previous_event`` in ledger order."""
    result = []
    for role, qty in ledger.items():
        previous = previous_event.requirement_for(role) if previous_event else None
        lost = dropped_assignments(qty, previous)
        if lost:
            logger.info(
                "[deployments] %s on %s: qty %s -> %s drops assignments %s",
                role.value,
                previous_event.id,
                previous.qty,
                qty,
                [person for _, person in lost],
            )
        result.append(reconcile_requirement(role, qty, previous))
    return tuple(result)


__all__ = [
    "dropped_assignments",
    "reconcile_requirement",
    "reconcile_requirements",
]
