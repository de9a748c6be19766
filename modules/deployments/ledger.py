"""Working per-role headcounts for a deployment record being edited.

The ledger only tracks quantities. Assignment slots are rebuilt from the
previous record at save time by :mod:`modules.deployments.reconcile`.
"""
from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Tuple

from .models import OperationalEvent, Role

BASELINE_QUANTITIES: Tuple[Tuple[Role, int], ...] = (
    (Role.DIR, 1),
    (Role.CP, 1),
    (Role.VIG, 1),
    (Role.ALTRO, 0),
)


class RequirementLedger:
    """Ordered ``role -> qty`` mapping where every role is always present."""

    def __init__(self, quantities: List[Tuple[Role, int]]) -> None:
        self._order: List[Role] = []
        self._qty: Dict[Role, int] = {}
        for role, qty in quantities:
            role = Role.normalize(role)
            if role not in self._qty:
                self._order.append(role)
            self._qty[role] = max(0, int(qty))
        # Roles are never removed, so fill in any the source did not mention
        for role in Role.choices():
            if role not in self._qty:
                self._order.append(role)
                self._qty[role] = 0

    @classmethod
    def baseline(cls) -> "RequirementLedger":
        return cls(list(BASELINE_QUANTITIES))

    @classmethod
    def from_event(cls, event: OperationalEvent) -> "RequirementLedger":
        return cls([(req.role, req.qty) for req in event.requirements])

    @classmethod
    def from_quantities(
        cls,
        quantities: Mapping["Role | str", int],
        base: Optional[OperationalEvent] = None,
    ) -> "RequirementLedger":
        """Override roles in ``quantities``; the rest come from ``base`` or the baseline."""
        ledger = cls.from_event(base) if base is not None else cls.baseline()
        for role, qty in quantities.items():
            ledger._qty[Role.normalize(role)] = max(0, int(qty))
        return ledger

    def qty(self, role: "Role | str") -> int:
        return self._qty[Role.normalize(role)]

    def increment(self, role: "Role | str") -> int:
        role = Role.normalize(role)
        self._qty[role] += 1
        return self._qty[role]

    def decrement(self, role: "Role | str") -> int:
        role = Role.normalize(role)
        self._qty[role] = max(0, self._qty[role] - 1)
        return self._qty[role]

    def items(self) -> List[Tuple[Role, int]]:
        return [(role, self._qty[role]) for role in self._order]

    def as_dict(self) -> Dict[str, int]:
        return {role.value: qty for role, qty in self.items()}

    def __repr__(self) -> str:
        return f"RequirementLedger({self.as_dict()!r})"


__all__ = ["BASELINE_QUANTITIES", "RequirementLedger"]
