"""Ordered vehicle roster for one deployment record being edited."""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Iterator, List, Tuple

from .models import VehicleEntry, VehicleType


class VehicleRoster:
    """Working list of vehicle entries.

    Entries are frozen; every edit swaps the entry at its position for a new
    one. Positions are the only handle callers have on an entry.
    """

    def __init__(self, entries: Iterable[VehicleEntry] = ()) -> None:
        self._entries: List[VehicleEntry] = list(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[VehicleEntry]:
        return iter(tuple(self._entries))

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._entries)

    def entries(self) -> Tuple[VehicleEntry, ...]:
        return tuple(self._entries)

    def add_vehicle(self, vehicle_type: "VehicleType | str") -> VehicleEntry:
        entry = VehicleEntry(type=VehicleType.normalize(vehicle_type), plate="", qty=1)
        self._entries.append(entry)
        return entry

    def remove_vehicle_at(self, index: int) -> bool:
        """Remove the entry at ``index``; out-of-range positions are ignored."""
        if not self._in_range(index):
            return False
        del self._entries[index]
        return True

    def set_plate(self, index: int, value: str) -> bool:
        if not self._in_range(index):
            return False
        self._entries[index] = replace(self._entries[index], plate=(value or "").upper())
        return True


__all__ = ["VehicleRoster"]
