"""Domain models for deployment records ("servizi").

Finalized records are frozen dataclasses so they can be handed to the board,
the Qt layer and the HTTP schemas without any risk of later mutation.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from utils import app_settings


class VigilanceType(str, Enum):
    """Kind of vigilance service; the OLYMPIC_* values mark Olympic posts."""

    STANDARD = "STANDARD"
    RINFORZI = "RINFORZI"
    OLYMPIC_SPEC = "OLYMPIC_SPEC"
    OLYMPIC_GENERIC = "OLYMPIC_GENERIC"

    @classmethod
    def normalize(cls, value: "str | VigilanceType") -> "VigilanceType":
        if isinstance(value, cls):
            return value
        if not value:
            raise ValueError("Vigilance type is required")
        try:
            return cls(str(value).strip().upper())
        except ValueError as exc:
            raise ValueError(f"Unsupported vigilance type: {value}") from exc

    @classmethod
    def choices(cls) -> tuple["VigilanceType", ...]:
        return tuple(cls)

    @property
    def is_olympic(self) -> bool:
        return self.value.startswith("OLYMPIC")

    @property
    def label(self) -> str:
        return _VIGILANCE_LABELS[self]


_VIGILANCE_LABELS = {
    VigilanceType.STANDARD: "Vigilanza Standard",
    VigilanceType.RINFORZI: "Rinforzi Sedi VVF",
    VigilanceType.OLYMPIC_SPEC: "Presidio olimpico: squadra specialistici (SAF/NBCR)",
    VigilanceType.OLYMPIC_GENERIC: "Presidio olimpico: squadra personale generico",
}


class Role(str, Enum):
    """Personnel role categories a service can require."""

    DIR = "DIR"
    CP = "CP"
    VIG = "VIG"
    ALTRO = "ALTRO"

    @classmethod
    def normalize(cls, value: "str | Role") -> "Role":
        if isinstance(value, cls):
            return value
        if not value:
            raise ValueError("Role is required")
        try:
            return cls(str(value).strip().upper())
        except ValueError as exc:
            raise ValueError(f"Unsupported role: {value}") from exc

    @classmethod
    def choices(cls) -> tuple["Role", ...]:
        return tuple(cls)

    @property
    def label(self) -> str:
        return _ROLE_LABELS[self]


_ROLE_LABELS = {
    Role.DIR: "Funzionario",
    Role.CP: "Capo Posto",
    Role.VIG: "Vigile del Fuoco",
    Role.ALTRO: "Altro",
}


class VehicleType(str, Enum):
    AUTO = "AUTO"
    AS = "AS"
    APS = "APS"
    ABP = "ABP"
    BUS = "BUS"
    FURGONE = "FURGONE"
    MEZZO_PESANTE = "MEZZO PESANTE"

    @classmethod
    def normalize(cls, value: "str | VehicleType") -> "VehicleType":
        if isinstance(value, cls):
            return value
        if not value:
            raise ValueError("Vehicle type is required")
        text = " ".join(str(value).replace("_", " ").split()).upper()
        try:
            return cls(text)
        except ValueError as exc:
            raise ValueError(f"Unsupported vehicle type: {value}") from exc

    @classmethod
    def choices(cls) -> tuple["VehicleType", ...]:
        return tuple(cls)


class EventStatus(str, Enum):
    """Lifecycle status of a deployment record on the board."""

    IN_COMPILAZIONE = "IN_COMPILAZIONE"
    PUBBLICATO = "PUBBLICATO"
    CHIUSO = "CHIUSO"

    @classmethod
    def normalize(cls, value: "str | EventStatus") -> "EventStatus":
        if isinstance(value, cls):
            return value
        if not value:
            return cls.IN_COMPILAZIONE
        try:
            return cls(str(value).strip().upper())
        except ValueError as exc:
            raise ValueError(f"Unsupported event status: {value}") from exc


# ---------------------------------------------------------------------------
# Time window helpers
# ---------------------------------------------------------------------------

TIME_WINDOW_SEPARATOR = " - "


def format_time_window(start: str, end: str) -> str:
    return f"{start.strip()}{TIME_WINDOW_SEPARATOR}{end.strip()}"


def split_time_window(text: Optional[str]) -> Tuple[str, str]:
    """Return ``(start, end)`` from ``"HH:MM - HH:MM"``, defaulting missing parts."""
    parts = (text or "").split(TIME_WINDOW_SEPARATOR)
    start = parts[0].strip() if parts and parts[0].strip() else app_settings.DEFAULT_START
    end = parts[1].strip() if len(parts) > 1 and parts[1].strip() else app_settings.DEFAULT_END
    return start, end


# ---------------------------------------------------------------------------
# Record parts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VehicleEntry:
    """One vehicle on a service roster; repeated types are separate entries."""

    type: VehicleType
    plate: str = ""
    qty: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "plate": self.plate, "qty": self.qty}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VehicleEntry":
        return cls(
            type=VehicleType.normalize(data.get("type", "")),
            plate=str(data.get("plate") or "").upper(),
            qty=int(data.get("qty", 1) or 1),
        )


@dataclass(frozen=True)
class PersonnelRequirement:
    """Required headcount for a role plus its positional assignment slots.

    ``assigned_ids`` holds opaque person references from the staff roster (or
    ``None`` for an open slot) and always has exactly ``qty`` entries.
    ``entrusted_groups`` is optional per-slot grouping metadata with the same
    length when present.
    """

    role: Role
    qty: int
    assigned_ids: Tuple[Any, ...] = ()
    entrusted_groups: Optional[Tuple[Any, ...]] = None

    def __post_init__(self) -> None:
        if self.qty < 0:
            raise ValueError(f"qty for {self.role.value} must be >= 0")
        if len(self.assigned_ids) != self.qty:
            raise ValueError(
                f"{self.role.value}: {len(self.assigned_ids)} assignment slots for qty {self.qty}"
            )
        if self.entrusted_groups is not None and len(self.entrusted_groups) != self.qty:
            raise ValueError(
                f"{self.role.value}: {len(self.entrusted_groups)} group slots for qty {self.qty}"
            )

    @classmethod
    def empty(cls, role: Role, qty: int) -> "PersonnelRequirement":
        return cls(role=role, qty=qty, assigned_ids=(None,) * qty)

    def filled_slots(self) -> int:
        return sum(1 for person in self.assigned_ids if person is not None)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "role": self.role.value,
            "qty": self.qty,
            "assigned_ids": list(self.assigned_ids),
        }
        if self.entrusted_groups is not None:
            data["entrusted_groups"] = list(self.entrusted_groups)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PersonnelRequirement":
        qty = int(data.get("qty", 0) or 0)
        assigned = tuple(data.get("assigned_ids") or (None,) * qty)
        groups = data.get("entrusted_groups")
        return cls(
            role=Role.normalize(data.get("role", "")),
            qty=qty,
            assigned_ids=assigned,
            entrusted_groups=tuple(groups) if groups is not None else None,
        )


@dataclass(frozen=True)
class OperationalEvent:
    """A finalized deployment record as handed to the board."""

    id: str
    code: str
    location: str
    date: str
    time_window: str
    vigilance_type: VigilanceType
    status: EventStatus = EventStatus.IN_COMPILAZIONE
    requirements: Tuple[PersonnelRequirement, ...] = field(default_factory=tuple)
    vehicles: Tuple[VehicleEntry, ...] = field(default_factory=tuple)

    @property
    def is_olympic(self) -> bool:
        return self.vigilance_type.is_olympic

    def requirement_for(self, role: "Role | str") -> Optional[PersonnelRequirement]:
        role = Role.normalize(role)
        for requirement in self.requirements:
            if requirement.role is role:
                return requirement
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "code": self.code,
            "location": self.location,
            "date": self.date,
            "time_window": self.time_window,
            "vigilance_type": self.vigilance_type.value,
            "is_olympic": self.is_olympic,
            "status": self.status.value,
            "requirements": [req.to_dict() for req in self.requirements],
            "vehicles": [vehicle.to_dict() for vehicle in self.vehicles],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OperationalEvent":
        # is_olympic is derived, any stored value is ignored
        return cls(
            id=str(data["id"]),
            code=str(data.get("code", "")).upper(),
            location=str(data.get("location", "")).upper(),
            date=str(data.get("date", "")),
            time_window=str(data.get("time_window", "")),
            vigilance_type=VigilanceType.normalize(data.get("vigilance_type") or "STANDARD"),
            status=EventStatus.normalize(data.get("status", "")),
            requirements=tuple(
                PersonnelRequirement.from_dict(entry) for entry in data.get("requirements", [])
            ),
            vehicles=tuple(VehicleEntry.from_dict(entry) for entry in data.get("vehicles", [])),
        )


__all__ = [
    "EventStatus",
    "OperationalEvent",
    "PersonnelRequirement",
    "Role",
    "TIME_WINDOW_SEPARATOR",
    "VehicleEntry",
    "VehicleType",
    "VigilanceType",
    "format_time_window",
    "split_time_window",
]
