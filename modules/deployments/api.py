from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from .board import EventBoard
from .ledger import RequirementLedger
from .models import (
    OperationalEvent,
    Role,
    VehicleEntry,
    VehicleType,
    VigilanceType,
    split_time_window,
)
from .roster import VehicleRoster
from .session import DraftForm
from .validators import ValidationResult


router = APIRouter(prefix="/api/deployments", tags=["deployments"])


class VehicleIn(BaseModel):
    type: VehicleType
    plate: str = ""


class RequirementQtyIn(BaseModel):
    role: Role
    qty: int = Field(default=0, ge=0)


class DraftIn(BaseModel):
    code: str = ""
    location: str = ""
    date: str = ""
    start: Optional[str] = None
    end: Optional[str] = None
    vigilance_type: Optional[VigilanceType] = None
    requirements: Optional[List[RequirementQtyIn]] = None
    vehicles: Optional[List[VehicleIn]] = None

    def to_form(self, previous: Optional[OperationalEvent] = None) -> DraftForm:
        default_start, default_end = split_time_window(previous.time_window if previous else None)
        if self.vehicles is None:
            roster = VehicleRoster(previous.vehicles if previous else ())
        else:
            roster = VehicleRoster()
            for vehicle in self.vehicles:
                roster.add_vehicle(vehicle.type)
                roster.set_plate(len(roster) - 1, vehicle.plate)
        vigilance = self.vigilance_type
        if vigilance is None:
            vigilance = previous.vigilance_type if previous else VigilanceType.STANDARD
        return DraftForm(
            code=self.code,
            location=self.location,
            date=self.date,
            start=self.start or default_start,
            end=self.end or default_end,
            vigilance_type=vigilance,
            vehicles=roster,
        )

    def to_ledger(self, previous: Optional[OperationalEvent] = None) -> RequirementLedger:
        if self.requirements is None:
            if previous is not None:
                return RequirementLedger.from_event(previous)
            return RequirementLedger.baseline()
        return RequirementLedger.from_quantities(
            {req.role: req.qty for req in self.requirements}, base=previous
        )


class RequirementOut(BaseModel):
    role: Role
    qty: int
    assigned_ids: List[Any]
    entrusted_groups: Optional[List[Any]] = None


class VehicleOut(BaseModel):
    type: VehicleType
    plate: str
    qty: int

    @classmethod
    def from_model(cls, model: VehicleEntry) -> "VehicleOut":
        return cls(type=model.type, plate=model.plate, qty=model.qty)


class EventOut(BaseModel):
    id: str
    code: str
    location: str
    date: str
    time_window: str
    vigilance_type: VigilanceType
    is_olympic: bool
    status: str
    requirements: List[RequirementOut]
    vehicles: List[VehicleOut]

    @classmethod
    def from_model(cls, model: OperationalEvent) -> "EventOut":
        return cls(
            id=model.id,
            code=model.code,
            location=model.location,
            date=model.date,
            time_window=model.time_window,
            vigilance_type=model.vigilance_type,
            is_olympic=model.is_olympic,
            status=model.status.value,
            requirements=[
                RequirementOut(
                    role=req.role,
                    qty=req.qty,
                    assigned_ids=list(req.assigned_ids),
                    entrusted_groups=list(req.entrusted_groups)
                    if req.entrusted_groups is not None
                    else None,
                )
                for req in model.requirements
            ],
            vehicles=[VehicleOut.from_model(vehicle) for vehicle in model.vehicles],
        )


class OptionOut(BaseModel):
    value: str
    label: str


class OptionsOut(BaseModel):
    vehicle_types: List[OptionOut]
    vigilance_types: List[OptionOut]
    roles: List[OptionOut]


_board = EventBoard()


def get_board() -> EventBoard:
    return _board


def _validation_error(result: ValidationResult) -> HTTPException:
    detail: Dict[str, Any] = {
        "message": result.message,
        "fields": sorted(result.field_errors),
    }
    return HTTPException(status_code=422, detail=detail)


@router.get("/options", response_model=OptionsOut)
def list_options():
    return OptionsOut(
        vehicle_types=[OptionOut(value=v.value, label=v.value) for v in VehicleType.choices()],
        vigilance_types=[OptionOut(value=v.value, label=v.label) for v in VigilanceType.choices()],
        roles=[OptionOut(value=r.value, label=r.label) for r in Role.choices()],
    )


@router.get("/events", response_model=list[EventOut])
def list_events(date: Optional[str] = None, board: EventBoard = Depends(get_board)):
    return [EventOut.from_model(event) for event in board.events_for(date)]


@router.get("/events/{event_id}", response_model=EventOut)
def get_event(event_id: str, board: EventBoard = Depends(get_board)):
    event = board.get(event_id)
    if event is None:
        raise HTTPException(status_code=404, detail="Deployment record not found")
    return EventOut.from_model(event)


@router.post("/events", response_model=EventOut, status_code=201)
def create_event(payload: DraftIn, board: EventBoard = Depends(get_board)):
    outcome = board.controller.save(payload.to_form(), payload.to_ledger())
    if isinstance(outcome, ValidationResult):
        raise _validation_error(outcome)
    board.on_save(outcome)
    return EventOut.from_model(outcome)


@router.put("/events/{event_id}", response_model=EventOut)
def update_event(event_id: str, payload: DraftIn, board: EventBoard = Depends(get_board)):
    previous = board.get(event_id)
    if previous is None:
        raise HTTPException(status_code=404, detail="Deployment record not found")
    outcome = board.controller.save(
        payload.to_form(previous), payload.to_ledger(previous), previous
    )
    if isinstance(outcome, ValidationResult):
        raise _validation_error(outcome)
    board.on_save(outcome)
    return EventOut.from_model(outcome)
