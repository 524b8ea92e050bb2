from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from salon_commission.api.deps import get_service
from salon_commission.errors import InvalidHours, MissingProfile
from salon_commission.models import HoursEntry
from salon_commission.service import CommissionService

router = APIRouter(prefix="/hours", tags=["hours"])


class HoursIn(BaseModel):
    therapistId: str
    date: date
    hours: Decimal


class HoursOut(BaseModel):
    therapistId: str
    date: date
    hours: float


def _out(entry: HoursEntry) -> HoursOut:
    return HoursOut(therapistId=entry.therapist_id, date=entry.date, hours=float(entry.hours))


@router.post("", response_model=HoursOut, status_code=201)
def add_hours(payload: HoursIn, service: CommissionService = Depends(get_service)) -> HoursOut:
    try:
        service.profile(payload.therapistId)
        entry = service.add_hours_entry(payload.therapistId, payload.date, payload.hours)
    except MissingProfile as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidHours as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _out(entry)


@router.get("/{therapist_id}", response_model=list[HoursOut])
def list_hours(therapist_id: str, service: CommissionService = Depends(get_service)) -> list[HoursOut]:
    entries = sorted(service.ledger.entries_for(therapist_id), key=lambda e: e.date, reverse=True)
    return [_out(entry) for entry in entries]
