from decimal import Decimal
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from salon_commission.core.logging import get_logger
from salon_commission.db.repositories import SqlTherapistDirectory
from salon_commission.db.session import get_session
from salon_commission.models import TherapistProfile

router = APIRouter(prefix="/therapists", tags=["therapists"])
logger = get_logger(__name__)


class TherapistIn(BaseModel):
    id: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1)
    employmentType: Literal["employed", "self-employed"]
    hourlyRate: Decimal | None = None


class TherapistOut(BaseModel):
    id: str
    name: str
    employmentType: Literal["employed", "self-employed"]
    hourlyRate: float | None = None


def _out(profile: TherapistProfile) -> TherapistOut:
    return TherapistOut(
        id=profile.id,
        name=profile.name,
        employmentType=profile.employment_type.value,
        hourlyRate=float(profile.hourly_rate) if profile.hourly_rate is not None else None,
    )


@router.get("", response_model=list[TherapistOut])
def list_therapists(db: Session = Depends(get_session)) -> list[TherapistOut]:
    return [_out(profile) for profile in SqlTherapistDirectory(db).all()]


@router.post("", response_model=TherapistOut, status_code=201)
def create_therapist(payload: TherapistIn, db: Session = Depends(get_session)) -> TherapistOut:
    directory = SqlTherapistDirectory(db)
    if directory.get(payload.id.strip()):
        raise HTTPException(status_code=400, detail="Therapist already exists")
    try:
        profile = TherapistProfile(
            id=payload.id.strip(),
            name=payload.name.strip(),
            employment_type=payload.employmentType,
            hourly_rate=payload.hourlyRate,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    directory.add(profile)
    logger.info("therapist_created", therapist_id=profile.id, employment_type=profile.employment_type.value)
    return _out(profile)
