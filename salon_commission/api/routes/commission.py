from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from salon_commission.api.deps import get_service
from salon_commission.errors import MissingProfile
from salon_commission.periods import Period, Window, window_for
from salon_commission.reports import commission_rows
from salon_commission.service import CommissionService

router = APIRouter(prefix="/commission", tags=["commission"])


class CommissionOut(BaseModel):
    therapistId: str
    employmentType: str
    periodStart: datetime
    periodEnd: datetime
    revenue: float
    hours: float
    wage: float
    holidayPay: float
    employerNIC: float
    commission: float
    therapistShare: float
    salonShare: float


class SummaryRow(BaseModel):
    therapist_id: str
    therapist_name: str
    employment_type: str
    revenue: float
    hours: float
    wage: float
    holiday_pay: float
    employer_nic: float
    commission: float
    therapist_share: float
    salon_share: float


def resolve_window(
    start: date | None = None,
    end: date | None = None,
    period: Period = Period.MONTH,
    reference: date | None = None,
) -> Window:
    if start or end:
        if not (start and end):
            raise HTTPException(status_code=422, detail="Both start and end are required for a custom range")
        if end < start:
            raise HTTPException(status_code=422, detail="end must not be before start")
        return Window(start=window_for(Period.DAY, start).start, end=window_for(Period.DAY, end).end)
    return window_for(period, reference or date.today())


@router.get("/summary", response_model=list[SummaryRow])
def commission_summary(
    window: Window = Depends(resolve_window),
    service: CommissionService = Depends(get_service),
) -> list[SummaryRow]:
    return [SummaryRow(**row) for row in commission_rows(service.payroll_summary(window))]


@router.get("/{therapist_id}", response_model=CommissionOut)
def get_commission(
    therapist_id: str,
    window: Window = Depends(resolve_window),
    service: CommissionService = Depends(get_service),
) -> CommissionOut:
    try:
        breakdown = service.compute_commission(therapist_id, window.start, window.end)
    except MissingProfile as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    amounts = breakdown.as_dict(places=2)
    return CommissionOut(
        therapistId=therapist_id,
        employmentType=amounts["employment_type"],
        periodStart=window.start,
        periodEnd=window.end,
        revenue=float(amounts["revenue"]),
        hours=float(amounts["hours"]),
        wage=float(amounts["wage"]),
        holidayPay=float(amounts["holiday_pay"]),
        employerNIC=float(amounts["employer_nic"]),
        commission=float(amounts["commission"]),
        therapistShare=float(amounts["therapist_share"]),
        salonShare=float(amounts["salon_share"]),
    )
