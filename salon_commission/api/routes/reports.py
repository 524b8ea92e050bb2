from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from salon_commission.api.routes.commission import resolve_window
from salon_commission.db.repositories import SqlTransactionStore
from salon_commission.db.session import get_session
from salon_commission.periods import Window
from salon_commission.reports import revenue_by

router = APIRouter(prefix="/reports", tags=["reporting"])


class RevenueRow(BaseModel):
    group_by: str
    key: str
    label: str
    revenue: float
    transactions: int
    items: int


@router.get("/revenue", response_model=list[RevenueRow])
def revenue_report(
    group_by: str = "therapist",
    window: Window = Depends(resolve_window),
    db: Session = Depends(get_session),
) -> list[RevenueRow]:
    transactions = SqlTransactionStore(db).between(window.start, window.end)
    try:
        rows = revenue_by(transactions, group_by)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return [RevenueRow(**row) for row in rows]
