from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from salon_commission.core.logging import get_logger
from salon_commission.db.repositories import SqlTransactionStore
from salon_commission.db.session import get_session
from salon_commission.errors import InconsistentTransaction
from salon_commission.models import LineItem, Transaction

router = APIRouter(prefix="/transactions", tags=["transactions"])
logger = get_logger(__name__)


class LineItemIn(BaseModel):
    name: str
    category: str | None = None
    price: Annotated[Decimal, Field(ge=0)]
    quantity: Annotated[int, Field(ge=1)] = 1
    discount: Annotated[Decimal, Field(ge=0)] = Decimal("0")


class TransactionIn(BaseModel):
    id: str = Field(..., min_length=1, max_length=64)
    therapistId: str
    customerId: str | None = None
    customerName: str | None = None
    date: datetime
    items: list[LineItemIn] = Field(..., min_length=1)
    subtotal: Annotated[Decimal, Field(ge=0)]
    discount: Annotated[Decimal, Field(ge=0)] = Decimal("0")
    total: Annotated[Decimal, Field(ge=0)]
    paymentMethod: Literal["cash", "card", "other"]
    status: Literal["pending", "completed", "refunded", "cancelled"] = "completed"


class TransactionOut(BaseModel):
    id: str
    therapistId: str
    date: datetime
    total: float
    revenue: float


@router.post("", response_model=TransactionOut, status_code=201)
def create_transaction(payload: TransactionIn, db: Session = Depends(get_session)) -> TransactionOut:
    store = SqlTransactionStore(db)
    if store.get(payload.id):
        raise HTTPException(status_code=400, detail="Transaction already exists")
    transaction = Transaction(
        id=payload.id,
        therapist_id=payload.therapistId,
        date=payload.date,
        items=[LineItem(**item.model_dump()) for item in payload.items],
        subtotal=payload.subtotal,
        discount=payload.discount,
        total=payload.total,
        customer_id=payload.customerId,
        customer_name=payload.customerName,
        payment_method=payload.paymentMethod,
        status=payload.status,
    )
    try:
        store.add(transaction)
    except InconsistentTransaction as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    logger.info("transaction_recorded", transaction_id=transaction.id, therapist_id=transaction.therapist_id)
    return TransactionOut(
        id=transaction.id,
        therapistId=transaction.therapist_id,
        date=transaction.date,
        total=float(transaction.total),
        revenue=float(transaction.items_total),
    )
