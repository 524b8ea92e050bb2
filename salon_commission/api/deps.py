from fastapi import Depends
from sqlalchemy.orm import Session

from salon_commission.calculator import CompensationCalculator
from salon_commission.core.config import settings
from salon_commission.db.repositories import SqlHoursLedger, SqlTherapistDirectory, SqlTransactionStore
from salon_commission.db.session import get_session
from salon_commission.service import CommissionService


def get_service(db: Session = Depends(get_session)) -> CommissionService:
    return CommissionService(
        directory=SqlTherapistDirectory(db),
        ledger=SqlHoursLedger(db),
        transactions=SqlTransactionStore(db),
        calculator=CompensationCalculator(settings.rate_card()),
    )
