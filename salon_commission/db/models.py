from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from salon_commission.db.session import Base


class Therapist(Base):
    __tablename__ = "therapists"

    id = Column(String(64), primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    employment_type = Column(String(20), nullable=False)  # employed|self-employed
    hourly_rate = Column(Numeric(14, 6), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class HoursEntryRow(Base):
    __tablename__ = "hours_entries"

    id = Column(Integer, primary_key=True, index=True)
    therapist_id = Column(String(64), ForeignKey("therapists.id"), nullable=False, index=True)
    work_date = Column(Date, nullable=False, index=True)
    hours = Column(Numeric(14, 6), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class TransactionRow(Base):
    __tablename__ = "transactions"

    id = Column(String(64), primary_key=True, index=True)
    therapist_id = Column(String(64), nullable=False, index=True)
    customer_id = Column(String(64), nullable=True, index=True)
    customer_name = Column(String(200), nullable=True)
    date = Column(DateTime, nullable=False, index=True)
    subtotal = Column(Numeric(scale=2), nullable=False)
    discount = Column(Numeric(scale=2), nullable=False, default=0)
    total = Column(Numeric(scale=2), nullable=False)
    payment_method = Column(String(20), nullable=False, default="cash")  # cash|card|other
    status = Column(String(20), nullable=False, default="completed", index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    items = relationship(
        "TransactionItemRow",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="TransactionItemRow.id",
    )


class TransactionItemRow(Base):
    __tablename__ = "transaction_items"

    id = Column(Integer, primary_key=True, index=True)
    transaction_id = Column(String(64), ForeignKey("transactions.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    category = Column(String(100), nullable=True)
    price = Column(Numeric(scale=2), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    discount = Column(Numeric(scale=2), nullable=False, default=0)

    transaction = relationship("TransactionRow", back_populates="items")
