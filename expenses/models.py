"""SQLAlchemy models for the expense tracker."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import CheckConstraint, Column, Date, Integer, Numeric, Text

from .database import Base

MIN_AMOUNT = Decimal("0.01")


class Expense(Base):
    __tablename__ = "expenses"
    __table_args__ = (
        CheckConstraint(f"amount >= {MIN_AMOUNT}", name="expenses_amount_check"),
    )

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    amount: Decimal = Column(Numeric(6, 2), nullable=False)
    memo: str = Column(Text, nullable=False)
    created_on: date = Column(Date, nullable=False, default=date.today)

    def __repr__(self) -> str:
        return f"Expense(id={self.id!r}, amount={self.amount!r}, memo={self.memo!r})"
