"""Pydantic schemas describing expenses crossing the storage boundary."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)


class ExpenseCreate(BaseModel):
    """Validated input for a new expense.

    The digit limits mirror the ``numeric(6,2)`` column so that malformed
    amounts are rejected instead of rounded by the database. The minimum
    amount is left to the table's check constraint.
    """

    amount: Decimal = Field(..., max_digits=6, decimal_places=2)
    memo: str = Field(..., min_length=1)


class ExpenseRecord(ORMModel):
    id: int = Field(..., ge=1)
    amount: Decimal
    memo: str
    created_on: date


__all__ = ["ExpenseCreate", "ExpenseRecord", "ORMModel"]
