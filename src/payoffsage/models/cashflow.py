"""Income and recurring expense entities."""

from __future__ import annotations

from enum import Enum
from typing import ClassVar, Optional
from uuid import uuid4

from sqlmodel import Field, SQLModel


class Frequency(str, Enum):
    """How often an income or expense recurs."""

    MONTHLY = "monthly"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    YEARLY = "yearly"


def _new_id() -> str:
    return uuid4().hex


class IncomeSource(SQLModel, table=True):
    """Recurring income that funds the monthly debt budget."""

    __tablename__: ClassVar[str] = "income_source"

    id: str = Field(default_factory=_new_id, primary_key=True, max_length=64)
    name: str = Field(default="", max_length=80)
    amount: float = Field(nullable=False, ge=0)
    frequency: Frequency = Field(default=Frequency.MONTHLY)
    include_in_total: Optional[bool] = Field(default=True)


class RecurringExpense(SQLModel, table=True):
    """Recurring expense deducted before debts are budgeted."""

    __tablename__: ClassVar[str] = "recurring_expense"

    id: str = Field(default_factory=_new_id, primary_key=True, max_length=64)
    name: str = Field(default="", max_length=80)
    amount: float = Field(nullable=False, ge=0)
    frequency: Frequency = Field(default=Frequency.MONTHLY)
    category: Optional[str] = Field(default=None, max_length=64)
    include_in_total: Optional[bool] = Field(default=True)
