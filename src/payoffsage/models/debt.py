"""Debt entity consumed by the payoff engine."""

from __future__ import annotations

from datetime import date
from typing import ClassVar, Optional
from uuid import uuid4

from sqlmodel import Field, SQLModel


def _new_id() -> str:
    return uuid4().hex


class Debt(SQLModel, table=True):
    """Installment loan or credit card tracked for payoff planning.

    ``current_amount`` equal to ``total_amount`` means no manual balance was
    entered; the engine then derives the balance from the payment history.
    """

    __tablename__: ClassVar[str] = "debt"

    id: str = Field(default_factory=_new_id, primary_key=True, max_length=64)
    name: str = Field(default="", max_length=80, index=True)
    total_amount: float = Field(nullable=False, ge=0)
    current_amount: float = Field(nullable=False, ge=0)
    interest_rate: float = Field(default=0.0, nullable=False)
    date_started: date = Field(nullable=False)
    monthly_payment: Optional[float] = Field(default=None)
    duration: Optional[int] = Field(default=None)  # stated term in months
    include_in_total: Optional[bool] = Field(default=True)

    @property
    def is_included(self) -> bool:
        """Unset counts as included."""
        return self.include_in_total is not False

    @property
    def has_manual_balance(self) -> bool:
        return self.current_amount != self.total_amount

    @property
    def effective_rate(self) -> float:
        """APR with the 0% installment sentinel applied."""
        # Imported here: the services package imports this module.
        from ..services.amortization import effective_annual_rate

        return effective_annual_rate(self.interest_rate)

    @property
    def monthly_rate(self) -> float:
        from ..services.amortization import monthly_rate

        return monthly_rate(self.interest_rate)
