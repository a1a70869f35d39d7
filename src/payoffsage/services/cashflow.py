"""Monthly cashflow totals used to size the debt budget."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..constants.payoff import FREQUENCY_MONTHLY_FACTORS
from ..models.cashflow import Frequency, IncomeSource, RecurringExpense
from ..models.debt import Debt


def to_monthly(amount: float, frequency: Frequency | str) -> float:
    """Normalize a recurring amount to its average monthly value.

    Raises ValueError for a frequency that is not a :class:`Frequency` value.
    """

    return amount * FREQUENCY_MONTHLY_FACTORS[Frequency(frequency).value]


def total_monthly_income(incomes: Iterable[IncomeSource]) -> float:
    return sum(
        to_monthly(income.amount, income.frequency)
        for income in incomes
        if income.include_in_total is not False
    )


def total_monthly_expenses(expenses: Iterable[RecurringExpense]) -> float:
    return sum(
        to_monthly(expense.amount, expense.frequency)
        for expense in expenses
        if expense.include_in_total is not False
    )


def total_monthly_debt_payments(debts: Iterable[Debt]) -> float:
    return sum(debt.monthly_payment or 0.0 for debt in debts if debt.is_included)


@dataclass(slots=True)
class CashflowSummary:
    """Monthly income against expenses and scheduled debt payments."""

    income: float
    expenses: float
    debt_payments: float

    @property
    def available_for_debt(self) -> float:
        """Budget the strategies may spend on debts each month."""
        return self.income - self.expenses

    @property
    def remaining(self) -> float:
        """Money left after expenses and the stated debt payments."""
        return self.income - self.expenses - self.debt_payments


def summarize_cashflow(
    *,
    incomes: Iterable[IncomeSource],
    expenses: Iterable[RecurringExpense] = (),
    debts: Iterable[Debt] = (),
) -> CashflowSummary:
    return CashflowSummary(
        income=total_monthly_income(incomes),
        expenses=total_monthly_expenses(expenses),
        debt_payments=total_monthly_debt_payments(debts),
    )


__all__ = [
    "CashflowSummary",
    "summarize_cashflow",
    "to_monthly",
    "total_monthly_debt_payments",
    "total_monthly_expenses",
    "total_monthly_income",
]
