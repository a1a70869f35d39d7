"""Model exports."""

from .cashflow import Frequency, IncomeSource, RecurringExpense
from .debt import Debt
from .projection import ProjectionPoint

__all__ = [
    "Debt",
    "Frequency",
    "IncomeSource",
    "ProjectionPoint",
    "RecurringExpense",
]
