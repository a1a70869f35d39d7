"""Single-debt balance reconstruction and forward projection."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Iterator

from ..constants.payoff import MAX_PROJECTION_MONTHS, PAID_OFF_THRESHOLD
from ..logging_config import get_logger
from ..models.debt import Debt
from ..models.projection import ProjectionPoint
from .amortization import monthly_rate, split_payment

logger = get_logger(__name__)


@dataclass(slots=True)
class BalanceSnapshot:
    """Result of replaying a debt's payment history up to today."""

    current_balance: float
    total_paid: float
    interest_paid: float
    months_elapsed: int


def add_months(value: date, months: int) -> date:
    """Shift ``value`` by whole months, clamping to the last day of short months."""

    index = value.month - 1 + months
    year = value.year + index // 12
    month = index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def months_between(start: date, today: date) -> int:
    """Return the number of whole months from ``start`` to ``today`` (never negative)."""

    months = (today.year - start.year) * 12 + (today.month - start.month)
    if today.day < start.day:
        months -= 1
    return max(0, months)


def reconstruct_current_balance(debt: Debt, *, today: date | None = None) -> BalanceSnapshot:
    """Replay every monthly payment since ``debt.date_started``.

    Replaying stops early when the balance is paid off or when the payment no
    longer covers the interest charge.
    """

    today = today or date.today()
    rate = monthly_rate(debt.interest_rate)
    elapsed = months_between(debt.date_started, today)
    payment = debt.monthly_payment

    if not payment or elapsed <= 0:
        return BalanceSnapshot(
            current_balance=debt.total_amount,
            total_paid=0.0,
            interest_paid=0.0,
            months_elapsed=0,
        )

    balance = debt.total_amount
    total_paid = 0.0
    interest_paid = 0.0
    for month in range(elapsed):
        if balance <= PAID_OFF_THRESHOLD:
            break
        split = split_payment(balance=balance, rate=rate, available=payment)
        if not split.makes_progress:
            logger.debug(
                "Payment does not cover interest; history replay stopped",
                extra={"debt_id": debt.id, "month": month + 1},
            )
            break
        balance -= split.principal
        total_paid += payment
        interest_paid += split.interest

    return BalanceSnapshot(
        current_balance=max(0.0, balance),
        total_paid=total_paid,
        interest_paid=interest_paid,
        months_elapsed=elapsed,
    )


def starting_balance(debt: Debt, *, today: date | None = None) -> float:
    """Manual balance when one was entered, otherwise the replayed balance."""

    if debt.has_manual_balance:
        return debt.current_amount
    return reconstruct_current_balance(debt, today=today).current_balance


def iter_debt_projection(debt: Debt, *, today: date | None = None) -> Iterator[ProjectionPoint]:
    """Yield month-by-month projection points from today until payoff.

    Each call starts over from the debt record, so the generator can be
    recreated freely. Iteration ends early (possibly with nothing yielded)
    when the payment cannot cover the interest, and always within
    ``MAX_PROJECTION_MONTHS``.
    """

    payment = debt.monthly_payment
    if not payment:
        return

    today = today or date.today()
    rate = monthly_rate(debt.interest_rate)
    balance = starting_balance(debt, today=today)
    total_paid = 0.0
    interest_paid = 0.0
    month = 0

    while balance > PAID_OFF_THRESHOLD and month < MAX_PROJECTION_MONTHS:
        split = split_payment(balance=balance, rate=rate, available=payment)
        if not split.makes_progress:
            logger.debug(
                "Payment does not cover interest; projection halted",
                extra={"debt_id": debt.id, "month": month + 1, "balance": balance},
            )
            return

        balance -= split.principal
        total_paid += payment
        interest_paid += split.interest
        month += 1

        yield ProjectionPoint(
            month=month,
            date=add_months(today, month),
            remaining_debt=max(0.0, balance),
            total_paid=total_paid,
            interest_paid=interest_paid,
        )

    if balance > PAID_OFF_THRESHOLD:
        logger.debug(
            "Projection truncated at month cap",
            extra={"debt_id": debt.id, "months": month, "balance": balance},
        )


def project_debt(debt: Debt, *, today: date | None = None) -> list[ProjectionPoint]:
    """Return the full forward projection for a single debt."""

    return list(iter_debt_projection(debt, today=today))


__all__ = [
    "BalanceSnapshot",
    "add_months",
    "iter_debt_projection",
    "months_between",
    "project_debt",
    "reconstruct_current_balance",
    "starting_balance",
]
