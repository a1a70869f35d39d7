"""Amortization math: rate and payment solvers plus per-month splitting."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..constants.payoff import (
    PAYMENT_SOLVER_EPSILON,
    RATE_SOLVER_CEILING,
    RATE_SOLVER_FLOOR,
    RATE_SOLVER_INITIAL_GUESS,
    RATE_SOLVER_MAX_ITERATIONS,
    RATE_SOLVER_MIN_DERIVATIVE,
    RATE_SOLVER_TOLERANCE,
    ZERO_INTEREST_SENTINEL_APR,
)
from ..logging_config import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class MonthlySplit:
    """How one month's payment divides between interest and principal."""

    interest: float
    principal: float

    @property
    def makes_progress(self) -> bool:
        return self.principal > 0


def effective_annual_rate(annual_rate_percent: float) -> float:
    """Return the APR to charge, mapping the 1.2% installment sentinel to 0."""

    if annual_rate_percent == ZERO_INTEREST_SENTINEL_APR:
        return 0.0
    return annual_rate_percent


def monthly_rate(annual_rate_percent: float) -> float:
    """Convert an APR percentage to a monthly decimal rate (sentinel applied)."""

    return effective_annual_rate(annual_rate_percent) / 100 / 12


def split_payment(*, balance: float, rate: float, available: float) -> MonthlySplit:
    """Split ``available`` into interest on ``balance`` and principal.

    ``rate`` is the monthly decimal rate. Principal never exceeds the balance
    and is non-positive when the payment does not cover the interest.
    """

    interest = balance * rate
    principal = min(available - interest, balance)
    return MonthlySplit(interest=interest, principal=principal)


def _payment_for_rate(loan_amount: float, rate: float, duration_months: int) -> tuple[float, float]:
    """Return (payment, dP/dr) for a monthly rate.

    Written in terms of the discount factor ``(1 + r) ** -n`` so long terms
    at high rates underflow towards zero instead of overflowing.
    """

    discount = math.pow(1 + rate, -duration_months)
    growth = 1 / (1 - discount)  # (1+r)^n / ((1+r)^n - 1)
    payment = loan_amount * rate * growth
    d_growth = -(growth * growth) * duration_months * discount / (1 + rate)
    derivative = loan_amount * (growth + rate * d_growth)
    return payment, derivative


def solve_for_rate(loan_amount: float, monthly_payment: float, duration_months: int) -> float:
    """Solve for the APR (percent) that amortizes ``loan_amount`` in ``duration_months``.

    Uses Newton-Raphson on the standard payment formula starting from 1% per
    month. The best estimate is returned when the iteration budget runs out or
    the derivative collapses; this function does not raise. A non-positive
    amount or term yields 0, as does a payment no larger than
    ``loan_amount / duration_months``.
    """

    if loan_amount <= 0 or duration_months <= 0:
        return 0.0
    # No positive rate yields a payment at or below the equal split.
    if monthly_payment <= loan_amount / duration_months:
        return 0.0

    rate = RATE_SOLVER_INITIAL_GUESS
    for iteration in range(RATE_SOLVER_MAX_ITERATIONS):
        if rate <= 0:
            rate = RATE_SOLVER_FLOOR

        payment, derivative = _payment_for_rate(loan_amount, rate, duration_months)
        if abs(payment - monthly_payment) < RATE_SOLVER_TOLERANCE:
            logger.debug(
                "Rate solver converged",
                extra={"iterations": iteration + 1, "monthly_rate": rate},
            )
            return rate * 12 * 100

        if abs(derivative) < RATE_SOLVER_MIN_DERIVATIVE:
            logger.debug("Rate solver derivative vanished", extra={"monthly_rate": rate})
            break

        rate -= (payment - monthly_payment) / derivative
        if rate < 0:
            rate = RATE_SOLVER_FLOOR
        if rate > RATE_SOLVER_CEILING:
            rate = RATE_SOLVER_CEILING
    else:
        logger.debug("Rate solver hit iteration cap", extra={"monthly_rate": rate})

    return rate * 12 * 100


def solve_for_payment(principal: float, annual_rate_percent: float, duration_months: int) -> float:
    """Return the fixed monthly payment that amortizes ``principal``.

    Degenerate inputs fall back to an equal split of the principal rather
    than failing.
    """

    if principal <= 0 or duration_months <= 0:
        return 0.0

    equal_split = principal / duration_months
    if annual_rate_percent == 0:
        return equal_split

    rate = annual_rate_percent / 100 / 12
    if rate < PAYMENT_SOLVER_EPSILON:
        return equal_split

    factor = math.pow(1 + rate, duration_months)
    if factor - 1 < PAYMENT_SOLVER_EPSILON:
        return equal_split

    payment = principal * (rate * factor) / (factor - 1)
    if not math.isfinite(payment) or payment <= 0:
        return equal_split
    return payment


__all__ = [
    "MonthlySplit",
    "effective_annual_rate",
    "monthly_rate",
    "solve_for_payment",
    "solve_for_rate",
    "split_payment",
]
