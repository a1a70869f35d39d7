"""Portfolio overview, payoff summaries and strategy comparison."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence

from ..constants.payoff import (
    DEFAULT_SMART_THRESHOLD,
    HIGH_INTEREST_APR,
    MAX_PROJECTION_MONTHS,
    NEAR_PAYOFF_MONTHS,
    PAID_OFF_THRESHOLD,
)
from ..models.debt import Debt
from ..models.projection import ProjectionPoint
from .projection import project_debt, starting_balance
from .strategies import DebtState, PayoffStrategy, order_debts, project_portfolio


@dataclass(slots=True)
class PayoffSummary:
    """Headline numbers for a projection.

    ``payoff_date`` is ``None`` when the projection hit the month cap with
    debt still outstanding; callers should present that as "never".
    """

    months: int
    total_paid: float
    total_interest: float
    payoff_date: date | None
    reached_cap: bool

    @property
    def pays_off(self) -> bool:
        return self.payoff_date is not None


def summarize_projection(points: Sequence[ProjectionPoint]) -> PayoffSummary | None:
    """Return the summary of ``points`` or ``None`` when nothing was projected."""

    if not points:
        return None
    last = points[-1]
    paid_off = last.remaining_debt <= PAID_OFF_THRESHOLD
    return PayoffSummary(
        months=len(points),
        total_paid=last.total_paid,
        total_interest=last.interest_paid,
        payoff_date=last.date if paid_off else None,
        reached_cap=not paid_off and len(points) >= MAX_PROJECTION_MONTHS,
    )


def compare_strategies(
    debts: Iterable[Debt],
    *,
    budget: float | None = None,
    threshold: float = DEFAULT_SMART_THRESHOLD,
    complete_timeline: bool = False,
    today: date | None = None,
) -> dict[PayoffStrategy, PayoffSummary | None]:
    """Summarize every strategy over the same debts and budget."""

    debts = list(debts)
    return {
        strategy: summarize_projection(
            project_portfolio(
                debts,
                strategy=strategy,
                budget=budget,
                threshold=threshold,
                complete_timeline=complete_timeline,
                today=today,
            )
        )
        for strategy in PayoffStrategy
    }


def targeted_debt(
    debts: Iterable[Debt],
    strategy: PayoffStrategy | str | None,
    threshold: float = DEFAULT_SMART_THRESHOLD,
) -> Debt | None:
    """Return the debt a strategy focuses on first, ranked on original amounts."""

    strategy = PayoffStrategy.parse(strategy)
    if strategy is PayoffStrategy.NONE:
        return None
    candidates = [
        DebtState(debt=debt, balance=debt.total_amount, start_date=debt.date_started)
        for debt in debts
        if debt.is_included and debt.monthly_payment and debt.monthly_payment > 0
    ]
    ordered = order_debts(candidates, strategy, threshold)
    return ordered[0].debt if ordered else None


@dataclass(slots=True)
class DebtStatus:
    """Row-level figures shown next to each debt."""

    debt: Debt
    balance: float
    months_left: int
    payoff_date: date | None
    progress_percent: float
    payment_too_low: bool

    @property
    def near_payoff(self) -> bool:
        return 0 < self.months_left <= NEAR_PAYOFF_MONTHS

    @property
    def high_interest(self) -> bool:
        return self.debt.interest_rate > HIGH_INTEREST_APR


def debt_status(debt: Debt, *, today: date | None = None) -> DebtStatus:
    balance = starting_balance(debt, today=today)
    projection = project_debt(debt, today=today)
    summary = summarize_projection(projection)
    monthly_interest = balance * debt.monthly_rate
    progress = (
        (debt.total_amount - balance) / debt.total_amount * 100 if debt.total_amount > 0 else 0.0
    )
    return DebtStatus(
        debt=debt,
        balance=balance,
        months_left=0 if balance <= 0 else len(projection),
        payoff_date=summary.payoff_date if summary else None,
        progress_percent=progress,
        payment_too_low=bool(debt.monthly_payment) and debt.monthly_payment <= monthly_interest,
    )


@dataclass(slots=True)
class PortfolioOverview:
    """Totals across every included debt."""

    total_original: float
    total_current: float
    total_monthly_payments: float

    @property
    def total_paid_off(self) -> float:
        return self.total_original - self.total_current

    @property
    def progress_percent(self) -> float:
        if self.total_original <= 0:
            return 0.0
        return self.total_paid_off / self.total_original * 100


def portfolio_overview(debts: Iterable[Debt], *, today: date | None = None) -> PortfolioOverview:
    included = [debt for debt in debts if debt.is_included]
    return PortfolioOverview(
        total_original=sum(debt.total_amount for debt in included),
        total_current=sum(starting_balance(debt, today=today) for debt in included),
        total_monthly_payments=sum(debt.monthly_payment or 0.0 for debt in included),
    )


__all__ = [
    "DebtStatus",
    "PayoffSummary",
    "PortfolioOverview",
    "compare_strategies",
    "debt_status",
    "portfolio_overview",
    "summarize_projection",
    "targeted_debt",
]
