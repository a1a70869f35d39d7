"""Multi-debt payoff strategies sharing one monthly budget.

Two simulations are offered:

- Fixed cohort: every qualifying debt is active from month one and the
  projection starts today.
- Staggered: the clock starts at the earliest ``date_started`` and each debt
  joins the allocation once the clock reaches its own start date.

Both use :func:`allocate_month`, which hands the whole remaining budget to the
first debt in strategy order and only the stated minimum to every other debt.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, Sequence

from ..constants.payoff import (
    DEFAULT_SMART_THRESHOLD,
    MAX_PROJECTION_MONTHS,
    PAID_OFF_THRESHOLD,
)
from ..logging_config import get_logger
from ..models.debt import Debt
from ..models.projection import ProjectionPoint
from .aggregate import aggregate_independent_projections
from .amortization import split_payment
from .projection import add_months, starting_balance

logger = get_logger(__name__)


class PayoffStrategy(str, Enum):
    """Ordering rule used to pick which debt receives the spare budget."""

    NONE = "none"
    SNOWBALL = "snowball"
    AVALANCHE = "avalanche"
    CASHFLOW = "cashflow"
    SMART = "smart"

    @classmethod
    def parse(cls, value: "PayoffStrategy | str | None") -> "PayoffStrategy":
        """Accept enum members, names such as ``"avalanche"`` or ``None``."""

        if value is None:
            return cls.NONE
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        if normalized in {"", "standard"}:
            return cls.NONE
        try:
            return cls(normalized)
        except ValueError as exc:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Invalid debt payoff strategy {value!r}; expected one of: {choices}."
            ) from exc


@dataclass(slots=True)
class DebtState:
    """Per-run simulation record for one debt; the Debt itself is never touched."""

    debt: Debt
    balance: float
    start_date: date | None = None  # staggered mode only
    total_paid: float = 0.0
    interest_paid: float = 0.0
    is_active: bool = False

    @property
    def minimum_payment(self) -> float:
        return self.debt.monthly_payment or 0.0

    @property
    def interest_rate(self) -> float:
        return self.debt.interest_rate

    @property
    def monthly_rate(self) -> float:
        return self.debt.monthly_rate


@dataclass(slots=True)
class MonthAllocation:
    """Money moved during one simulated month."""

    paid: float
    interest: float
    unallocated: float


def resolve_budget(supplied: float | None, minimum_payments: float) -> float:
    """Never fund less than the sum of contractual minimums."""

    if supplied and supplied > minimum_payments:
        return supplied
    return minimum_payments


def order_debts(
    states: Iterable[DebtState],
    strategy: PayoffStrategy,
    threshold: float = DEFAULT_SMART_THRESHOLD,
) -> list[DebtState]:
    """Return ``states`` in the order the strategy attacks them.

    Sorting is stable, so ties keep their input order. ``NONE`` keeps the
    input order untouched.
    """

    states = list(states)
    if strategy is PayoffStrategy.SNOWBALL:
        return sorted(states, key=lambda s: s.balance)
    if strategy is PayoffStrategy.AVALANCHE:
        return sorted(states, key=lambda s: s.interest_rate, reverse=True)
    if strategy is PayoffStrategy.CASHFLOW:
        return sorted(states, key=lambda s: s.minimum_payment, reverse=True)
    if strategy is PayoffStrategy.SMART:
        high = [s for s in states if s.interest_rate >= threshold]
        low = [s for s in states if s.interest_rate < threshold]
        high.sort(key=lambda s: s.interest_rate, reverse=True)
        low.sort(key=lambda s: s.balance)
        return high + low
    return states


def allocate_month(ordered: Sequence[DebtState], budget: float) -> MonthAllocation:
    """Apply one month of payments to ``ordered`` states in place.

    The first state is the focused debt and may use everything left in the
    budget; the rest get at most their own minimum. A state whose payment
    cannot cover its interest makes no progress and consumes nothing.
    """

    left = budget
    paid = 0.0
    interest = 0.0
    for index, state in enumerate(ordered):
        available = left if index == 0 else min(state.minimum_payment, left)
        split = split_payment(balance=state.balance, rate=state.monthly_rate, available=available)
        if not split.makes_progress:
            continue

        amount = split.principal + split.interest
        state.balance -= split.principal
        state.total_paid += amount
        state.interest_paid += split.interest
        left -= amount
        paid += amount
        interest += split.interest

        if state.balance <= PAID_OFF_THRESHOLD:
            state.balance = 0.0

    return MonthAllocation(paid=paid, interest=interest, unallocated=left)


def _pay_own_minimum(state: DebtState) -> None:
    """Standard repayment: the debt pays exactly its own stated payment."""

    payment = state.minimum_payment
    split = split_payment(balance=state.balance, rate=state.monthly_rate, available=payment)
    if not split.makes_progress:
        return
    state.balance -= split.principal
    state.total_paid += payment
    state.interest_paid += split.interest
    if state.balance <= PAID_OFF_THRESHOLD:
        state.balance = 0.0


def simulate_fixed_cohort(
    debts: Iterable[Debt],
    *,
    budget: float | None = None,
    strategy: PayoffStrategy | str = PayoffStrategy.SNOWBALL,
    threshold: float = DEFAULT_SMART_THRESHOLD,
    today: date | None = None,
) -> list[ProjectionPoint]:
    """Simulate paying today's open debts from one shared monthly budget.

    Only included debts with a positive monthly payment and an open balance
    take part. ``PayoffStrategy.NONE`` falls back to independent per-debt
    projections.
    """

    strategy = PayoffStrategy.parse(strategy)
    debts = list(debts)
    if strategy is PayoffStrategy.NONE:
        return aggregate_independent_projections(debts, today=today)

    today = today or date.today()
    states = [
        DebtState(debt=debt, balance=starting_balance(debt, today=today))
        for debt in debts
        if debt.is_included and debt.monthly_payment and debt.monthly_payment > 0
    ]
    states = [state for state in states if state.balance > PAID_OFF_THRESHOLD]
    if not states:
        return []

    minimums = sum(state.minimum_payment for state in states)
    total_budget = resolve_budget(budget, minimums)
    if budget and budget < minimums:
        logger.debug(
            "Supplied budget below minimum payments; using minimums",
            extra={"budget": budget, "minimums": minimums},
        )

    points: list[ProjectionPoint] = []
    total_paid = 0.0
    interest_paid = 0.0
    month = 1
    while states and month <= MAX_PROJECTION_MONTHS:
        ordered = order_debts(states, strategy, threshold)
        allocation = allocate_month(ordered, total_budget)
        total_paid += allocation.paid
        interest_paid += allocation.interest

        points.append(
            ProjectionPoint(
                month=month,
                date=add_months(today, month - 1),
                remaining_debt=sum(state.balance for state in ordered),
                total_paid=total_paid,
                interest_paid=interest_paid,
            )
        )
        states = [state for state in ordered if state.balance > PAID_OFF_THRESHOLD]
        month += 1

    logger.debug(
        "Fixed cohort simulation finished",
        extra={"strategy": strategy.value, "months": len(points), "open_debts": len(states)},
    )
    return points


def simulate_staggered(
    debts: Iterable[Debt],
    *,
    strategy: PayoffStrategy | str | None = None,
    budget: float | None = None,
    threshold: float = DEFAULT_SMART_THRESHOLD,
) -> list[ProjectionPoint]:
    """Simulate every included debt from the earliest start date onwards.

    Debts join the allocation once the clock reaches their ``date_started``
    and begin at their original amount. Without a strategy each active debt
    pays its own stated payment.
    """

    strategy = PayoffStrategy.parse(strategy)
    included = [debt for debt in debts if debt.is_included]
    if not included:
        return []

    anchor = min(debt.date_started for debt in included)
    states = [
        DebtState(debt=debt, balance=debt.total_amount, start_date=debt.date_started)
        for debt in included
    ]

    points: list[ProjectionPoint] = []
    for month_index in range(MAX_PROJECTION_MONTHS):
        clock = add_months(anchor, month_index)
        for state in states:
            if clock >= state.start_date:
                state.is_active = True

        active = [
            state
            for state in states
            if state.is_active and state.balance > PAID_OFF_THRESHOLD and state.minimum_payment
        ]
        if strategy is PayoffStrategy.NONE:
            for state in active:
                _pay_own_minimum(state)
        elif active:
            total_budget = resolve_budget(budget, sum(s.minimum_payment for s in active))
            allocate_month(order_debts(active, strategy, threshold), total_budget)

        remaining = sum(state.balance for state in states)
        points.append(
            ProjectionPoint(
                month=month_index + 1,
                date=clock,
                remaining_debt=remaining,
                total_paid=sum(state.total_paid for state in states),
                interest_paid=sum(state.interest_paid for state in states),
            )
        )
        if remaining <= PAID_OFF_THRESHOLD:
            break

    logger.debug(
        "Staggered simulation finished",
        extra={"strategy": strategy.value, "months": len(points), "start": anchor.isoformat()},
    )
    return points


def project_portfolio(
    debts: Iterable[Debt],
    *,
    strategy: PayoffStrategy | str | None = None,
    budget: float | None = None,
    threshold: float = DEFAULT_SMART_THRESHOLD,
    complete_timeline: bool = False,
    today: date | None = None,
) -> list[ProjectionPoint]:
    """Pick the simulation matching the requested view.

    ``complete_timeline`` replays history from the first debt's start date;
    otherwise the projection starts today, with or without reallocation.
    """

    strategy = PayoffStrategy.parse(strategy)
    if complete_timeline:
        return simulate_staggered(debts, strategy=strategy, budget=budget, threshold=threshold)
    if strategy is PayoffStrategy.NONE:
        return aggregate_independent_projections(debts, today=today)
    return simulate_fixed_cohort(
        debts, budget=budget, strategy=strategy, threshold=threshold, today=today
    )


__all__ = [
    "DebtState",
    "MonthAllocation",
    "PayoffStrategy",
    "allocate_month",
    "order_debts",
    "project_portfolio",
    "resolve_budget",
    "simulate_fixed_cohort",
    "simulate_staggered",
]
