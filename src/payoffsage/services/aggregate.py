"""Portfolio totals built from independent per-debt projections."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from ..models.debt import Debt
from ..models.projection import ProjectionPoint
from .projection import add_months, project_debt


def aggregate_independent_projections(
    debts: Iterable[Debt], *, today: date | None = None
) -> list[ProjectionPoint]:
    """Sum every included debt's own projection month by month.

    No budget is reallocated between debts. Once a debt's projection runs
    out it contributes nothing to the remaining balance but keeps its final
    paid and interest totals, so portfolio totals never decrease.
    """

    today = today or date.today()
    projections = [project_debt(debt, today=today) for debt in debts if debt.is_included]
    if not projections:
        return []

    max_months = max(len(projection) for projection in projections)
    totals: list[ProjectionPoint] = []

    for month in range(1, max_months + 1):
        remaining = 0.0
        total_paid = 0.0
        interest_paid = 0.0
        for projection in projections:
            if len(projection) >= month:
                point = projection[month - 1]
                remaining += point.remaining_debt
            elif projection:
                # Paid off earlier: carry its final totals forward
                point = projection[-1]
            else:
                continue
            total_paid += point.total_paid
            interest_paid += point.interest_paid

        totals.append(
            ProjectionPoint(
                month=month,
                date=add_months(today, month - 1),
                remaining_debt=remaining,
                total_paid=total_paid,
                interest_paid=interest_paid,
            )
        )
        if remaining == 0:
            break

    return totals


__all__ = ["aggregate_independent_projections"]
