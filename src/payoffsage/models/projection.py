"""Projection rows produced by the payoff engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(slots=True)
class ProjectionPoint:
    """Cumulative snapshot of a debt (or portfolio) at the end of a month."""

    month: int
    date: date
    remaining_debt: float
    total_paid: float
    interest_paid: float
