"""PayoffSage debt payoff planning engine."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .models import Debt, ProjectionPoint
from .services.aggregate import aggregate_independent_projections
from .services.amortization import solve_for_payment, solve_for_rate
from .services.projection import project_debt, reconstruct_current_balance
from .services.strategies import (
    PayoffStrategy,
    project_portfolio,
    simulate_fixed_cohort,
    simulate_staggered,
)

__all__ = [
    "BaseConfig",
    "Debt",
    "DevConfig",
    "PayoffStrategy",
    "ProjectionPoint",
    "aggregate_independent_projections",
    "project_debt",
    "project_portfolio",
    "reconstruct_current_balance",
    "simulate_fixed_cohort",
    "simulate_staggered",
    "solve_for_payment",
    "solve_for_rate",
]
