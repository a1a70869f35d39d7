"""Service module exports."""

from . import aggregate, amortization, cashflow, overview, projection, strategies

__all__ = [
    "aggregate",
    "amortization",
    "cashflow",
    "overview",
    "projection",
    "strategies",
]
