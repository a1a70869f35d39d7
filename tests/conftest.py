"""Pytest configuration and shared fixtures for PayoffSage tests.

This module provides a fixed calendar date, debt factories, an isolated
SQLModel database, and helper utilities for testing the payoff engine.
"""

from __future__ import annotations

from datetime import date

import pytest
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from payoffsage.models import Debt, IncomeSource, RecurringExpense  # noqa: F401 - registers tables

TODAY = date(2025, 6, 15)


# =============================================================================
# Calendar Fixtures
# =============================================================================


@pytest.fixture
def today() -> date:
    """Fixed "today" so balance replay and projection dates are deterministic."""
    return TODAY


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated in-memory SQLite database for each test.

    Yields:
        Engine: SQLModel engine with all tables created
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a database session for a single test.

    Yields:
        Session: SQLModel session for test
    """
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# Data Factories
# =============================================================================


@pytest.fixture
def debt_factory(today):
    """Factory for creating debts.

    Debts start on ``today`` by default so no payment history is replayed.

    Returns:
        Callable: Function that builds Debt instances
    """

    def _create_debt(
        name: str = "Test Debt",
        total_amount: float = 1000.00,
        current_amount: float | None = None,
        interest_rate: float = 0.0,
        monthly_payment: float | None = 100.00,
        date_started: date | None = None,
        duration: int | None = None,
        include_in_total: bool | None = True,
    ) -> Debt:
        """Create a debt with sensible defaults.

        Args:
            total_amount: Original principal
            current_amount: Manual balance; defaults to total_amount (no override)
            interest_rate: APR in percent (1.2 means 0%)
            monthly_payment: Fixed monthly payment or None
            date_started: Start date, defaults to today

        Returns:
            Debt: Unsaved debt instance
        """
        return Debt(
            name=name,
            total_amount=total_amount,
            current_amount=total_amount if current_amount is None else current_amount,
            interest_rate=interest_rate,
            monthly_payment=monthly_payment,
            date_started=date_started or today,
            duration=duration,
            include_in_total=include_in_total,
        )

    return _create_debt


# =============================================================================
# Helper Utilities
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01 = 1 cent)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"


def assert_monotonic(points) -> None:
    """Remaining debt never rises; paid and interest totals never fall."""
    for previous, current in zip(points, points[1:]):
        assert current.remaining_debt <= previous.remaining_debt + 1e-9
        assert current.total_paid >= previous.total_paid - 1e-9
        assert current.interest_paid >= previous.interest_paid - 1e-9
