"""Command line entry points for PayoffSage."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from .config import BaseConfig
from .logging_config import get_logger, setup_logging
from .models import Debt, IncomeSource, RecurringExpense
from .services.amortization import solve_for_payment, solve_for_rate
from .services.cashflow import summarize_cashflow
from .services.overview import PayoffSummary, compare_strategies, summarize_projection
from .services.strategies import PayoffStrategy, project_portfolio

logger = get_logger(__name__)

STRATEGY_CHOICES = [member.value for member in PayoffStrategy]


def _load_records(path: Path) -> tuple[list[Debt], list[IncomeSource], list[RecurringExpense]]:
    """Read debts (and optional incomes/expenses) from a JSON file.

    The file holds either a list of debt objects or an object with ``debts``,
    ``incomes`` and ``expenses`` lists.
    """

    try:
        payload: Any = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"{path} is not valid JSON: {exc}") from exc

    if isinstance(payload, list):
        payload = {"debts": payload}
    if not isinstance(payload, dict):
        raise click.ClickException(f"{path} must contain a list or an object of records.")

    try:
        debts = [Debt.model_validate(item) for item in payload.get("debts", [])]
        incomes = [IncomeSource.model_validate(item) for item in payload.get("incomes", [])]
        expenses = [RecurringExpense.model_validate(item) for item in payload.get("expenses", [])]
    except ValidationError as exc:
        raise click.ClickException(f"Invalid record in {path}:\n{exc}") from exc

    logger.debug(
        "Loaded records",
        extra={"path": str(path), "debts": len(debts), "incomes": len(incomes)},
    )
    return debts, incomes, expenses


def _resolve_budget(
    config: BaseConfig,
    budget: float | None,
    incomes: list[IncomeSource],
    expenses: list[RecurringExpense],
) -> float | None:
    """Explicit option, then income minus expenses, then configuration."""

    if budget is not None:
        return budget
    if incomes:
        return summarize_cashflow(incomes=incomes, expenses=expenses).available_for_debt
    return config.MONTHLY_BUDGET


def _format_summary(summary: PayoffSummary | None) -> str:
    if summary is None:
        return "no projection (no payments defined or already paid off)"
    payoff = summary.payoff_date.strftime("%b %Y") if summary.payoff_date else "never"
    return (
        f"payoff {payoff} | {summary.months} months | "
        f"paid ${summary.total_paid:,.2f} | interest ${summary.total_interest:,.2f}"
    )


@click.group()
@click.option("--verbose", is_flag=True, default=False, help="Write logs to the data directory.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Debt payoff projections from the command line."""

    try:
        config = BaseConfig()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    if verbose:
        setup_logging(config)
    ctx.obj = config


@cli.command("project")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strategy", type=click.Choice(STRATEGY_CHOICES), default="none", show_default=True)
@click.option("--budget", type=float, default=None, help="Total monthly amount for debts.")
@click.option("--threshold", type=float, default=None, help="Smart strategy APR threshold.")
@click.option("--complete-timeline", is_flag=True, default=False, help="Simulate from the first start date.")
@click.option("--schedule", is_flag=True, default=False, help="Print every projected month.")
@click.pass_obj
def project_command(
    config: BaseConfig,
    path: Path,
    strategy: str,
    budget: float | None,
    threshold: float | None,
    complete_timeline: bool,
    schedule: bool,
) -> None:
    """Project the payoff of the debts stored in PATH."""

    debts, incomes, expenses = _load_records(path)
    points = project_portfolio(
        debts,
        strategy=strategy,
        budget=_resolve_budget(config, budget, incomes, expenses),
        threshold=config.SMART_THRESHOLD if threshold is None else threshold,
        complete_timeline=complete_timeline,
    )
    if schedule:
        for point in points:
            click.echo(
                f"{point.month:>4} {point.date.isoformat()} "
                f"remaining ${point.remaining_debt:,.2f} "
                f"paid ${point.total_paid:,.2f} interest ${point.interest_paid:,.2f}"
            )
    click.echo(f"{strategy}: {_format_summary(summarize_projection(points))}")


@cli.command("compare")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--budget", type=float, default=None, help="Total monthly amount for debts.")
@click.option("--threshold", type=float, default=None, help="Smart strategy APR threshold.")
@click.option("--complete-timeline", is_flag=True, default=False, help="Simulate from the first start date.")
@click.pass_obj
def compare_command(
    config: BaseConfig,
    path: Path,
    budget: float | None,
    threshold: float | None,
    complete_timeline: bool,
) -> None:
    """Compare every payoff strategy for the debts stored in PATH."""

    debts, incomes, expenses = _load_records(path)
    results = compare_strategies(
        debts,
        budget=_resolve_budget(config, budget, incomes, expenses),
        threshold=config.SMART_THRESHOLD if threshold is None else threshold,
        complete_timeline=complete_timeline,
    )
    for strategy, summary in results.items():
        click.echo(f"{strategy.value:<10} {_format_summary(summary)}")


@cli.command("solve-rate")
@click.option("--amount", type=float, required=True, help="Loan principal.")
@click.option("--payment", type=float, required=True, help="Fixed monthly payment.")
@click.option("--months", type=int, required=True, help="Term in months.")
def solve_rate_command(amount: float, payment: float, months: int) -> None:
    """Print the APR implied by a loan's payment and term."""

    click.echo(f"{solve_for_rate(amount, payment, months):.2f}%")


@cli.command("solve-payment")
@click.option("--amount", type=float, required=True, help="Loan principal.")
@click.option("--rate", type=float, required=True, help="Annual interest rate in percent.")
@click.option("--months", type=int, required=True, help="Term in months.")
def solve_payment_command(amount: float, rate: float, months: int) -> None:
    """Print the monthly payment that amortizes a loan."""

    click.echo(f"{solve_for_payment(amount, rate, months):.2f}")


def main() -> None:  # pragma: no cover - console script
    cli()


__all__ = ["cli", "main"]
