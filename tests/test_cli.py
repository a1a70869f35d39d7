"""Tests for the command line interface."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from payoffsage.cli import cli


@pytest.fixture
def runner(monkeypatch, tmp_path):
    monkeypatch.setenv("PAYOFFSAGE_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("PAYOFFSAGE_SMART_THRESHOLD", raising=False)
    monkeypatch.delenv("PAYOFFSAGE_MONTHLY_BUDGET", raising=False)
    return CliRunner()


@pytest.fixture
def debts_file(tmp_path):
    path = tmp_path / "debts.json"
    path.write_text(
        json.dumps(
            {
                "debts": [
                    {
                        "name": "Card",
                        "total_amount": 600,
                        "current_amount": 300,
                        "interest_rate": 0,
                        "date_started": "2024-01-01",
                        "monthly_payment": 100,
                    },
                    {
                        "name": "Loan",
                        "total_amount": 1200,
                        "current_amount": 900,
                        "interest_rate": 1.2,
                        "date_started": "2024-01-01",
                        "monthly_payment": 100,
                    },
                ],
                "incomes": [{"name": "Salary", "amount": 500}],
                "expenses": [{"name": "Rent", "amount": 100}],
            }
        ),
        encoding="utf-8",
    )
    return path


def test_solve_payment(runner):
    result = runner.invoke(cli, ["solve-payment", "--amount", "120000", "--rate", "12", "--months", "12"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "10661.85"


def test_solve_rate(runner):
    result = runner.invoke(cli, ["solve-rate", "--amount", "120000", "--payment", "10661.85", "--months", "12"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "12.00%"


def test_project_standard(runner, debts_file):
    """Without a strategy each debt pays its own 100 a month; the loan takes 9 months."""
    result = runner.invoke(cli, ["project", str(debts_file)])

    assert result.exit_code == 0, result.output
    assert "none:" in result.output
    assert "9 months" in result.output
    assert "interest $0.00" in result.output


def test_project_with_strategy_uses_income_budget(runner, debts_file):
    """Income minus expenses (400) funds the snowball: 1,200 owed clears in 3 months."""
    result = runner.invoke(cli, ["project", str(debts_file), "--strategy", "snowball", "--schedule"])

    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert len(lines) == 4
    assert "3 months" in lines[-1]


def test_compare_lists_every_strategy(runner, debts_file):
    result = runner.invoke(cli, ["compare", str(debts_file), "--budget", "250"])

    assert result.exit_code == 0, result.output
    for name in ("none", "snowball", "avalanche", "cashflow", "smart"):
        assert name in result.output


def test_invalid_json_is_reported(runner, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    result = runner.invoke(cli, ["project", str(path)])

    assert result.exit_code != 0
    assert "not valid JSON" in result.output


def test_invalid_record_is_reported(runner, tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"total_amount": 100}]), encoding="utf-8")

    result = runner.invoke(cli, ["project", str(path)])

    assert result.exit_code != 0
    assert "Invalid record" in result.output


def test_unknown_strategy_is_rejected(runner, debts_file):
    result = runner.invoke(cli, ["project", str(debts_file), "--strategy", "tornado"])
    assert result.exit_code == 2
