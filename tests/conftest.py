"""
Pytest configuration and fixtures for FinCast test suite.

This module provides reusable fixtures for testing all FinCast components.
Fixtures follow the principle of "arrange-act-assert" with clear separation.
"""

import json
from datetime import date
from decimal import Decimal
from typing import List

import pytest

from fincast.cashflow import MonthlyDataPoint, Transaction
from fincast.debt import Debt
from fincast.income import IncomeSource
from fincast.tax import TaxBracket


# ---------------------------------------------------------------------------
# Date Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def as_of() -> date:
    """Standard reference date for tests."""
    return date(2026, 9, 15)


# ---------------------------------------------------------------------------
# Income Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def salary() -> IncomeSource:
    """
    Monthly salary with no activity window.

    Amount: 5,000/month
    """
    return IncomeSource(amount=Decimal("5000"), frequency="monthly", name="Salary")


@pytest.fixture
def side_gig() -> IncomeSource:
    """
    Weekly side-hustle income.

    Amount: 200/week (866/month)
    """
    return IncomeSource(
        amount=Decimal("200"),
        frequency="weekly",
        name="Deliveries",
        source_type="side-hustle",
    )


@pytest.fixture
def income_sources(salary, side_gig) -> List[IncomeSource]:
    """Salary plus side hustle."""
    return [salary, side_gig]


# ---------------------------------------------------------------------------
# Cashflow Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def monthly_points() -> List[MonthlyDataPoint]:
    """Two months of expense history with no recorded income."""
    return [
        MonthlyDataPoint("2026-07", Decimal("0"), Decimal("3000")),
        MonthlyDataPoint("2026-08", Decimal("0"), Decimal("3200")),
    ]


@pytest.fixture
def transactions() -> List[Transaction]:
    """Ledger rows spread over July and August 2026."""
    return [
        Transaction(Decimal("100"), date(2026, 7, 3)),
        Transaction(Decimal("50"), date(2026, 7, 20)),
        Transaction(Decimal("1000"), date(2026, 7, 31), is_income=True),
        Transaction(Decimal("200"), date(2026, 8, 18)),
    ]


# ---------------------------------------------------------------------------
# Tax Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def simple_brackets() -> List[TaxBracket]:
    """First three 2023 single-filer brackets."""
    return [
        TaxBracket(Decimal("0"), Decimal("10")),
        TaxBracket(Decimal("11000"), Decimal("12")),
        TaxBracket(Decimal("44725"), Decimal("22")),
    ]


# ---------------------------------------------------------------------------
# Debt Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def card() -> Debt:
    """High-rate credit card: 5,000 at 22%, minimum 150."""
    return Debt(
        current_balance=Decimal("5000"),
        interest_rate=Decimal("22"),
        minimum_payment=Decimal("150"),
        original_balance=Decimal("8000"),
        name="Card",
    )


@pytest.fixture
def car_loan() -> Debt:
    """Low-rate car loan: 12,000 at 6%, minimum 250."""
    return Debt(
        current_balance=Decimal("12000"),
        interest_rate=Decimal("6"),
        minimum_payment=Decimal("250"),
        original_balance=Decimal("20000"),
        name="Car",
    )


@pytest.fixture
def medical() -> Debt:
    """Small interest-free medical bill without a recorded original balance."""
    return Debt(
        current_balance=Decimal("600"),
        interest_rate=Decimal("0"),
        minimum_payment=Decimal("50"),
        name="Medical",
    )


@pytest.fixture
def debts(card, car_loan, medical) -> List[Debt]:
    """Three-debt portfolio in insertion order card, car, medical."""
    return [card, car_loan, medical]


# ---------------------------------------------------------------------------
# Profile Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def profile_dict() -> dict:
    """Raw profile mapping as it would appear in a JSON file."""
    return {
        "name": "Household",
        "income_sources": [
            {"name": "Salary", "amount": "2500", "frequency": "bi-weekly"},
            {
                "name": "Bonus",
                "amount": "3000",
                "frequency": "one-time",
                "source_type": "other",
            },
        ],
        "transactions": [
            {"amount": "1800", "occurred_on": "2026-08-02"},
            {"amount": "1400", "occurred_on": "2026-08-20"},
        ],
        "monthly_points": [
            {"month": "2026-06", "income": "0", "expenses": "3000"},
            {"month": "2026-07", "income": "0", "expenses": "3100"},
        ],
        "debts": [
            {
                "name": "Card",
                "current_balance": "5000",
                "interest_rate": "22",
                "minimum_payment": "150",
            },
            {
                "name": "Car",
                "current_balance": "12000",
                "interest_rate": "6",
                "minimum_payment": "250",
                "original_balance": "20000",
            },
        ],
        "tax": {"gross_income": "65100", "filing_status": "single", "year": 2023},
    }


@pytest.fixture
def profile_file(tmp_path, profile_dict):
    """Profile written to a temporary JSON file."""
    path = tmp_path / "profile.json"
    with open(path, "w") as f:
        json.dump(profile_dict, f)
    return path
