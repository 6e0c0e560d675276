"""
Serialization module for FinCast.

Purpose
-------
Loads account profiles (income sources, transactions, monthly totals,
debts, tax inputs) from JSON or YAML into the engine's frozen records, and
renders engine results as plain JSON-ready dicts.

Design Principles
-----------------
- Type-safe: Pydantic configs validate every record before conversion
- Human-readable: JSON/YAML profiles are easy to edit by hand
- Decimal-safe output: currency is rendered as strings rounded to cents,
  percentages as 0-100 strings with two decimals

Example
-------
>>> from pathlib import Path
>>> from fincast.serialization import load_profile, forecast_to_dict
>>> from fincast.cashflow import forecast
>>> profile = load_profile(Path("profile.json"))
>>> result = forecast(profile.income_sources, profile.monthly_points)
>>> forecast_to_dict(result)["projected_income"]
'5425.00'
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from .cashflow import CashflowForecast, MonthlyDataPoint, Transaction, aggregate_transactions
from .config import DebtConfig, IncomeSourceConfig, ProfileConfig, TaxProfileConfig
from .debt import Debt, PortfolioSummary
from .exceptions import ConfigurationError
from .income import IncomeSource
from .repayment import RepaymentPlan
from .tax import TaxCalculation
from .types import (
    CashflowForecastDict,
    PortfolioSummaryDict,
    RepaymentPlanDict,
    TaxCalculationDict,
)
from .utils import round_currency, round_percent

__all__ = [
    "Profile",
    "income_source_from_config",
    "debt_from_config",
    "profile_from_dict",
    "load_profile",
    "forecast_to_dict",
    "tax_to_dict",
    "summary_to_dict",
    "plan_to_dict",
    "dump_json",
]


# ---------------------------------------------------------------------------
# Profile loading
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Profile:
    """Engine-ready records for one account."""

    name: str
    income_sources: List[IncomeSource] = field(default_factory=list)
    transactions: List[Transaction] = field(default_factory=list)
    monthly_points: List[MonthlyDataPoint] = field(default_factory=list)
    debts: List[Debt] = field(default_factory=list)
    tax: Optional[TaxProfileConfig] = None

    def history(
        self, *, as_of: Optional[date] = None, lookback_months: Optional[int] = None
    ) -> List[MonthlyDataPoint]:
        """Stored monthly points plus aggregated transactions."""
        return list(self.monthly_points) + aggregate_transactions(
            self.transactions, as_of=as_of, lookback_months=lookback_months
        )


def income_source_from_config(config: IncomeSourceConfig) -> IncomeSource:
    return IncomeSource(
        amount=config.amount,
        frequency=config.frequency,
        is_taxable=config.is_taxable,
        start_date=config.start_date,
        end_date=config.end_date,
        name=config.name,
        source_type=config.source_type,
        deductions=tuple(config.deductions),
        side_hustles=tuple(config.side_hustles),
    )


def debt_from_config(config: DebtConfig) -> Debt:
    return Debt(
        current_balance=config.current_balance,
        interest_rate=config.interest_rate,
        minimum_payment=config.minimum_payment,
        original_balance=config.original_balance,
        name=config.name,
        debt_id=config.debt_id,
    )


def profile_from_dict(data: Dict[str, Any]) -> Profile:
    """
    Validate a raw profile mapping and convert it to engine records.

    Raises
    ------
    ConfigurationError
        If the mapping fails schema validation.
    """
    try:
        config = ProfileConfig.model_validate(data)
    except PydanticValidationError as error:
        raise ConfigurationError(f"Profile validation failed: {error}") from error

    return Profile(
        name=config.name,
        income_sources=[income_source_from_config(s) for s in config.income_sources],
        transactions=[
            Transaction(t.amount, t.occurred_on, t.is_income) for t in config.transactions
        ],
        monthly_points=[
            MonthlyDataPoint(p.month, p.income, p.expenses) for p in config.monthly_points
        ],
        debts=[debt_from_config(d) for d in config.debts],
        tax=config.tax,
    )


def load_profile(path: Union[str, Path]) -> Profile:
    """
    Load a profile from a ``.json``, ``.yaml`` or ``.yml`` file.

    Raises
    ------
    ConfigurationError
        If the file is missing, unparseable, or fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Profile file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as handle:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(handle) or {}
            else:
                data = json.load(handle)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as error:
        raise ConfigurationError(f"Could not parse {path.name}: {error}") from error

    if not isinstance(data, dict):
        raise ConfigurationError(f"{path.name} must define a mapping at the top level")
    return profile_from_dict(data)


# ---------------------------------------------------------------------------
# Result rendering
# ---------------------------------------------------------------------------

def _money(value: Decimal) -> str:
    return str(round_currency(value))


def _pct(value: Decimal) -> str:
    return str(round_percent(value))


def forecast_to_dict(result: CashflowForecast) -> CashflowForecastDict:
    return {
        "projected_income": _money(result.projected_income),
        "projected_expenses": _money(result.projected_expenses),
        "net_cashflow": _money(result.net_cashflow),
        "savings_rate": _pct(result.savings_rate),
        "monthly_trend": [
            {
                "month": p.month,
                "income": _money(p.income),
                "expenses": _money(p.expenses),
                "net": _money(p.net),
            }
            for p in result.monthly_trend
        ],
        "month_over_month": {
            "income": _pct(result.month_over_month.income),
            "expenses": _pct(result.month_over_month.expenses),
        },
    }


def tax_to_dict(result: TaxCalculation) -> TaxCalculationDict:
    return {
        "gross_income": _money(result.gross_income),
        "deductions": _money(result.deductions),
        "taxable_income": _money(result.taxable_income),
        "total_tax": _money(result.total_tax),
        "effective_rate": _pct(result.effective_rate),
        "marginal_rate": _pct(result.marginal_rate),
        "deduction_impact": _money(result.deduction_impact),
        "breakdown": [
            {"rate": _pct(b.rate), "amount": _money(b.amount), "tax": _money(b.tax)}
            for b in result.breakdown
        ],
        "hints": [{"id": h.hint_id, "message": h.message} for h in result.hints],
    }


def summary_to_dict(result: PortfolioSummary) -> PortfolioSummaryDict:
    return {
        "debt_free_date": result.debt_free_date.isoformat(),
        "days_remaining": result.days_remaining,
        "months_remaining": result.months_remaining,
        "progress_percent": _pct(result.progress_percent),
        "original_total": _money(result.original_total),
        "current_total": _money(result.current_total),
        "is_debt_free": result.is_debt_free,
        "milestones": [
            {
                "id": m.milestone_id,
                "name": m.name,
                "description": m.description,
                "threshold_percent": m.threshold_percent,
                "reached": m.reached,
                "kind": m.kind,
            }
            for m in result.milestones
        ],
    }


def plan_to_dict(plan: RepaymentPlan, *, include_schedule: bool = True) -> RepaymentPlanDict:
    return {
        "strategy": plan.strategy.value,
        "months_to_payoff": plan.months_to_payoff,
        "total_interest": _money(plan.total_interest),
        "total_paid": _money(plan.total_paid),
        "debt_free_date": plan.debt_free_date.isoformat(),
        "completed": plan.completed,
        "payoff_order": list(plan.payoff_order),
        "schedule": [
            {
                "month": e.month,
                "payment": _money(e.payment),
                "interest": _money(e.interest),
                "remaining_balance": _money(e.remaining_balance),
            }
            for e in plan.schedule
        ]
        if include_schedule
        else [],
    }


def dump_json(data: Any, *, indent: int = 2) -> str:
    """JSON text for rendered results; stray Decimals/dates become strings."""
    return json.dumps(data, indent=indent, default=str)
