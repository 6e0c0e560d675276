"""
Cashflow forecasting for FinCast.

Purpose
-------
Combines normalized recurring incomes with historically observed monthly
income/expense totals to produce a next-month forecast, month-over-month
deltas and a savings rate.

Key components
--------------
- Transaction / aggregate_transactions:
    Raw ledger rows grouped into per-month income and expense totals with
    pandas. Rows flagged ``is_income`` feed the income bucket, everything
    else the expense bucket.

- MonthlyDataPoint:
    One ``YYYY-MM`` bucket of the trend. Produced fresh per request.

- forecast:
    The forecast engine. Recurring incomes are added into *every* historical
    bucket, so trend lines reflect steady-state recurring income across the
    whole observed window, not only going forward.

Design principles
-----------------
- Deterministic when income is on record: projected income is the sum of
  recurring monthly equivalents, not a regression.
- Expenses have no recurring source of record, so they always use the
  linear trend.
- Every division is zero-guarded.

Example
-------
>>> from datetime import date
>>> from decimal import Decimal
>>> from fincast.cashflow import MonthlyDataPoint, forecast
>>> from fincast.income import IncomeSource
>>> points = [
...     MonthlyDataPoint("2026-07", Decimal("0"), Decimal("3000")),
...     MonthlyDataPoint("2026-08", Decimal("0"), Decimal("3200")),
... ]
>>> salary = IncomeSource(amount=Decimal("5000"), frequency="monthly")
>>> result = forecast([salary], points, as_of=date(2026, 9, 15))
>>> result.projected_income, result.projected_expenses
(Decimal('5000'), Decimal('3400'))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from .income import IncomeSource
from .trend import project_next
from .utils import (
    HUNDRED,
    ZERO,
    add_months,
    dsum,
    month_key,
    percent_change,
    resolve_as_of,
    safe_divide,
    to_decimal,
)

__all__ = [
    "Transaction",
    "MonthlyDataPoint",
    "MonthOverMonth",
    "CashflowForecast",
    "aggregate_transactions",
    "recurring_sources",
    "forecast",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Transaction:
    """One ledger row: an expense, or income when ``is_income`` is set."""

    amount: Decimal
    occurred_on: date
    is_income: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount))


@dataclass(frozen=True)
class MonthlyDataPoint:
    month: str
    income: Decimal = ZERO
    expenses: Decimal = ZERO

    def __post_init__(self) -> None:
        object.__setattr__(self, "income", to_decimal(self.income))
        object.__setattr__(self, "expenses", to_decimal(self.expenses))

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


@dataclass(frozen=True)
class MonthOverMonth:
    income: Decimal = ZERO
    expenses: Decimal = ZERO


@dataclass(frozen=True)
class CashflowForecast:
    """
    Result of ``forecast``.

    Attributes
    ----------
    projected_income : Decimal
        Next-month income.
    projected_expenses : Decimal
        Next-month expenses (linear trend, never negative).
    net_cashflow : Decimal
        ``projected_income - projected_expenses``.
    savings_rate : Decimal
        Net cashflow as a percent of projected income (0 without income).
    monthly_trend : list of MonthlyDataPoint
        Ascending by month, recurring incomes folded in.
    month_over_month : MonthOverMonth
        Percent change between the last two trend points.
    """

    projected_income: Decimal
    projected_expenses: Decimal
    net_cashflow: Decimal
    savings_rate: Decimal
    monthly_trend: List[MonthlyDataPoint] = field(default_factory=list)
    month_over_month: MonthOverMonth = field(default_factory=MonthOverMonth)

    def trend_frame(self) -> pd.DataFrame:
        """Monthly trend as a DataFrame indexed by month key."""
        frame = pd.DataFrame(
            {
                "income": [p.income for p in self.monthly_trend],
                "expenses": [p.expenses for p in self.monthly_trend],
                "net": [p.net for p in self.monthly_trend],
            },
            index=pd.Index([p.month for p in self.monthly_trend], name="month"),
        )
        return frame


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

def aggregate_transactions(
    transactions: Iterable[Transaction],
    *,
    as_of: Optional[date] = None,
    lookback_months: Optional[int] = None,
) -> List[MonthlyDataPoint]:
    """
    Group transactions into per-month income/expense totals.

    Parameters
    ----------
    transactions : iterable of Transaction
        Raw ledger rows in any order.
    as_of : Optional[date], default None
        Reference date for the lookback window. Defaults to today.
    lookback_months : Optional[int], default None
        If given, only rows on or after ``as_of - lookback_months`` are kept.

    Returns
    -------
    list of MonthlyDataPoint
        Ascending by month. Months without rows are not emitted.
    """
    rows = list(transactions)
    if lookback_months is not None:
        cutoff = add_months(resolve_as_of(as_of), -int(lookback_months))
        rows = [t for t in rows if t.occurred_on >= cutoff]
    if not rows:
        return []

    frame = pd.DataFrame(
        {
            "month": [month_key(t.occurred_on) for t in rows],
            "is_income": [bool(t.is_income) for t in rows],
            "amount": [t.amount for t in rows],
        }
    )
    totals = frame.groupby(["month", "is_income"], sort=True)["amount"].agg(
        lambda s: dsum(s)
    )

    buckets: Dict[str, Dict[str, Decimal]] = {}
    for (month, is_income), amount in totals.items():
        bucket = buckets.setdefault(month, {"income": ZERO, "expenses": ZERO})
        bucket["income" if is_income else "expenses"] += amount

    return [
        MonthlyDataPoint(month, values["income"], values["expenses"])
        for month, values in sorted(buckets.items())
    ]


# ---------------------------------------------------------------------------
# Forecast
# ---------------------------------------------------------------------------

def recurring_sources(
    income_sources: Iterable[IncomeSource], period: date
) -> List[IncomeSource]:
    """Sources active in the month of *period* that are not one-time payments."""
    return [s for s in income_sources if s.is_recurring and s.is_active(period)]


def _month_over_month(trend: Sequence[MonthlyDataPoint]) -> MonthOverMonth:
    if len(trend) < 2:
        return MonthOverMonth()
    previous, current = trend[-2], trend[-1]
    return MonthOverMonth(
        income=percent_change(previous.income, current.income),
        expenses=percent_change(previous.expenses, current.expenses),
    )


def forecast(
    income_sources: Iterable[IncomeSource],
    historical_points: Iterable[MonthlyDataPoint],
    *,
    as_of: Optional[date] = None,
) -> CashflowForecast:
    """
    Forecast next month's cashflow.

    Parameters
    ----------
    income_sources : iterable of IncomeSource
        Income snapshot. Only recurring sources active in the month of
        ``as_of`` contribute; one-time payments are not projected forward.
    historical_points : iterable of MonthlyDataPoint
        Observed monthly totals, any order. Duplicate month keys are summed.
    as_of : Optional[date], default None
        Reference date used for the activity check. Defaults to today.

    Returns
    -------
    CashflowForecast
    """
    period = resolve_as_of(as_of)
    recurring = recurring_sources(income_sources, period)
    recurring_monthly = dsum(s.monthly_equivalent() for s in recurring)

    merged: Dict[str, MonthlyDataPoint] = {}
    for point in historical_points:
        existing = merged.get(point.month)
        if existing is None:
            merged[point.month] = point
        else:
            merged[point.month] = replace(
                existing,
                income=existing.income + point.income,
                expenses=existing.expenses + point.expenses,
            )

    trend = [
        replace(point, income=point.income + recurring_monthly)
        for _, point in sorted(merged.items())
    ]

    if recurring:
        projected_income = recurring_monthly
    else:
        logger.debug("No recurring income on record; projecting income from trend")
        projected_income = project_next([p.income for p in trend])

    projected_expenses = project_next([p.expenses for p in trend])
    net = projected_income - projected_expenses
    savings_rate = safe_divide(net, projected_income) * HUNDRED

    return CashflowForecast(
        projected_income=projected_income,
        projected_expenses=projected_expenses,
        net_cashflow=net,
        savings_rate=savings_rate,
        monthly_trend=trend,
        month_over_month=_month_over_month(trend),
    )
