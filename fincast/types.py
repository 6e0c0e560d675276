"""
Type definitions for FinCast.

Purpose
-------
TypedDict definitions for the plain records FinCast hands back to its
callers (request handlers, the CLI's ``--json`` output). Money is rendered
as strings with two decimals so no binary float ever carries a currency
amount; percentages are 0-100 strings with two decimals.

Type Definitions
----------------
MonthlyPointDict
    One month of the cashflow trend: {"month", "income", "expenses", "net"}

CashflowForecastDict
    Forecast output with trend and month-over-month deltas

TaxCalculationDict
    Tax liability with bracket breakdown and hints

PortfolioSummaryDict
    Debt-free date, progress and milestones

RepaymentPlanDict
    One simulated repayment strategy
"""

from typing import List, Optional

from typing_extensions import TypedDict

__all__ = [
    "MonthlyPointDict",
    "MonthOverMonthDict",
    "CashflowForecastDict",
    "BracketAmountDict",
    "TaxHintDict",
    "TaxCalculationDict",
    "MilestoneDict",
    "PortfolioSummaryDict",
    "ScheduleEntryDict",
    "RepaymentPlanDict",
]


class MonthlyPointDict(TypedDict):
    month: str
    income: str
    expenses: str
    net: str


class MonthOverMonthDict(TypedDict):
    income: str
    expenses: str


class CashflowForecastDict(TypedDict):
    """
    Examples
    --------
    >>> forecast: CashflowForecastDict = {
    ...     "projected_income": "5425.00",
    ...     "projected_expenses": "3400.00",
    ...     "net_cashflow": "2025.00",
    ...     "savings_rate": "37.33",
    ...     "monthly_trend": [],
    ...     "month_over_month": {"income": "0.00", "expenses": "6.67"},
    ... }
    """

    projected_income: str
    projected_expenses: str
    net_cashflow: str
    savings_rate: str
    monthly_trend: List[MonthlyPointDict]
    month_over_month: MonthOverMonthDict


class BracketAmountDict(TypedDict):
    rate: str
    amount: str
    tax: str


class TaxHintDict(TypedDict):
    id: str
    message: str


class TaxCalculationDict(TypedDict):
    gross_income: str
    deductions: str
    taxable_income: str
    total_tax: str
    effective_rate: str
    marginal_rate: str
    deduction_impact: str
    breakdown: List[BracketAmountDict]
    hints: List[TaxHintDict]


class MilestoneDict(TypedDict):
    id: str
    name: str
    description: str
    threshold_percent: Optional[int]
    reached: bool
    kind: str


class PortfolioSummaryDict(TypedDict):
    debt_free_date: str
    days_remaining: int
    months_remaining: int
    progress_percent: str
    original_total: str
    current_total: str
    is_debt_free: bool
    milestones: List[MilestoneDict]


class ScheduleEntryDict(TypedDict):
    month: int
    payment: str
    interest: str
    remaining_balance: str


class RepaymentPlanDict(TypedDict):
    strategy: str
    months_to_payoff: int
    total_interest: str
    total_paid: str
    debt_free_date: str
    completed: bool
    payoff_order: List[str]
    schedule: List[ScheduleEntryDict]
