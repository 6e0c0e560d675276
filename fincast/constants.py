"""
Global constants for FinCast.

Purpose
-------
Centralizes conversion factors, caps and rule thresholds used throughout the
FinCast codebase. Frequency factors are exact Decimals so normalized amounts
reproduce bit-for-bit across runs.

Usage
-----
>>> from fincast.constants import PAYOFF_CAP_MONTHS, MILESTONE_LADDER
>>> months = min(estimate, PAYOFF_CAP_MONTHS)

Categories
----------
- Time: months per year, payoff horizon cap
- Income: frequency conversion factors, diversification weights
- Cashflow: transaction lookback window
- Debt: milestone ladder, original-balance markup, hybrid score scale
- Tax: optimization hint thresholds, default tax year
"""

from decimal import Decimal
from typing import Tuple

__all__ = [
    # Time
    "MONTHS_PER_YEAR",
    "PAYOFF_CAP_MONTHS",
    # Income
    "DAYS_PER_MONTH",
    "WEEKS_PER_MONTH",
    "BIWEEKLY_PERIODS_PER_MONTH",
    "MONTHS_PER_QUARTER",
    "SOURCE_COUNT_SCORE_PER_SOURCE",
    "DIVERSIFICATION_COMPONENT_MAX",
    "SOURCE_TYPES",
    # Cashflow
    "DEFAULT_LOOKBACK_MONTHS",
    # Debt
    "MILESTONE_LADDER",
    "DEFAULT_ORIGINAL_BALANCE_MARKUP",
    "LEGACY_ORIGINAL_BALANCE_MARKUP",
    "HYBRID_BALANCE_SCALE",
    # Tax
    "DEFAULT_TAX_YEAR",
    "RETIREMENT_DEDUCTION_FLOOR",
    "TAX_LOSS_HARVEST_MARGINAL_RATE",
    "HEAD_OF_HOUSEHOLD_INCOME_FLOOR",
    "MUNICIPAL_BOND_EFFECTIVE_RATE",
    # Rounding
    "CENT",
    "PERCENT_QUANTUM",
]


# =============================================================================
# Time
# =============================================================================

MONTHS_PER_YEAR: int = 12
"""Number of months in a year (annual equivalents, one-time spreading)."""

PAYOFF_CAP_MONTHS: int = 360
"""Payoff horizon cap (30 years) for debts that never amortize."""


# =============================================================================
# Income
# =============================================================================

DAYS_PER_MONTH: Decimal = Decimal("30.42")
"""Average days in a month."""

WEEKS_PER_MONTH: Decimal = Decimal("4.33")
"""Average weeks in a month."""

BIWEEKLY_PERIODS_PER_MONTH: Decimal = Decimal("2.17")
"""Average bi-weekly pay periods in a month."""

MONTHS_PER_QUARTER: int = 3
"""Quarterly amounts are divided by this to get a monthly figure."""

SOURCE_COUNT_SCORE_PER_SOURCE: Decimal = Decimal("5")
"""Diversification points per income source (capped at 25)."""

DIVERSIFICATION_COMPONENT_MAX: Decimal = Decimal("25")
"""Each of the four diversification components is worth at most 25 points."""

SOURCE_TYPES: Tuple[str, ...] = (
    "primary",
    "secondary",
    "side-hustle",
    "passive",
    "investment",
    "other",
)
"""Income source categories accepted in profile files."""


# =============================================================================
# Cashflow
# =============================================================================

DEFAULT_LOOKBACK_MONTHS: int = 3
"""Months of transaction history used to establish trends."""


# =============================================================================
# Debt
# =============================================================================

MILESTONE_LADDER: Tuple[Tuple[int, str, str], ...] = (
    (5, "First Steps",
     "You've begun your debt-free journey by paying off 5% of your debt!"),
    (10, "10% Milestone",
     "You've paid off 10% of your debt! Keep the momentum going!"),
    (25, "Quarter Way There",
     "You've paid off 25% of your debt! You're making significant progress!"),
    (33, "One-Third Complete",
     "You've paid off a third of your debt! Your financial freedom is becoming clearer."),
    (50, "Halfway Champion",
     "You've paid off half of your debt! This is a major achievement!"),
    (66, "Two-Thirds Complete",
     "You've paid off two-thirds of your debt! The finish line is in sight!"),
    (75, "Almost There",
     "You've paid off 75% of your debt! You're in the final stretch!"),
    (90, "Final Countdown",
     "You've paid off 90% of your debt! Freedom is just around the corner!"),
    (100, "Debt Free Champion!",
     "CONGRATULATIONS! You've paid off all your debt! You've achieved financial freedom!"),
)
"""Ascending progress milestones: (threshold percent, name, description)."""

DEFAULT_ORIGINAL_BALANCE_MARKUP: Decimal = Decimal("1")
"""Missing original balances fall back to current_balance * this factor."""

LEGACY_ORIGINAL_BALANCE_MARKUP: Decimal = Decimal("1.1")
"""Markup used by the web dashboard when it guessed original balances."""

HYBRID_BALANCE_SCALE: Decimal = Decimal("10000")
"""Hybrid score = rate * (1 + balance / HYBRID_BALANCE_SCALE)."""


# =============================================================================
# Tax
# =============================================================================

DEFAULT_TAX_YEAR: int = 2023
"""Tax year of the bundled bracket tables."""

RETIREMENT_DEDUCTION_FLOOR: Decimal = Decimal("25000")
"""Deductions below this trigger the retirement-contribution hint."""

TAX_LOSS_HARVEST_MARGINAL_RATE: Decimal = Decimal("24")
"""Marginal rate (percent) at or above which tax-loss harvesting is hinted."""

HEAD_OF_HOUSEHOLD_INCOME_FLOOR: Decimal = Decimal("80000")
"""Single filers above this gross income get the head-of-household hint."""

MUNICIPAL_BOND_EFFECTIVE_RATE: Decimal = Decimal("20")
"""Effective rate (percent) above which municipal bonds are hinted."""


# =============================================================================
# Rounding
# =============================================================================

CENT: Decimal = Decimal("0.01")
"""Currency quantum."""

PERCENT_QUANTUM: Decimal = Decimal("0.01")
"""Percentages are reported with two decimals."""

