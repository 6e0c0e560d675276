"""
Progressive tax calculation for FinCast.

Purpose
-------
Computes tax owed, marginal rate, effective rate and the per-bracket
breakdown for a gross income, a deduction total and a bracket table, and
derives a small fixed set of optimization hints from the computed values.

Algorithm (bracket marching)
----------------------------
    taxable = max(gross - deductions, 0)
    for bracket i (ascending threshold):
        amount_i = clamp(taxable - threshold_i, 0, threshold_{i+1} - threshold_i)
        tax     += amount_i * rate_i / 100

The last bracket has no upper bound. Marching stops as soon as the taxable
income is consumed. The marginal rate is the rate of the highest bracket
that taxed a non-zero amount.

Rates are percentages (10 means 10%), matching the values the dashboard
has always displayed.

Example
-------
>>> from decimal import Decimal
>>> from fincast.tax import TaxBracket, calculate
>>> brackets = [TaxBracket(0, 10), TaxBracket(11000, 12), TaxBracket(44725, 22)]
>>> result = calculate(Decimal("50000"), brackets, Decimal("12950"))
>>> result.taxable_income, result.total_tax, result.marginal_rate
(Decimal('37050'), Decimal('4226'), Decimal('12'))
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Callable, List, Optional, Sequence, Tuple

from .constants import (
    HEAD_OF_HOUSEHOLD_INCOME_FLOOR,
    MUNICIPAL_BOND_EFFECTIVE_RATE,
    RETIREMENT_DEDUCTION_FLOOR,
    TAX_LOSS_HARVEST_MARGINAL_RATE,
)
from .exceptions import InvalidBracketTable
from .utils import HUNDRED, ZERO, Number, safe_divide, to_decimal

__all__ = [
    "TaxBracket",
    "BracketAmount",
    "TaxHint",
    "TaxCalculation",
    "TAX_HINT_RULES",
    "validate_brackets",
    "calculate",
    "optimization_hints",
]


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TaxBracket:
    threshold: Decimal
    rate: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "threshold", to_decimal(self.threshold))
        object.__setattr__(self, "rate", to_decimal(self.rate))


@dataclass(frozen=True)
class BracketAmount:
    """Slice of taxable income taxed at one bracket's rate."""

    rate: Decimal
    amount: Decimal
    tax: Decimal


@dataclass(frozen=True)
class TaxHint:
    hint_id: str
    message: str


@dataclass(frozen=True)
class TaxCalculation:
    gross_income: Decimal
    deductions: Decimal
    taxable_income: Decimal
    total_tax: Decimal
    effective_rate: Decimal
    marginal_rate: Decimal
    breakdown: List[BracketAmount] = field(default_factory=list)
    deduction_impact: Decimal = ZERO
    hints: List[TaxHint] = field(default_factory=list)

    @property
    def after_tax_income(self) -> Decimal:
        return self.gross_income - self.total_tax


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def validate_brackets(brackets: Sequence[TaxBracket]) -> List[TaxBracket]:
    """
    Check the marching preconditions and return the table as a list.

    Raises
    ------
    InvalidBracketTable
        If the table is empty, does not start at 0, is not strictly
        ascending, or has a negative rate.
    """
    table = list(brackets)
    if not table:
        raise InvalidBracketTable("Bracket table must contain at least one bracket.")
    if table[0].threshold != 0:
        raise InvalidBracketTable(
            f"First bracket threshold must be 0, got {table[0].threshold}."
        )
    for position, bracket in enumerate(table):
        if bracket.rate < 0:
            raise InvalidBracketTable(
                f"Bracket rate must be non-negative, got {bracket.rate} "
                f"at position {position + 1}."
            )
        if position and bracket.threshold <= table[position - 1].threshold:
            raise InvalidBracketTable(
                "Bracket thresholds must be strictly ascending: "
                f"{bracket.threshold} at position {position + 1} follows "
                f"{table[position - 1].threshold}."
            )
    return table


# ---------------------------------------------------------------------------
# Optimization hints
# ---------------------------------------------------------------------------

HintRule = Tuple[str, Callable[[TaxCalculation, Optional[str]], bool], str]

TAX_HINT_RULES: Tuple[HintRule, ...] = (
    (
        "retirement-contributions",
        lambda calc, status: calc.deductions < RETIREMENT_DEDUCTION_FLOOR,
        "Consider maximizing retirement contributions to reduce taxable income.",
    ),
    (
        "tax-loss-harvesting",
        lambda calc, status: calc.marginal_rate >= TAX_LOSS_HARVEST_MARGINAL_RATE,
        "You may benefit from tax-loss harvesting in your investment accounts.",
    ),
    (
        "head-of-household",
        lambda calc, status: status == "single"
        and calc.gross_income > HEAD_OF_HOUSEHOLD_INCOME_FLOOR,
        'Explore if "head of household" filing status could be applicable to your situation.',
    ),
    (
        "municipal-bonds",
        lambda calc, status: calc.effective_rate > MUNICIPAL_BOND_EFFECTIVE_RATE,
        "Look into tax-advantaged investments like municipal bonds.",
    ),
)
"""Fixed hint rules: (id, trigger, message), evaluated in order."""


def optimization_hints(
    calculation: TaxCalculation, filing_status: Optional[str] = None
) -> List[TaxHint]:
    """Return the hints whose trigger matches *calculation*."""
    return [
        TaxHint(hint_id, message)
        for hint_id, trigger, message in TAX_HINT_RULES
        if trigger(calculation, filing_status)
    ]


# ---------------------------------------------------------------------------
# Calculation
# ---------------------------------------------------------------------------

def _march(taxable: Decimal, table: Sequence[TaxBracket]) -> Tuple[Decimal, Decimal, List[BracketAmount]]:
    total = ZERO
    marginal = ZERO
    breakdown: List[BracketAmount] = []

    for index, bracket in enumerate(table):
        upper = table[index + 1].threshold if index + 1 < len(table) else None
        in_bracket = max(taxable - bracket.threshold, ZERO)
        if upper is not None:
            in_bracket = min(in_bracket, upper - bracket.threshold)

        if in_bracket > 0:
            tax = in_bracket * bracket.rate / HUNDRED
            total += tax
            marginal = bracket.rate
            breakdown.append(BracketAmount(bracket.rate, in_bracket, tax))

        if upper is None or taxable <= upper:
            break

    return total, marginal, breakdown


def calculate(
    gross_income: Number,
    brackets: Sequence[TaxBracket],
    deductions: Number = ZERO,
    *,
    filing_status: Optional[str] = None,
) -> TaxCalculation:
    """
    Compute progressive tax liability.

    Parameters
    ----------
    gross_income : Decimal
        Annual gross income. Negative values are treated as 0.
    brackets : sequence of TaxBracket
        Ascending table starting at threshold 0.
    deductions : Decimal, default 0
        Total deductions subtracted before marching.
    filing_status : Optional[str], default None
        Only used by the hint rules.

    Returns
    -------
    TaxCalculation
        Rates are percentages. ``effective_rate`` is relative to gross
        income and is 0 when gross income is 0.

    Raises
    ------
    InvalidBracketTable
        If *brackets* violates the table invariants.
    """
    table = validate_brackets(brackets)
    gross = max(to_decimal(gross_income), ZERO)
    deducted = max(to_decimal(deductions), ZERO)
    taxable = max(gross - deducted, ZERO)

    total, marginal, breakdown = _march(taxable, table)

    calculation = TaxCalculation(
        gross_income=gross,
        deductions=deducted,
        taxable_income=taxable,
        total_tax=total,
        effective_rate=safe_divide(total, gross) * HUNDRED,
        marginal_rate=marginal,
        breakdown=breakdown,
        deduction_impact=deducted * marginal / HUNDRED,
    )
    hints = optimization_hints(calculation, filing_status)
    return replace(calculation, hints=hints)
