"""
Income source modeling for FinCast.

Purpose
-------
Defines the immutable ``IncomeSource`` snapshot consumed by the cashflow
forecast, its activity window, and the income diversification score shown
next to the forecast.

Key components
--------------
- IncomeSource:
    One recurring or one-time income with a pay frequency, optional
    per-payment deductions and side-hustle top-ups, and an optional
    [start_date, end_date] activity window. Normalization reads the
    snapshot and never mutates it.

- income_diversification:
    Scores how dependent a household is on a single income stream
    (0-100), combining source count, primary dependency, stability and
    growth potential of the source types.

Example
-------
>>> from decimal import Decimal
>>> from fincast.income import IncomeSource
>>> salary = IncomeSource(amount=Decimal("2500"), frequency="bi-weekly", name="Salary")
>>> salary.monthly_equivalent()
Decimal('5425.00')
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence, Tuple

from .constants import DIVERSIFICATION_COMPONENT_MAX, SOURCE_COUNT_SCORE_PER_SOURCE, SOURCE_TYPES
from .frequency import Frequency, annual_equivalent, monthly_equivalent, parse_frequency
from .utils import HUNDRED, ZERO, check_non_negative, dsum, month_bounds, safe_divide, to_decimal

__all__ = [
    "SOURCE_TYPES",
    "IncomeSource",
    "DiversificationEntry",
    "IncomeDiversification",
    "income_diversification",
]


# ---------------------------------------------------------------------------
# Income Sources
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class IncomeSource:
    """
    Snapshot of one income source.

    Parameters
    ----------
    amount : Decimal
        Gross amount per payment. Must be non-negative.
    frequency : Frequency or str, default "monthly"
        Pay frequency. Unknown strings are treated as monthly.
    is_taxable : bool, default True
        Whether the income counts toward taxable income.
    start_date, end_date : Optional[date]
        Activity window. ``None`` means open-ended on that side.
    name : str, default "income"
        Label for reports.
    source_type : str, default "primary"
        One of ``SOURCE_TYPES``. Profile files are validated against it;
        unknown values built in code score like "other".
    deductions : tuple of Decimal
        Per-payment deductions (withholding, benefits) subtracted from
        ``amount``.
    side_hustles : tuple of Decimal
        Per-payment side-hustle amounts added to ``amount``.

    Notes
    -----
    The adjusted per-payment amount ``amount - deductions + side_hustles``
    is floored at zero before normalization.
    """

    amount: Decimal
    frequency: Frequency | str = Frequency.MONTHLY
    is_taxable: bool = True
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    name: str = "income"
    source_type: str = "primary"
    deductions: Tuple[Decimal, ...] = field(default_factory=tuple)
    side_hustles: Tuple[Decimal, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount))
        object.__setattr__(self, "frequency", parse_frequency(self.frequency))
        object.__setattr__(self, "deductions", tuple(to_decimal(d) for d in self.deductions))
        object.__setattr__(self, "side_hustles", tuple(to_decimal(h) for h in self.side_hustles))
        check_non_negative("amount", self.amount)

    @property
    def adjusted_amount(self) -> Decimal:
        adjusted = self.amount - dsum(self.deductions) + dsum(self.side_hustles)
        return max(adjusted, ZERO)

    @property
    def is_recurring(self) -> bool:
        return self.frequency.is_recurring

    def monthly_equivalent(self) -> Decimal:
        return monthly_equivalent(self.adjusted_amount, self.frequency)

    def annual_equivalent(self) -> Decimal:
        return annual_equivalent(self.adjusted_amount, self.frequency)

    def is_active(self, period: date) -> bool:
        """True if the activity window overlaps the month containing *period*."""
        first, last = month_bounds(period)
        if self.start_date is not None and self.start_date > last:
            return False
        if self.end_date is not None and self.end_date < first:
            return False
        return True


# ---------------------------------------------------------------------------
# Diversification
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DiversificationEntry:
    name: str
    source_type: str
    monthly_amount: Decimal
    percentage: Decimal
    score_contribution: Decimal


@dataclass(frozen=True)
class IncomeDiversification:
    overall_score: int
    source_count: int
    primary_dependency: int
    stability_score: int
    growth_potential: int
    breakdown: List[DiversificationEntry]


_STABILITY_POINTS = {"primary": 10, "passive": 10, "investment": 5}
_GROWTH_POINTS = {"side-hustle": 10, "investment": 10, "passive": 8, "secondary": 6}
_COMPONENT_SCALE = Decimal("2.5")


def _score_contribution(source_type: str, percentage: Decimal) -> Decimal:
    if source_type in ("passive", "investment"):
        return percentage * Decimal("1.5")
    if source_type == "primary" and percentage > 70:
        return percentage * Decimal("0.5")
    if source_type == "side-hustle":
        return percentage * Decimal("1.2")
    return percentage


def _whole(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def income_diversification(sources: Sequence[IncomeSource]) -> IncomeDiversification:
    """
    Score income diversification on a 0-100 scale.

    Four components, each capped at 25 points:

    - source count: 5 points per source
    - primary dependency: ``25 - largest_share / 4``
    - stability: mean of per-type points (primary/passive 10,
      investment 5, other 3) times 2.5
    - growth potential: mean of per-type points (side-hustle/investment 10,
      passive 8, secondary 6, other 3) times 2.5

    Parameters
    ----------
    sources : sequence of IncomeSource
        Sources to score. One-time sources count with their spread-out
        monthly equivalent.

    Returns
    -------
    IncomeDiversification
        Whole-number scores plus a breakdown sorted by share, largest first.
        An empty input scores 0 everywhere.
    """
    if not sources:
        return IncomeDiversification(0, 0, 0, 0, 0, [])

    monthly = [s.monthly_equivalent() for s in sources]
    total = dsum(monthly)

    breakdown = []
    for source, amount in zip(sources, monthly):
        percentage = safe_divide(amount, total) * HUNDRED
        breakdown.append(
            DiversificationEntry(
                name=source.name,
                source_type=source.source_type,
                monthly_amount=amount,
                percentage=percentage,
                score_contribution=_score_contribution(source.source_type, percentage),
            )
        )
    breakdown.sort(key=lambda e: e.percentage, reverse=True)

    count = len(sources)
    primary_dependency = breakdown[0].percentage
    stability = Decimal(sum(_STABILITY_POINTS.get(s.source_type, 3) for s in sources)) / count
    growth = Decimal(sum(_GROWTH_POINTS.get(s.source_type, 3) for s in sources)) / count

    cap = DIVERSIFICATION_COMPONENT_MAX
    count_score = min(SOURCE_COUNT_SCORE_PER_SOURCE * count, cap)
    dependency_score = max(cap - primary_dependency / 4, ZERO)
    stability_norm = min(stability * _COMPONENT_SCALE, cap)
    growth_norm = min(growth * _COMPONENT_SCALE, cap)

    return IncomeDiversification(
        overall_score=_whole(count_score + dependency_score + stability_norm + growth_norm),
        source_count=count,
        primary_dependency=_whole(primary_dependency),
        stability_score=_whole(stability_norm / cap * HUNDRED),
        growth_potential=_whole(growth_norm / cap * HUNDRED),
        breakdown=breakdown,
    )
