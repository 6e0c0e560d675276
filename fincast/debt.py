"""
Debt portfolio planning for FinCast.

Purpose
-------
Ranks a debt portfolio under a payoff ordering rule, derives the projected
debt-free date, the paid-off percentage and the motivational milestones
shown on the debt dashboard.

Key components
--------------
- Debt:
    Immutable snapshot of one debt. Balances only move through external
    payment recording; nothing here mutates them.

- Strategy / rank:
    Avalanche (highest rate first), snowball (smallest original balance
    first) and hybrid (rate weighted by balance). Orderings are stable:
    ties keep insertion order.

- portfolio_summary:
    Debt-free date driven by the slowest-amortizing debt, progress percent
    and milestones. This is the "minimums on everything, nothing extra"
    baseline; see ``fincast.repayment`` for the rolling simulation.

Original balances
-----------------
When a debt has no recorded ``original_balance`` it is estimated as
``current_balance * original_balance_markup``. The default markup of 1
treats the current balance as the original; pass
``LEGACY_ORIGINAL_BALANCE_MARKUP`` (1.1) to reproduce the dashboard's old
guess.

Example
-------
>>> from datetime import date
>>> from fincast.debt import Debt, Strategy, rank, portfolio_summary
>>> debts = [Debt(1000, 5, 50, name="Car"), Debt(500, 20, 25, name="Card")]
>>> [d.name for d in rank(debts, Strategy.AVALANCHE)]
['Card', 'Car']
>>> summary = portfolio_summary(debts, as_of=date(2026, 1, 1))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Sequence, Union

from .amortization import months_to_payoff
from .constants import (
    DEFAULT_ORIGINAL_BALANCE_MARKUP,
    HYBRID_BALANCE_SCALE,
    MILESTONE_LADDER,
)
from .exceptions import InvalidDebtInput, ValidationError
from .utils import (
    HUNDRED,
    ZERO,
    Number,
    add_months,
    check_non_negative,
    clamp,
    dsum,
    resolve_as_of,
    safe_divide,
    to_decimal,
)

__all__ = [
    "Debt",
    "Strategy",
    "parse_strategy",
    "hybrid_score",
    "rank",
    "DebtMilestone",
    "PortfolioSummary",
    "progress_percent",
    "milestones",
    "portfolio_summary",
]


# ---------------------------------------------------------------------------
# Debt snapshot
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Debt:
    """
    Snapshot of one debt.

    Parameters
    ----------
    current_balance : Decimal
        Outstanding balance. Must be non-negative.
    interest_rate : Decimal
        Annual rate in percent. Must be non-negative.
    minimum_payment : Decimal
        Required monthly payment. Must be non-negative.
    original_balance : Optional[Decimal], default None
        Balance when the debt was opened, if known. ``None`` or 0 means
        unknown.
    name : str, default "debt"
    debt_id : Optional[str], default None

    Raises
    ------
    InvalidDebtInput
        If balance, rate or payment is negative.
    """

    current_balance: Decimal
    interest_rate: Decimal
    minimum_payment: Decimal
    original_balance: Optional[Decimal] = None
    name: str = "debt"
    debt_id: Optional[str] = None

    def __post_init__(self) -> None:
        for attr in ("current_balance", "interest_rate", "minimum_payment"):
            value = to_decimal(getattr(self, attr))
            object.__setattr__(self, attr, value)
            check_non_negative(attr, value, error=InvalidDebtInput)
        if self.original_balance is not None:
            object.__setattr__(self, "original_balance", to_decimal(self.original_balance))

    @property
    def is_paid_off(self) -> bool:
        return self.current_balance == 0

    @property
    def identifier(self) -> str:
        return self.debt_id if self.debt_id is not None else self.name

    def effective_original_balance(
        self, markup: Decimal = DEFAULT_ORIGINAL_BALANCE_MARKUP
    ) -> Decimal:
        """Recorded original balance, or ``current_balance * markup`` if unknown."""
        if self.original_balance:
            return self.original_balance
        return self.current_balance * markup

    def months_to_payoff(self) -> int:
        return months_to_payoff(self.current_balance, self.interest_rate, self.minimum_payment)


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------

class Strategy(str, Enum):
    AVALANCHE = "avalanche"
    SNOWBALL = "snowball"
    HYBRID = "hybrid"


def parse_strategy(value: Union[Strategy, str]) -> Strategy:
    if isinstance(value, Strategy):
        return value
    try:
        return Strategy(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in Strategy)
        raise ValidationError(f"Unknown strategy {value!r}. Allowed: {allowed}") from None


def hybrid_score(interest_rate: Decimal, balance: Decimal) -> Decimal:
    """Interest rate weighted up by balance; higher pays first."""
    return interest_rate * (1 + balance / HYBRID_BALANCE_SCALE)


def rank(debts: Sequence[Debt], strategy: Union[Strategy, str]) -> List[Debt]:
    """
    Order *debts* for payoff under *strategy*.

    Avalanche sorts by descending interest rate; snowball by ascending
    original balance (current balance when unknown); hybrid by descending
    ``hybrid_score`` on the current balance. Ties keep insertion order.
    """
    chosen = parse_strategy(strategy)
    if chosen is Strategy.AVALANCHE:
        return sorted(debts, key=lambda d: -d.interest_rate)
    if chosen is Strategy.SNOWBALL:
        return sorted(debts, key=lambda d: d.effective_original_balance())
    return sorted(debts, key=lambda d: -hybrid_score(d.interest_rate, d.current_balance))


# ---------------------------------------------------------------------------
# Progress & milestones
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DebtMilestone:
    """
    One milestone. Ladder milestones carry a percent threshold; one-off
    milestones (a debt paid off, strategy victories) have ``None``.
    """

    milestone_id: str
    name: str
    description: str
    threshold_percent: Optional[int]
    reached: bool
    kind: str = "progress"


@dataclass(frozen=True)
class PortfolioSummary:
    debt_free_date: date
    days_remaining: int
    progress_percent: Decimal
    milestones: List[DebtMilestone] = field(default_factory=list)
    original_total: Decimal = ZERO
    current_total: Decimal = ZERO
    months_remaining: int = 0
    is_debt_free: bool = False


def progress_percent(
    debts: Sequence[Debt], *, original_balance_markup: Number = DEFAULT_ORIGINAL_BALANCE_MARKUP
) -> Decimal:
    """Paid-off share of the original aggregate balance, clamped to [0, 100]."""
    markup = to_decimal(original_balance_markup, default=DEFAULT_ORIGINAL_BALANCE_MARKUP)
    original = dsum(d.effective_original_balance(markup) for d in debts)
    current = dsum(d.current_balance for d in debts)
    if original == 0:
        return ZERO
    return clamp(safe_divide(original - current, original) * HUNDRED, ZERO, HUNDRED)


def milestones(debts: Sequence[Debt], progress: Decimal) -> List[DebtMilestone]:
    """Percent ladder plus one-off milestones for paid-off debts."""
    if not debts:
        return []

    result = [
        DebtMilestone(
            milestone_id=f"{threshold}-percent",
            name=name,
            description=description,
            threshold_percent=threshold,
            reached=progress >= threshold,
        )
        for threshold, name, description in MILESTONE_LADDER
    ]

    for debt in debts:
        if debt.is_paid_off:
            result.append(
                DebtMilestone(
                    milestone_id=f"debt-{debt.identifier}",
                    name=f"Paid Off: {debt.name}",
                    description=(
                        f"You've completely paid off your {debt.name} debt! "
                        "One step closer to financial freedom!"
                    ),
                    threshold_percent=None,
                    reached=True,
                    kind="debt-paid-off",
                )
            )

    highest_interest = rank(debts, Strategy.AVALANCHE)[0]
    if highest_interest.is_paid_off:
        result.append(
            DebtMilestone(
                milestone_id=f"highest-interest-{highest_interest.identifier}",
                name="Avalanche Victory",
                description=(
                    f"You've paid off your highest interest debt ({highest_interest.name})! "
                    "Smart financial move!"
                ),
                threshold_percent=None,
                reached=True,
                kind="avalanche-victory",
            )
        )

    smallest = rank(debts, Strategy.SNOWBALL)[0]
    if smallest.is_paid_off:
        result.append(
            DebtMilestone(
                milestone_id=f"smallest-debt-{smallest.identifier}",
                name="Snowball Victory",
                description=(
                    f"You've paid off your smallest debt ({smallest.name})! Building momentum!"
                ),
                threshold_percent=None,
                reached=True,
                kind="snowball-victory",
            )
        )

    return result


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------

def portfolio_summary(
    debts: Sequence[Debt],
    *,
    as_of: Optional[date] = None,
    original_balance_markup: Number = DEFAULT_ORIGINAL_BALANCE_MARKUP,
) -> PortfolioSummary:
    """
    Summarize a debt portfolio.

    Parameters
    ----------
    debts : sequence of Debt
        Portfolio snapshot.
    as_of : Optional[date], default None
        Reference date for the debt-free date. Defaults to today.
    original_balance_markup : Decimal, default 1
        Estimation factor for debts without a recorded original balance.

    Returns
    -------
    PortfolioSummary
        ``debt_free_date`` is ``as_of`` plus the longest single-debt payoff
        horizon in calendar months. An empty portfolio is debt-free today
        with 0% progress and no milestones.
    """
    today = resolve_as_of(as_of)
    if not debts:
        return PortfolioSummary(
            debt_free_date=today,
            days_remaining=0,
            progress_percent=ZERO,
            is_debt_free=True,
        )

    markup = to_decimal(original_balance_markup, default=DEFAULT_ORIGINAL_BALANCE_MARKUP)
    longest = max(d.months_to_payoff() for d in debts)
    free_on = add_months(today, longest)
    progress = progress_percent(debts, original_balance_markup=markup)

    return PortfolioSummary(
        debt_free_date=free_on,
        days_remaining=(free_on - today).days,
        progress_percent=progress,
        milestones=milestones(debts, progress),
        original_total=dsum(d.effective_original_balance(markup) for d in debts),
        current_total=dsum(d.current_balance for d in debts),
        months_remaining=longest,
        is_debt_free=all(d.is_paid_off for d in debts),
    )
