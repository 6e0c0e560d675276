"""
Rolling multi-debt repayment simulation for FinCast.

Purpose
-------
Month-by-month payoff simulation where freed-up payments cascade: every
debt receives its minimum, the rest of a fixed monthly budget goes to the
top-ranked unpaid debt, and once a debt is cleared its minimum stays in the
budget for the next one. Complements the single-debt baseline in
``fincast.debt.portfolio_summary``.

Simulation step
---------------
    budget = sum(minimums of open debts) + extra_payment (fixed for the run)
    each month:
        interest_i  = round_cents(balance_i * rate_i / 100 / 12)
        pay_i       = min(minimum_i, balance_i + interest_i)
        balance_i  += interest_i - pay_i
        leftover    = budget - sum(pay_i)
        for target in strategy ordering while leftover > 0:
            target -= min(leftover, target balance)
        drop debts with balance <= 0

Snowball and hybrid reorder on the *running* balance every month; avalanche
on the rate. The run stops after ``max_months`` even if balances remain
(``completed`` is then False).

Example
-------
>>> from decimal import Decimal
>>> from fincast.debt import Debt
>>> from fincast.repayment import compare_strategies
>>> debts = [Debt(5000, 22, 150, name="Card"), Debt(12000, 6, 250, name="Car")]
>>> comparison = compare_strategies(debts, extra_payment=Decimal("200"))
>>> comparison.best.strategy
<Strategy.AVALANCHE: 'avalanche'>
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Union

from .amortization import monthly_rate
from .constants import PAYOFF_CAP_MONTHS
from .debt import Debt, Strategy, hybrid_score, parse_strategy
from .exceptions import ValidationError
from .utils import (
    ZERO,
    Number,
    add_months,
    check_non_negative,
    dsum,
    resolve_as_of,
    round_currency,
    to_decimal,
)

__all__ = [
    "ScheduleEntry",
    "RepaymentPlan",
    "StrategyComparison",
    "simulate_repayment",
    "compare_strategies",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduleEntry:
    month: int
    payment: Decimal
    interest: Decimal
    remaining_balance: Decimal


@dataclass(frozen=True)
class RepaymentPlan:
    """
    Outcome of one simulated strategy.

    Attributes
    ----------
    strategy : Strategy
    months_to_payoff : int
        Months simulated until every balance reached 0 (or ``max_months``).
    total_interest : Decimal
    total_paid : Decimal
    debt_free_date : date
    schedule : list of ScheduleEntry
        One row per simulated month.
    payoff_order : list of str
        Debt identifiers in the order they were cleared.
    completed : bool
        False when the horizon ran out with balances left.
    """

    strategy: Strategy
    months_to_payoff: int
    total_interest: Decimal
    total_paid: Decimal
    debt_free_date: date
    schedule: List[ScheduleEntry] = field(default_factory=list)
    payoff_order: List[str] = field(default_factory=list)
    completed: bool = True


@dataclass(frozen=True)
class StrategyComparison:
    plans: List[RepaymentPlan]
    best: RepaymentPlan

    def by_strategy(self) -> Dict[Strategy, RepaymentPlan]:
        return {plan.strategy: plan for plan in self.plans}


@dataclass
class _Running:
    """Mutable per-run copy of a debt snapshot."""

    identifier: str
    balance: Decimal
    rate: Decimal
    minimum: Decimal


def _priority(strategy: Strategy, pool: List[_Running]) -> List[_Running]:
    if strategy is Strategy.AVALANCHE:
        return sorted(pool, key=lambda d: -d.rate)
    if strategy is Strategy.SNOWBALL:
        return sorted(pool, key=lambda d: d.balance)
    return sorted(pool, key=lambda d: -hybrid_score(d.rate, d.balance))


def simulate_repayment(
    debts: Sequence[Debt],
    strategy: Union[Strategy, str],
    *,
    extra_payment: Number = ZERO,
    as_of: Optional[date] = None,
    max_months: int = PAYOFF_CAP_MONTHS,
) -> RepaymentPlan:
    """
    Simulate paying off *debts* under *strategy* with a fixed monthly budget.

    Parameters
    ----------
    debts : sequence of Debt
        Portfolio snapshot; never mutated.
    strategy : Strategy or str
        "avalanche", "snowball" or "hybrid".
    extra_payment : Decimal, default 0
        Monthly amount on top of the sum of minimum payments.
    as_of : Optional[date], default None
        Start date for ``debt_free_date``. Defaults to today.
    max_months : int, default PAYOFF_CAP_MONTHS
        Simulation horizon.

    Returns
    -------
    RepaymentPlan

    Raises
    ------
    ValidationError
        If ``extra_payment`` is negative, ``max_months`` is not positive or
        the strategy is unknown.
    """
    chosen = parse_strategy(strategy)
    extra = to_decimal(extra_payment)
    check_non_negative("extra_payment", extra)
    if max_months <= 0:
        raise ValidationError(f"max_months must be positive (got {max_months}).")

    start = resolve_as_of(as_of)
    pool = [
        _Running(d.identifier, d.current_balance, d.interest_rate, d.minimum_payment)
        for d in debts
        if d.current_balance > 0
    ]
    budget = dsum(d.minimum for d in pool) + extra

    schedule: List[ScheduleEntry] = []
    payoff_order: List[str] = []
    total_interest = ZERO
    total_paid = ZERO
    month = 0

    while pool and month < max_months:
        month += 1
        remaining = budget
        month_interest = ZERO

        for debt in pool:
            interest = round_currency(debt.balance * monthly_rate(debt.rate))
            payment = min(debt.minimum, debt.balance + interest)
            debt.balance += interest - payment
            month_interest += interest
            total_paid += payment
            remaining -= payment

        for target in _priority(chosen, pool):
            if remaining <= 0:
                break
            if target.balance <= 0:
                continue
            payment = min(remaining, target.balance)
            target.balance -= payment
            total_paid += payment
            remaining -= payment

        total_interest += month_interest
        schedule.append(
            ScheduleEntry(
                month=month,
                payment=budget - max(remaining, ZERO),
                interest=month_interest,
                remaining_balance=dsum(d.balance for d in pool if d.balance > 0),
            )
        )

        cleared = [d for d in pool if d.balance <= 0]
        payoff_order.extend(d.identifier for d in cleared)
        pool = [d for d in pool if d.balance > 0]

    if pool:
        logger.debug(
            "%s simulation hit the %d month horizon with %d debts outstanding",
            chosen.value, max_months, len(pool),
        )

    return RepaymentPlan(
        strategy=chosen,
        months_to_payoff=month,
        total_interest=total_interest,
        total_paid=total_paid,
        debt_free_date=add_months(start, month),
        schedule=schedule,
        payoff_order=payoff_order,
        completed=not pool,
    )


def compare_strategies(
    debts: Sequence[Debt],
    *,
    extra_payment: Number = ZERO,
    as_of: Optional[date] = None,
    max_months: int = PAYOFF_CAP_MONTHS,
) -> StrategyComparison:
    """
    Run every strategy and pick the one with the lowest total interest.

    Ties go to the earlier strategy in ``Strategy`` order.
    """
    plans = [
        simulate_repayment(
            debts, strategy, extra_payment=extra_payment, as_of=as_of, max_months=max_months
        )
        for strategy in Strategy
    ]
    best = min(plans, key=lambda plan: plan.total_interest)
    return StrategyComparison(plans=plans, best=best)
