"""
Unit tests for repayment.py module.

Tests the rolling repayment simulation and strategy comparison.
"""

from datetime import date
from decimal import Decimal

import pytest

from fincast.debt import Debt, Strategy
from fincast.exceptions import ValidationError
from fincast.repayment import compare_strategies, simulate_repayment


@pytest.fixture
def interest_free_pair():
    """Two interest-free debts, the smaller one listed second."""
    return [
        Debt(Decimal("1000"), Decimal("0"), Decimal("50"), name="Big"),
        Debt(Decimal("300"), Decimal("0"), Decimal("50"), name="Small"),
    ]


@pytest.fixture
def rate_vs_size():
    """Small interest-free debt against a larger interest-bearing one."""
    return [
        Debt(Decimal("300"), Decimal("0"), Decimal("10"), name="Small"),
        Debt(Decimal("1000"), Decimal("12"), Decimal("10"), name="Costly"),
    ]


class TestSimulateRepayment:
    """Tests for simulate_repayment()."""

    def test_single_interest_free_debt(self, as_of):
        plan = simulate_repayment(
            [Debt(Decimal("1000"), Decimal("0"), Decimal("100"))], "avalanche", as_of=as_of
        )

        assert plan.months_to_payoff == 10
        assert plan.total_interest == 0
        assert plan.total_paid == Decimal("1000")
        assert plan.debt_free_date == date(2027, 7, 15)
        assert plan.completed

    def test_extra_payment_shortens_plan(self, as_of):
        debt = Debt(Decimal("1000"), Decimal("0"), Decimal("100"))

        plan = simulate_repayment([debt], "avalanche", extra_payment=Decimal("100"), as_of=as_of)

        assert plan.months_to_payoff == 5

    def test_freed_minimums_roll_over(self, interest_free_pair, as_of):
        """
        Budget 200: Small clears in month 2, then Big receives the whole
        budget and clears in month 7.
        """
        plan = simulate_repayment(
            interest_free_pair, "snowball", extra_payment=Decimal("100"), as_of=as_of
        )

        assert plan.payoff_order == ["Small", "Big"]
        assert plan.months_to_payoff == 7
        assert plan.total_paid == Decimal("1300")
        assert [e.remaining_balance for e in plan.schedule[:3]] == [
            Decimal("1100"), Decimal("900"), Decimal("700"),
        ]

    def test_strategy_changes_order(self, rate_vs_size, as_of):
        avalanche = simulate_repayment(
            rate_vs_size, "avalanche", extra_payment=Decimal("180"), as_of=as_of
        )
        snowball = simulate_repayment(
            rate_vs_size, "snowball", extra_payment=Decimal("180"), as_of=as_of
        )

        assert avalanche.payoff_order == ["Costly", "Small"]
        assert snowball.payoff_order == ["Small", "Costly"]
        assert avalanche.total_interest < snowball.total_interest

    def test_horizon_reached(self, as_of):
        debt = Debt(Decimal("10000"), Decimal("24"), Decimal("100"))

        plan = simulate_repayment([debt], "avalanche", as_of=as_of, max_months=12)

        assert not plan.completed
        assert plan.months_to_payoff == 12
        assert len(plan.schedule) == 12
        assert plan.schedule[-1].remaining_balance > Decimal("10000")

    def test_empty_portfolio(self, as_of):
        plan = simulate_repayment([], "snowball", as_of=as_of)

        assert plan.months_to_payoff == 0
        assert plan.debt_free_date == as_of
        assert plan.completed

    def test_paid_off_debts_skipped(self, as_of):
        debts = [Debt(0, 10, 0, name="Done"), Debt(Decimal("100"), 0, Decimal("50"), name="Open")]

        plan = simulate_repayment(debts, "avalanche", as_of=as_of)

        assert plan.payoff_order == ["Open"]
        assert plan.months_to_payoff == 2

    def test_paid_off_minimum_not_in_budget(self, as_of):
        """A cleared debt's stored minimum does not fund the open ones."""
        open_debt = Debt(Decimal("1000"), 0, Decimal("100"), name="Open")
        cleared = Debt(0, Decimal("18"), Decimal("50"), name="Done")

        alone = simulate_repayment([open_debt], "avalanche", as_of=as_of)
        mixed = simulate_repayment([open_debt, cleared], "avalanche", as_of=as_of)

        assert alone.months_to_payoff == 10
        assert mixed.months_to_payoff == 10
        assert mixed.schedule[0].payment == Decimal("100")

    def test_inputs_not_mutated(self, debts, as_of):
        simulate_repayment(debts, "avalanche", extra_payment=Decimal("500"), as_of=as_of)

        assert debts[0].current_balance == Decimal("5000")

    def test_negative_extra_rejected(self, debts):
        with pytest.raises(ValidationError):
            simulate_repayment(debts, "avalanche", extra_payment=Decimal("-1"))

    def test_invalid_horizon_rejected(self, debts):
        with pytest.raises(ValidationError, match="max_months"):
            simulate_repayment(debts, "avalanche", max_months=0)

    def test_unknown_strategy(self, debts):
        with pytest.raises(ValidationError):
            simulate_repayment(debts, "coinflip")


class TestCompareStrategies:
    """Tests for compare_strategies()."""

    def test_runs_every_strategy(self, debts, as_of):
        comparison = compare_strategies(debts, extra_payment=Decimal("200"), as_of=as_of)

        assert [p.strategy for p in comparison.plans] == list(Strategy)
        assert set(comparison.by_strategy()) == set(Strategy)

    def test_best_has_lowest_interest(self, rate_vs_size, as_of):
        comparison = compare_strategies(rate_vs_size, extra_payment=Decimal("180"), as_of=as_of)

        assert comparison.best.strategy is Strategy.AVALANCHE
        assert comparison.best.total_interest == min(p.total_interest for p in comparison.plans)

    def test_tie_goes_to_first_strategy(self, interest_free_pair, as_of):
        comparison = compare_strategies(interest_free_pair, as_of=as_of)

        assert comparison.best.strategy is Strategy.AVALANCHE
