"""
Unit tests for tax.py module.

Tests bracket marching, rate definitions, table validation and hint rules.
"""

from decimal import Decimal

import pytest

from fincast.brackets import load_brackets
from fincast.exceptions import InvalidBracketTable, ValidationError
from fincast.tax import TaxBracket, calculate, optimization_hints, validate_brackets


# ---------------------------------------------------------------------------
# Bracket marching
# ---------------------------------------------------------------------------

class TestCalculate:
    """Tests for calculate()."""

    def test_worked_example(self, simple_brackets):
        """50,000 gross, 12,950 deductions: 1,100 + 3,126 = 4,226."""
        result = calculate(Decimal("50000"), simple_brackets, Decimal("12950"))

        assert result.taxable_income == Decimal("37050")
        assert result.total_tax == Decimal("4226")
        assert result.marginal_rate == Decimal("12")
        assert result.effective_rate == Decimal("8.452")

    def test_breakdown(self, simple_brackets):
        result = calculate(Decimal("50000"), simple_brackets, Decimal("12950"))

        assert [(b.rate, b.amount, b.tax) for b in result.breakdown] == [
            (Decimal("10"), Decimal("11000"), Decimal("1100")),
            (Decimal("12"), Decimal("26050"), Decimal("3126")),
        ]

    def test_top_bracket_is_unbounded(self, simple_brackets):
        result = calculate(Decimal("100000"), simple_brackets)

        assert result.marginal_rate == Decimal("22")
        assert result.breakdown[-1].amount == Decimal("55275")

    def test_income_on_threshold(self, simple_brackets):
        """Income exactly at a threshold is taxed entirely below it."""
        result = calculate(Decimal("11000"), simple_brackets)

        assert result.total_tax == Decimal("1100")
        assert result.marginal_rate == Decimal("10")
        assert len(result.breakdown) == 1

    def test_zero_income(self, simple_brackets):
        result = calculate(Decimal("0"), simple_brackets)

        assert result.total_tax == 0
        assert result.effective_rate == 0
        assert result.marginal_rate == 0
        assert result.breakdown == []

    def test_deductions_exceed_income(self, simple_brackets):
        result = calculate(Decimal("10000"), simple_brackets, Decimal("15000"))

        assert result.taxable_income == 0
        assert result.total_tax == 0

    def test_negative_gross_treated_as_zero(self, simple_brackets):
        result = calculate(Decimal("-500"), simple_brackets)

        assert result.gross_income == 0
        assert result.total_tax == 0

    def test_deduction_impact(self, simple_brackets):
        result = calculate(Decimal("50000"), simple_brackets, Decimal("12950"))

        assert result.deduction_impact == Decimal("1554")

    def test_after_tax_income(self, simple_brackets):
        result = calculate(Decimal("50000"), simple_brackets, Decimal("12950"))

        assert result.after_tax_income == Decimal("45774")

    def test_total_equals_breakdown_sum(self):
        brackets = load_brackets("single")

        result = calculate(Decimal("654321"), brackets)

        assert result.total_tax == sum((b.tax for b in result.breakdown), Decimal("0"))
        assert sum((b.amount for b in result.breakdown), Decimal("0")) == result.taxable_income

    @pytest.mark.parametrize("gross", [0, 5000, 11000, 44725, 60000, 250000, 1000000])
    def test_effective_not_above_marginal(self, gross):
        result = calculate(Decimal(gross), load_brackets("single"))

        assert result.effective_rate <= result.marginal_rate

    def test_monotonic_in_income(self):
        brackets = load_brackets("married-joint")
        incomes = [Decimal(i) for i in range(0, 800001, 25000)]

        taxes = [calculate(income, brackets).total_tax for income in incomes]

        assert taxes == sorted(taxes)

    def test_unsorted_table_rejected(self):
        table = [TaxBracket(0, 10), TaxBracket(44725, 22), TaxBracket(11000, 12)]

        with pytest.raises(InvalidBracketTable):
            calculate(Decimal("50000"), table)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class TestValidateBrackets:
    """Tests for validate_brackets()."""

    def test_valid_table(self, simple_brackets):
        assert validate_brackets(simple_brackets) == simple_brackets

    def test_empty_table(self):
        with pytest.raises(InvalidBracketTable, match="at least one"):
            validate_brackets([])

    def test_first_threshold_not_zero(self):
        with pytest.raises(InvalidBracketTable, match="must be 0"):
            validate_brackets([TaxBracket(100, 10)])

    def test_duplicate_threshold(self):
        with pytest.raises(InvalidBracketTable, match="strictly ascending"):
            validate_brackets([TaxBracket(0, 10), TaxBracket(0, 12)])

    def test_negative_rate(self):
        with pytest.raises(InvalidBracketTable, match="non-negative"):
            validate_brackets([TaxBracket(0, -1)])

    def test_is_validation_error(self):
        """Bracket errors can be caught as ValidationError and ValueError."""
        with pytest.raises(ValidationError):
            validate_brackets([])
        with pytest.raises(ValueError):
            validate_brackets([])


# ---------------------------------------------------------------------------
# Hints
# ---------------------------------------------------------------------------

class TestOptimizationHints:
    """Tests for the fixed hint rules."""

    def test_high_earner_single(self):
        """
        200,000 gross, standard deduction 13,850:
            tax 38,400 -> effective 19.2%, marginal 32%
        """
        result = calculate(
            Decimal("200000"), load_brackets("single"), Decimal("13850"),
            filing_status="single",
        )

        assert result.total_tax == Decimal("38400")
        assert [h.hint_id for h in result.hints] == [
            "retirement-contributions",
            "tax-loss-harvesting",
            "head-of-household",
        ]

    def test_municipal_bonds(self):
        result = calculate(
            Decimal("1000000"), load_brackets("single"), Decimal("30000"),
            filing_status="single",
        )

        ids = [h.hint_id for h in result.hints]
        assert "municipal-bonds" in ids
        assert "retirement-contributions" not in ids

    def test_head_of_household_only_for_single(self):
        result = calculate(
            Decimal("200000"), load_brackets("married-joint"), Decimal("27700"),
            filing_status="married-joint",
        )

        assert "head-of-household" not in [h.hint_id for h in result.hints]

    def test_low_income_only_retirement_hint(self, simple_brackets):
        result = calculate(Decimal("30000"), simple_brackets, Decimal("13850"))

        assert [h.hint_id for h in result.hints] == ["retirement-contributions"]

    def test_messages(self, simple_brackets):
        result = calculate(Decimal("30000"), simple_brackets)

        assert optimization_hints(result)[0].message == (
            "Consider maximizing retirement contributions to reduce taxable income."
        )
