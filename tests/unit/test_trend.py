"""
Unit tests for trend.py module.
"""

from decimal import Decimal

from fincast.trend import fit_line, project_next


class TestFitLine:
    """Tests for fit_line()."""

    def test_perfect_line(self):
        line = fit_line([Decimal("10"), Decimal("20"), Decimal("30")])

        assert line.slope == Decimal("10")
        assert line.intercept == Decimal("10")
        assert line.n == 3

    def test_single_point_is_flat(self):
        line = fit_line([Decimal("42")])

        assert line.slope == 0
        assert line.intercept == Decimal("42")

    def test_empty_series(self):
        line = fit_line([])

        assert line.n == 0
        assert line.value_at(5) == 0


class TestProjectNext:
    """Tests for project_next()."""

    def test_linear_extrapolation(self):
        assert project_next([Decimal("3000"), Decimal("3200")]) == Decimal("3400")

    def test_noisy_series(self):
        # slope 40, intercept 115 -> value at x=4 is 275
        assert project_next([100, 200, 150, 250]) == Decimal("275")

    def test_clamped_at_zero(self):
        """A falling trend never projects a negative amount."""
        assert project_next([Decimal("3000"), Decimal("1000")]) == Decimal("0")

    def test_single_value_repeats(self):
        assert project_next([Decimal("500")]) == Decimal("500")

    def test_empty_is_zero(self):
        assert project_next([]) == Decimal("0")
