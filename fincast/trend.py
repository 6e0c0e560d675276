"""Linear trend projection for FinCast

Fits an ordinary least-squares line to an ordered series (x = 0..n-1) and
projects the next point. Used for expense forecasts and, when no recurring
income is on record, for income forecasts.

Financial projections are never negative: the projected value is clamped
at zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from .utils import Number, ZERO, to_decimal

__all__ = [
    "TrendLine",
    "fit_line",
    "project_next",
]


@dataclass(frozen=True)
class TrendLine:
    slope: Decimal
    intercept: Decimal
    n: int

    def value_at(self, x: int) -> Decimal:
        return self.slope * x + self.intercept


def fit_line(series: Sequence[Number]) -> TrendLine:
    """
    Least-squares fit of *series* against its index.

    For fewer than two points the slope is undefined by the closed form
    (the denominator ``n*sum(x^2) - sum(x)^2`` is zero), so the line is flat
    through the single value, or through 0 for an empty series.
    """
    values = [to_decimal(v) for v in series]
    n = len(values)
    if n == 0:
        return TrendLine(ZERO, ZERO, 0)
    if n == 1:
        return TrendLine(ZERO, values[0], 1)

    sum_x = Decimal(n * (n - 1) // 2)
    sum_xx = Decimal((n - 1) * n * (2 * n - 1) // 6)
    sum_y = sum(values, ZERO)
    sum_xy = sum((x * y for x, y in enumerate(values)), ZERO)

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n
    return TrendLine(slope, intercept, n)


def project_next(series: Sequence[Number]) -> Decimal:
    """Projected value at x = n, clamped to a minimum of 0."""
    line = fit_line(series)
    if line.n == 0:
        return ZERO
    return max(ZERO, line.value_at(line.n))
