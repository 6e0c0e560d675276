"""General utilities for FinCast

Contents
--------
- Decimal coercion and validation helpers
- Zero-guarded arithmetic (safe division, percent change, clamping)
- Rounding helpers (currency, percentages)
- Calendar helpers (month keys, month arithmetic, month bounds)
"""

from __future__ import annotations

from calendar import monthrange
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, Optional, Tuple, Union

from dateutil.relativedelta import relativedelta

from .constants import CENT, PERCENT_QUANTUM
from .exceptions import ValidationError

__all__ = [
    # Coercion / validation
    "to_decimal",
    "check_non_negative",
    # Arithmetic
    "safe_divide",
    "percent_change",
    "clamp",
    "dsum",
    # Rounding
    "round_currency",
    "round_percent",
    # Calendar
    "month_key",
    "add_months",
    "month_bounds",
    "resolve_as_of",
]

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")
HUNDRED = Decimal("100")


# ---------------------------------------------------------------------------
# Coercion / validation
# ---------------------------------------------------------------------------

def to_decimal(value: Optional[Number], *, default: Decimal = ZERO) -> Decimal:
    """Coerce *value* to Decimal; ``None`` and unparseable input map to *default*.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")``.
    """
    if value is None:
        return default
    if isinstance(value, Decimal):
        return value if value.is_finite() else default
    if isinstance(value, bool):
        return Decimal(int(value))
    try:
        result = Decimal(str(value).strip()) if isinstance(value, (float, str)) else Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return default
    return result if result.is_finite() else default


def check_non_negative(name: str, value: Decimal, *, error: type = ValidationError) -> None:
    """Raise *error* if *value* is negative (strict)."""
    if value < 0:
        raise error(f"{name} must be non-negative (got {value}).")


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------

def safe_divide(numerator: Decimal, denominator: Decimal, *, default: Decimal = ZERO) -> Decimal:
    """Return numerator / denominator, or *default* when the denominator is 0."""
    if denominator == 0:
        return default
    return numerator / denominator


def percent_change(previous: Decimal, current: Decimal) -> Decimal:
    """Percent change from *previous* to *current*; 0 unless previous > 0."""
    if previous <= 0:
        return ZERO
    return (current - previous) / previous * HUNDRED


def clamp(value: Decimal, lower: Decimal, upper: Decimal) -> Decimal:
    """Clamp *value* into [lower, upper]."""
    return max(lower, min(value, upper))


def dsum(values: Iterable[Decimal]) -> Decimal:
    """Decimal sum that stays Decimal for empty input."""
    return sum(values, ZERO)


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------

def round_currency(value: Decimal) -> Decimal:
    """Round monetary amounts to cents (half-up)."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def round_percent(value: Decimal) -> Decimal:
    """Round percentage values to two decimals (half-up)."""
    return value.quantize(PERCENT_QUANTUM, rounding=ROUND_HALF_UP)


# ---------------------------------------------------------------------------
# Calendar
# ---------------------------------------------------------------------------

def month_key(day: date) -> str:
    """Return the ``YYYY-MM`` key of the month containing *day*."""
    return f"{day.year:04d}-{day.month:02d}"


def add_months(day: date, months: int) -> date:
    """Calendar month arithmetic; the day is clipped to the target month's end."""
    return day + relativedelta(months=months)


def month_bounds(day: date) -> Tuple[date, date]:
    """First and last day of the month containing *day*."""
    last = monthrange(day.year, day.month)[1]
    return date(day.year, day.month, 1), date(day.year, day.month, last)


def resolve_as_of(as_of: Optional[date]) -> date:
    """Default a missing reference date to today."""
    return as_of if as_of is not None else date.today()
