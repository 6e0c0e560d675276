"""
Frequency normalization for FinCast.

Purpose
-------
Converts an (amount, recurrence frequency) pair into a canonical monthly and
annual equivalent. Every other component that mixes income streams of
different cadences goes through this module first.

Conversion table
----------------
=========== =============
frequency   monthly factor
=========== =============
daily       x 30.42
weekly      x 4.33
bi-weekly   x 2.17
monthly     x 1
quarterly   / 3
annually    / 12
one-time    / 12 (spread across a year)
=========== =============

Unknown frequency strings degrade to monthly (pass-through). The figures are
user-facing estimates, not accounting records, so a typo in a stored
frequency must not break a dashboard.

Example
-------
>>> from decimal import Decimal
>>> from fincast.frequency import Frequency, monthly_equivalent, annual_equivalent
>>> monthly_equivalent(Decimal("1000"), Frequency.BIWEEKLY)
Decimal('2170.00')
>>> annual_equivalent(Decimal("1000"), "weekly")
Decimal('51960.00')
"""

from __future__ import annotations

import logging
from decimal import Decimal
from enum import Enum
from typing import Union

from .constants import (
    BIWEEKLY_PERIODS_PER_MONTH,
    DAYS_PER_MONTH,
    MONTHS_PER_QUARTER,
    MONTHS_PER_YEAR,
    WEEKS_PER_MONTH,
)
from .utils import Number, to_decimal

__all__ = [
    "Frequency",
    "parse_frequency",
    "monthly_equivalent",
    "annual_equivalent",
]

logger = logging.getLogger(__name__)


class Frequency(str, Enum):
    """Recurrence of an income source."""

    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "bi-weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"
    ONE_TIME = "one-time"

    @property
    def is_recurring(self) -> bool:
        return self is not Frequency.ONE_TIME


_ALIASES = {
    "biweekly": Frequency.BIWEEKLY,
    "bi_weekly": Frequency.BIWEEKLY,
    "fortnightly": Frequency.BIWEEKLY,
    "yearly": Frequency.ANNUALLY,
    "annual": Frequency.ANNUALLY,
    "one_time": Frequency.ONE_TIME,
    "onetime": Frequency.ONE_TIME,
    "once": Frequency.ONE_TIME,
    "none": Frequency.ONE_TIME,
}

FrequencyLike = Union[Frequency, str, None]


def parse_frequency(value: FrequencyLike) -> Frequency:
    """
    Resolve a stored frequency value to a ``Frequency``.

    Parameters
    ----------
    value : Frequency, str or None
        Enum member, canonical string (case-insensitive) or a known alias
        such as ``"biweekly"`` or ``"yearly"``.

    Returns
    -------
    Frequency
        ``Frequency.MONTHLY`` for missing or unrecognized values.
    """
    if isinstance(value, Frequency):
        return value
    if value is None:
        return Frequency.MONTHLY
    key = str(value).strip().lower()
    try:
        return Frequency(key)
    except ValueError:
        pass
    if key in _ALIASES:
        return _ALIASES[key]
    logger.debug("Unknown frequency %r treated as monthly", value)
    return Frequency.MONTHLY


def monthly_equivalent(amount: Number, frequency: FrequencyLike) -> Decimal:
    """Normalize *amount* paid at *frequency* to a 30-day month basis."""
    value = to_decimal(amount)
    freq = parse_frequency(frequency)
    if freq is Frequency.DAILY:
        return value * DAYS_PER_MONTH
    if freq is Frequency.WEEKLY:
        return value * WEEKS_PER_MONTH
    if freq is Frequency.BIWEEKLY:
        return value * BIWEEKLY_PERIODS_PER_MONTH
    if freq is Frequency.QUARTERLY:
        return value / MONTHS_PER_QUARTER
    if freq in (Frequency.ANNUALLY, Frequency.ONE_TIME):
        return value / MONTHS_PER_YEAR
    return value


def annual_equivalent(amount: Number, frequency: FrequencyLike) -> Decimal:
    """Twelve times the monthly equivalent."""
    return monthly_equivalent(amount, frequency) * MONTHS_PER_YEAR
