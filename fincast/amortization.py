"""Debt amortization estimate for FinCast

Months-to-payoff for a single debt paying a fixed monthly amount, using the
closed-form amortization formula

    n = ln(P / (P - B*r)) / ln(1 + r),    r = annual_rate / 100 / 12

with explicit fallbacks for the degenerate cases: zero rate (simple
division), no payment, and payments that never cover the accruing interest.
Degenerate or non-finite results are clamped to ``PAYOFF_CAP_MONTHS`` and
never propagated as NaN.
"""

from __future__ import annotations

import logging
from decimal import ROUND_CEILING, Decimal, InvalidOperation

from .constants import MONTHS_PER_YEAR, PAYOFF_CAP_MONTHS
from .exceptions import InvalidDebtInput
from .utils import HUNDRED, ZERO, Number, check_non_negative, to_decimal

__all__ = [
    "monthly_rate",
    "months_to_payoff",
]

logger = logging.getLogger(__name__)


def monthly_rate(annual_rate_percent: Number) -> Decimal:
    """Annual percentage rate to a simple monthly fraction."""
    return to_decimal(annual_rate_percent) / HUNDRED / MONTHS_PER_YEAR


def months_to_payoff(
    balance: Number,
    annual_rate_percent: Number,
    monthly_payment: Number,
    *,
    cap: int = PAYOFF_CAP_MONTHS,
) -> int:
    """
    Estimate whole months until *balance* is repaid.

    Parameters
    ----------
    balance : Decimal
        Outstanding balance. Must be non-negative.
    annual_rate_percent : Decimal
        Annual interest rate in percent (20 means 20%). Must be non-negative.
    monthly_payment : Decimal
        Fixed monthly payment. Must be non-negative.
    cap : int, default PAYOFF_CAP_MONTHS
        Horizon returned when the debt never amortizes; finite estimates
        longer than this are clamped to it.

    Returns
    -------
    int
        Months, rounded up. 0 for a zero balance.

    Raises
    ------
    InvalidDebtInput
        If any input is negative.

    Examples
    --------
    >>> months_to_payoff(10_000, 20, 500)
    25
    >>> months_to_payoff(10_000, 24, 100)  # payment below monthly interest
    360
    """
    b = to_decimal(balance)
    p = to_decimal(monthly_payment)
    check_non_negative("current_balance", b, error=InvalidDebtInput)
    check_non_negative("interest_rate", to_decimal(annual_rate_percent), error=InvalidDebtInput)
    check_non_negative("minimum_payment", p, error=InvalidDebtInput)

    if b == 0:
        return 0
    if p <= 0:
        logger.debug("No payment on balance %s; capping at %d months", b, cap)
        return cap

    r = monthly_rate(annual_rate_percent)
    if r == 0:
        months = b / p
    else:
        if p <= b * r:
            logger.debug("Payment %s never covers interest on %s; capping at %d months", p, b, cap)
            return cap
        try:
            months = (p / (p - b * r)).ln() / (1 + r).ln()
        except (InvalidOperation, ZeroDivisionError):
            return cap

    if not months.is_finite() or months < 0:
        return cap
    whole = int(months.to_integral_value(rounding=ROUND_CEILING))
    return min(whole, cap)
