"""
Custom exceptions for FinCast.

Purpose
-------
Provides a unified exception hierarchy for consistent error handling
across all FinCast modules. All exceptions inherit from FinCastError,
enabling catch-all handling when needed.

Only genuinely invalid *required* inputs fail. Divide-by-zero paths,
unknown frequencies and non-finite amortization results are resolved to
safe defaults inside the engine and never reach the caller as errors.

Exception Hierarchy
-------------------
FinCastError (base)
├── ConfigurationError - Invalid profile files, settings or bundled tables
└── ValidationError - Invalid required inputs (also a ValueError)
    ├── InvalidBracketTable - Tax bracket table out of order
    └── InvalidDebtInput - Negative debt balance, rate or payment

Usage
-----
>>> from fincast.exceptions import InvalidDebtInput, FinCastError
>>>
>>> raise InvalidDebtInput("current_balance must be non-negative, got -5")
>>>
>>> try:
...     summary = portfolio_summary(debts)
... except FinCastError as e:
...     print(f"FinCast error: {e}")
"""

__all__ = [
    "FinCastError",
    "ConfigurationError",
    "ValidationError",
    "InvalidBracketTable",
    "InvalidDebtInput",
]


class FinCastError(Exception):
    """
    Base exception for all FinCast errors.

    Examples
    --------
    >>> try:
    ...     calculate(50_000, brackets, deductions=12_950)
    ... except FinCastError as e:
    ...     logger.error(f"Tax calculation failed: {e}")
    """
    pass


class ConfigurationError(FinCastError):
    """
    Invalid configuration or input files.

    Raised when:
    - A profile file cannot be parsed or fails schema validation
    - A bundled bracket table is requested for an unknown year or status

    Examples
    --------
    >>> raise ConfigurationError(
    ...     "No bracket table for filing status 'widow' in 2023. "
    ...     "Available: head-of-household, married-joint, married-separate, single"
    ... )
    """
    pass


class ValidationError(FinCastError, ValueError):
    """
    Required input failed validation.

    Inherits from ValueError so callers that only know about the builtin
    exception still catch it.

    Examples
    --------
    >>> raise ValidationError("amount must be non-negative (got -10)")
    """
    pass


class InvalidBracketTable(ValidationError):
    """
    Tax bracket table violates the marching preconditions.

    Raised when:
    - The table is empty
    - The first threshold is not 0
    - Thresholds are not strictly ascending
    - A rate is negative

    Examples
    --------
    >>> raise InvalidBracketTable(
    ...     "Bracket thresholds must be strictly ascending: "
    ...     "11000 at position 2 follows 44725"
    ... )
    """
    pass


class InvalidDebtInput(ValidationError):
    """
    Debt snapshot with a negative balance, rate or payment.

    Examples
    --------
    >>> raise InvalidDebtInput("interest_rate must be non-negative (got -2)")
    """
    pass
