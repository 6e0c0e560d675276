"""
Configuration management module for FinCast.

Purpose
-------
Pydantic models for the plain records the engine consumes at its edges
(profile files, bundled bracket tables) and for application settings read
from the environment. The engine itself works on frozen dataclasses; these
models validate and type-coerce raw input before it is converted.

Design Principles
-----------------
- Type-safe: Pydantic enforces types and validates ranges
- Immutable: Frozen models prevent accidental mutation
- Decimal money: amounts are parsed straight to ``Decimal``
- Environment-aware: ``AppSettings`` reads ``FINCAST_*`` variables and .env

Example
-------
>>> from fincast.config import DebtConfig, AppSettings
>>> debt = DebtConfig(name="Card", current_balance="500", interest_rate=20,
...                   minimum_payment=25)
>>> debt.current_balance
Decimal('500')
>>> AppSettings().lookback_months
3
"""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_LOOKBACK_MONTHS,
    DEFAULT_ORIGINAL_BALANCE_MARKUP,
    DEFAULT_TAX_YEAR,
    PAYOFF_CAP_MONTHS,
    SOURCE_TYPES,
)

__all__ = [
    "IncomeSourceConfig",
    "TransactionConfig",
    "MonthlyPointConfig",
    "DebtConfig",
    "BracketConfig",
    "FilingStatusConfig",
    "BracketYearConfig",
    "BracketManifestEntry",
    "BracketManifest",
    "TaxProfileConfig",
    "ProfileConfig",
    "AppSettings",
]


# ---------------------------------------------------------------------------
# Income & Transactions
# ---------------------------------------------------------------------------

class IncomeSourceConfig(BaseModel):
    """
    One stored income source.

    ``frequency`` stays a free string: unknown values are normalized as
    monthly by the engine instead of being rejected here.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="income", max_length=100, description="Source label")
    amount: Decimal = Field(ge=0, description="Gross amount per payment")
    frequency: str = Field(default="monthly", description="Pay frequency")
    is_taxable: bool = Field(default=True, description="Counts toward taxable income")
    start_date: Optional[datetime.date] = Field(default=None, description="First active day")
    end_date: Optional[datetime.date] = Field(default=None, description="Last active day")
    source_type: str = Field(default="primary", description="Source category")
    deductions: List[Decimal] = Field(
        default_factory=list, description="Per-payment deductions"
    )
    side_hustles: List[Decimal] = Field(
        default_factory=list, description="Per-payment side-hustle amounts"
    )

    @field_validator("source_type")
    @classmethod
    def validate_source_type(cls, v):
        if v not in SOURCE_TYPES:
            raise ValueError(
                f"source_type must be one of {', '.join(SOURCE_TYPES)}, got {v!r}"
            )
        return v

    @model_validator(mode="after")
    def validate_window(self) -> "IncomeSourceConfig":
        """Ensure end_date is not before start_date."""
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError(
                f"end_date ({self.end_date}) must not be before start_date ({self.start_date})"
            )
        return self


class TransactionConfig(BaseModel):
    """One ledger row used for monthly aggregation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    amount: Decimal = Field(ge=0, description="Transaction amount")
    occurred_on: datetime.date = Field(description="Transaction date")
    is_income: bool = Field(default=False, description="True for income rows")


class MonthlyPointConfig(BaseModel):
    """Pre-aggregated monthly totals."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    month: str = Field(pattern=r"^\d{4}-(0[1-9]|1[0-2])$", description="YYYY-MM key")
    income: Decimal = Field(default=Decimal("0"), ge=0)
    expenses: Decimal = Field(default=Decimal("0"), ge=0)


# ---------------------------------------------------------------------------
# Debts
# ---------------------------------------------------------------------------

class DebtConfig(BaseModel):
    """One stored debt."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="debt", max_length=100)
    debt_id: Optional[str] = Field(default=None, max_length=100)
    current_balance: Decimal = Field(ge=0, description="Outstanding balance")
    interest_rate: Decimal = Field(ge=0, description="Annual rate in percent")
    minimum_payment: Decimal = Field(ge=0, description="Required monthly payment")
    original_balance: Optional[Decimal] = Field(
        default=None, ge=0, description="Balance when opened, if known"
    )


# ---------------------------------------------------------------------------
# Tax brackets
# ---------------------------------------------------------------------------

class BracketConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    threshold: Decimal = Field(ge=0, description="Lower bound of the bracket")
    rate: Decimal = Field(ge=0, le=100, description="Rate in percent")


class FilingStatusConfig(BaseModel):
    """Bracket table and standard deduction for one filing status."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    standard_deduction: Decimal = Field(default=Decimal("0"), ge=0)
    brackets: List[BracketConfig] = Field(min_length=1)

    @field_validator("brackets")
    @classmethod
    def validate_ascending(cls, v):
        """Ensure the table starts at 0 and thresholds strictly ascend."""
        if v[0].threshold != 0:
            raise ValueError(f"first threshold must be 0, got {v[0].threshold}")
        for previous, current in zip(v, v[1:]):
            if current.threshold <= previous.threshold:
                raise ValueError(
                    f"thresholds must be strictly ascending ({current.threshold} "
                    f"follows {previous.threshold})"
                )
        return v


class BracketYearConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    year: int = Field(ge=1900, le=2100)
    statuses: Dict[str, FilingStatusConfig] = Field(min_length=1)


class BracketManifestEntry(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    year: int = Field(ge=1900, le=2100)
    file: str = Field(min_length=1)


class BracketManifest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    years: List[BracketManifestEntry] = Field(min_length=1)

    def get_entry(self, year: int) -> BracketManifestEntry:
        for entry in self.years:
            if entry.year == year:
                return entry
        raise KeyError(year)

    @property
    def supported_years(self) -> List[int]:
        return sorted(entry.year for entry in self.years)


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

class TaxProfileConfig(BaseModel):
    """Tax inputs stored alongside a profile."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    gross_income: Decimal = Field(ge=0)
    deductions: Optional[Decimal] = Field(
        default=None, ge=0, description="None means the standard deduction"
    )
    filing_status: str = Field(default="single")
    year: int = Field(default=DEFAULT_TAX_YEAR)


class ProfileConfig(BaseModel):
    """
    Complete set of records for one account.

    Examples
    --------
    >>> profile = ProfileConfig.model_validate({
    ...     "income_sources": [{"name": "Salary", "amount": 2500, "frequency": "bi-weekly"}],
    ...     "debts": [{"name": "Card", "current_balance": 500, "interest_rate": 20,
    ...                "minimum_payment": 25}],
    ... })
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="profile", max_length=100)
    income_sources: List[IncomeSourceConfig] = Field(default_factory=list)
    transactions: List[TransactionConfig] = Field(default_factory=list)
    monthly_points: List[MonthlyPointConfig] = Field(default_factory=list)
    debts: List[DebtConfig] = Field(default_factory=list)
    tax: Optional[TaxProfileConfig] = Field(default=None)


# ---------------------------------------------------------------------------
# Application Settings (Environment Variables)
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Environment variables are prefixed with FINCAST_ (e.g.
    FINCAST_LOG_LEVEL=DEBUG). A local .env file is read when present.

    Attributes
    ----------
    debug : bool
        Enable debug mode (forces DEBUG logging)
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR"
    lookback_months : int
        Transaction history window for cashflow trends
    original_balance_markup : Decimal
        Estimation factor for debts without an original balance
    payoff_cap_months : int
        Horizon for the repayment simulation
    default_tax_year : int
        Bracket table year used when none is given

    Examples
    --------
    >>> settings = AppSettings()
    >>> settings.log_level
    'WARNING'
    """

    model_config = SettingsConfigDict(
        env_prefix="FINCAST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING", description="Logging level"
    )
    lookback_months: int = Field(
        default=DEFAULT_LOOKBACK_MONTHS, ge=1, le=120,
        description="Months of transactions used for trends",
    )
    original_balance_markup: Decimal = Field(
        default=DEFAULT_ORIGINAL_BALANCE_MARKUP, ge=1, le=2,
        description="Original-balance estimation factor",
    )
    payoff_cap_months: int = Field(
        default=PAYOFF_CAP_MONTHS, ge=12, le=1200,
        description="Repayment simulation horizon (months)",
    )
    default_tax_year: int = Field(default=DEFAULT_TAX_YEAR, description="Bracket table year")
