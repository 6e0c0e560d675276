"""
Unit tests for config.py Pydantic models.

Tests validation, defaults, and environment handling of configuration classes.
"""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from fincast.config import (
    AppSettings,
    BracketYearConfig,
    DebtConfig,
    FilingStatusConfig,
    IncomeSourceConfig,
    MonthlyPointConfig,
    ProfileConfig,
    TaxProfileConfig,
)


class TestIncomeSourceConfig:
    """Tests for IncomeSourceConfig validation."""

    def test_defaults(self):
        config = IncomeSourceConfig(amount="1200")

        assert config.amount == Decimal("1200")
        assert config.frequency == "monthly"
        assert config.is_taxable is True
        assert config.deductions == []

    def test_unknown_frequency_accepted(self):
        """Unknown frequencies are normalized later, not rejected."""
        config = IncomeSourceConfig(amount=100, frequency="sometimes")

        assert config.frequency == "sometimes"

    def test_negative_amount(self):
        with pytest.raises(ValidationError):
            IncomeSourceConfig(amount=-1)

    @pytest.mark.parametrize("source_type", ["primary", "side-hustle", "other"])
    def test_known_source_types(self, source_type):
        assert IncomeSourceConfig(amount=100, source_type=source_type).source_type == source_type

    def test_unknown_source_type_rejected(self):
        with pytest.raises(ValidationError, match="source_type"):
            IncomeSourceConfig(amount=100, source_type="lottery")

    def test_window_order(self):
        with pytest.raises(ValidationError, match="end_date"):
            IncomeSourceConfig(
                amount=100, start_date=date(2026, 5, 1), end_date=date(2026, 4, 1)
            )

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            IncomeSourceConfig(amount=100, currency="EUR")

    def test_frozen(self):
        config = IncomeSourceConfig(amount=100)

        with pytest.raises(ValidationError):
            config.amount = Decimal("5")


class TestMonthlyPointConfig:

    def test_valid_month(self):
        assert MonthlyPointConfig(month="2026-12").month == "2026-12"

    @pytest.mark.parametrize("month", ["2026-13", "2026-1", "26-01", "2026/01"])
    def test_invalid_month(self, month):
        with pytest.raises(ValidationError):
            MonthlyPointConfig(month=month)


class TestDebtConfig:

    def test_parses_strings(self):
        config = DebtConfig(current_balance="500.50", interest_rate="19.99", minimum_payment="25")

        assert config.current_balance == Decimal("500.50")
        assert config.original_balance is None

    def test_negative_balance(self):
        with pytest.raises(ValidationError):
            DebtConfig(current_balance=-1, interest_rate=5, minimum_payment=10)


class TestBracketConfigs:
    """Tests for bracket table models."""

    def test_valid_table(self):
        status = FilingStatusConfig(
            standard_deduction=13850,
            brackets=[{"threshold": 0, "rate": 10}, {"threshold": 11000, "rate": 12}],
        )

        assert len(status.brackets) == 2

    def test_first_threshold_must_be_zero(self):
        with pytest.raises(ValidationError, match="first threshold"):
            FilingStatusConfig(brackets=[{"threshold": 100, "rate": 10}])

    def test_ascending(self):
        with pytest.raises(ValidationError, match="strictly ascending"):
            FilingStatusConfig(
                brackets=[{"threshold": 0, "rate": 10}, {"threshold": 0, "rate": 12}]
            )

    def test_rate_is_percent(self):
        with pytest.raises(ValidationError):
            FilingStatusConfig(brackets=[{"threshold": 0, "rate": 150}])

    def test_year_requires_statuses(self):
        with pytest.raises(ValidationError):
            BracketYearConfig(year=2023, statuses={})


class TestProfileConfig:
    """Tests for ProfileConfig."""

    def test_empty_profile(self):
        config = ProfileConfig()

        assert config.name == "profile"
        assert config.debts == []
        assert config.tax is None

    def test_full_profile(self, profile_dict):
        config = ProfileConfig.model_validate(profile_dict)

        assert config.name == "Household"
        assert len(config.income_sources) == 2
        assert len(config.transactions) == 2
        assert config.transactions[0].occurred_on == date(2026, 8, 2)
        assert config.debts[1].original_balance == Decimal("20000")
        assert config.tax.deductions is None

    def test_tax_defaults(self):
        tax = TaxProfileConfig(gross_income=50000)

        assert tax.filing_status == "single"
        assert tax.year == 2023


class TestAppSettings:
    """Tests for AppSettings environment variable loading."""

    def test_defaults(self, monkeypatch):
        for var in ("FINCAST_DEBUG", "FINCAST_LOG_LEVEL", "FINCAST_LOOKBACK_MONTHS"):
            monkeypatch.delenv(var, raising=False)

        settings = AppSettings()

        assert settings.debug is False
        assert settings.log_level == "WARNING"
        assert settings.lookback_months == 3
        assert settings.original_balance_markup == Decimal("1")
        assert settings.payoff_cap_months == 360
        assert settings.default_tax_year == 2023

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("FINCAST_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("FINCAST_LOOKBACK_MONTHS", "6")
        monkeypatch.setenv("FINCAST_ORIGINAL_BALANCE_MARKUP", "1.1")

        settings = AppSettings()

        assert settings.log_level == "DEBUG"
        assert settings.lookback_months == 6
        assert settings.original_balance_markup == Decimal("1.1")

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("FINCAST_LOG_LEVEL", "LOUD")

        with pytest.raises(ValidationError):
            AppSettings()

    def test_markup_bounds(self, monkeypatch):
        monkeypatch.setenv("FINCAST_ORIGINAL_BALANCE_MARKUP", "3")

        with pytest.raises(ValidationError):
            AppSettings()
