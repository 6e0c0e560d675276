"""Bundled tax bracket tables.

Bracket tables and standard deductions per filing status are shipped as
YAML under ``fincast/data`` and listed in ``manifest.yaml``. Tables are
validated with the pydantic models in ``fincast.config`` and cached, so
repeated lookups do not touch the disk.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml
from pydantic import ValidationError as PydanticValidationError

from .config import BracketManifest, BracketYearConfig
from .constants import DEFAULT_TAX_YEAR
from .exceptions import ConfigurationError
from .tax import TaxBracket, validate_brackets

__all__ = [
    "DATA_DIRECTORY",
    "MANIFEST_FILE",
    "load_manifest",
    "load_year",
    "available_years",
    "filing_statuses",
    "load_brackets",
    "standard_deduction",
]

DATA_DIRECTORY = Path(__file__).resolve().parent / "data"
MANIFEST_FILE = DATA_DIRECTORY / "manifest.yaml"


def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path.name} must define a mapping at the top level")
    return data


@lru_cache(maxsize=1)
def load_manifest() -> BracketManifest:
    """Load and cache the bracket manifest."""
    if not MANIFEST_FILE.exists():
        raise ConfigurationError("Bracket manifest not found")
    try:
        return BracketManifest.model_validate(_load_yaml(MANIFEST_FILE))
    except PydanticValidationError as error:
        raise ConfigurationError(f"Bracket manifest validation failed: {error}") from error


@lru_cache(maxsize=8)
def load_year(year: int = DEFAULT_TAX_YEAR) -> BracketYearConfig:
    """Load the bracket tables for *year*."""
    try:
        entry = load_manifest().get_entry(year)
    except KeyError as exc:
        raise ConfigurationError(
            f"No bracket tables for {year}. Available years: "
            f"{', '.join(str(y) for y in available_years())}"
        ) from exc

    path = DATA_DIRECTORY / entry.file
    if not path.exists():
        raise ConfigurationError(f"Bracket file for {year} missing: {path.name}")

    raw = _load_yaml(path)
    raw.setdefault("year", year)
    try:
        config = BracketYearConfig.model_validate(raw)
    except PydanticValidationError as error:
        raise ConfigurationError(f"Bracket tables for {year} failed validation: {error}") from error

    if config.year != year:
        raise ConfigurationError(f"Bracket year mismatch: expected {year}, found {config.year}")
    return config


def available_years() -> Sequence[int]:
    return load_manifest().supported_years


def filing_statuses(year: int = DEFAULT_TAX_YEAR) -> List[str]:
    return sorted(load_year(year).statuses)


def _status(year: int, filing_status: str):
    statuses = load_year(year).statuses
    key = filing_status.strip().lower()
    if key not in statuses:
        raise ConfigurationError(
            f"No bracket table for filing status {filing_status!r} in {year}. "
            f"Available: {', '.join(sorted(statuses))}"
        )
    return statuses[key]


def load_brackets(filing_status: str = "single", year: int = DEFAULT_TAX_YEAR) -> List[TaxBracket]:
    """Bracket table for *filing_status* in *year*, validated for marching."""
    status = _status(year, filing_status)
    return validate_brackets([TaxBracket(b.threshold, b.rate) for b in status.brackets])


def standard_deduction(filing_status: str = "single", year: int = DEFAULT_TAX_YEAR):
    return _status(year, filing_status).standard_deduction
