"""Configuration loader wrapping the shared schema models."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import (
    ConfigurationError,
    CurrencyConfig,
    DeductionConfig,
    EarningsAllocation,
    EarningsConfig,
    IdentifierConfig,
    PayrollConfiguration,
    ReferenceData,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
CONFIG_FILE = CONFIG_DIRECTORY / "payroll.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def parse_payroll_configuration(raw_config: dict[str, Any]) -> PayrollConfiguration:
    """Validate an already-decoded configuration mapping."""

    try:
        return PayrollConfiguration.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigurationError(f"Payroll configuration validation failed: {error}") from error


def read_payroll_configuration(path: Path) -> PayrollConfiguration:
    """Load and validate a payroll configuration file from ``path``."""

    if not path.exists():
        raise FileNotFoundError(f"Payroll configuration file missing: {path}")

    return parse_payroll_configuration(_load_yaml(path))


@lru_cache(maxsize=1)
def load_payroll_configuration() -> PayrollConfiguration:
    """Load and cache the bundled payroll configuration."""

    return read_payroll_configuration(CONFIG_FILE)


__all__ = [
    "CONFIG_DIRECTORY",
    "CONFIG_FILE",
    "ConfigurationError",
    "CurrencyConfig",
    "DeductionConfig",
    "EarningsAllocation",
    "EarningsConfig",
    "IdentifierConfig",
    "PayrollConfiguration",
    "ReferenceData",
    "load_payroll_configuration",
    "parse_payroll_configuration",
    "read_payroll_configuration",
]
