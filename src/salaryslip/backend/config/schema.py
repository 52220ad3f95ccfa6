"""Pydantic models describing the payroll configuration schema."""

from __future__ import annotations

import math
from typing import Any, Iterator

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from typing_extensions import Self


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


def _ensure_rate(value: float, name: str) -> float:
    if not math.isfinite(value) or value < 0 or value > 1:
        raise ConfigurationError(f"{name} must be between 0 and 1")
    return value


class CurrencyConfig(ImmutableModel):
    """Display settings for rendered amounts; digits are always grouped en-IN style."""

    code: str = "INR"
    symbol: str = "₹"


class EarningsAllocation(ImmutableModel):
    """Fixed share of the gross salary assigned to each earnings component."""

    basic: float
    hra: float
    da: float
    conveyance_allowance: float
    medical_allowance: float
    lta: float
    other_allowances: float
    performance_bonus: float

    @model_validator(mode="after")
    def _validate_ratios(self) -> Self:
        for name, ratio in self.items():
            _ensure_rate(ratio, f"earnings.allocation.{name}")
        total = sum(ratio for _, ratio in self.items())
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ConfigurationError(
                f"Earnings allocation ratios must sum to 1 (found {total:.6f})"
            )
        return self

    def items(self) -> Iterator[tuple[str, float]]:
        """Yield ``(component, ratio)`` pairs in declaration order."""

        for name in type(self).model_fields:
            yield name, getattr(self, name)


class EarningsConfig(ImmutableModel):
    allocation: EarningsAllocation


class DeductionConfig(ImmutableModel):
    """Statutory deduction rates and flat amounts."""

    pf_rate: float
    professional_tax: int = Field(ge=0)
    tds_rate: float
    esi_rate: float
    loan_repayments: int = Field(default=0, ge=0)

    @field_validator("pf_rate", "tds_rate", "esi_rate")
    @classmethod
    def _validate_rate(cls, value: float, info: ValidationInfo) -> float:
        return _ensure_rate(value, f"deductions.{info.field_name}")


class IdentifierConfig(ImmutableModel):
    """Formatting parameters for synthetic identifiers."""

    employee_prefix: str = "EMP"
    email_domain: str = "company.com"
    card_length: int = Field(default=16, gt=0)
    card_prefix_length: int = Field(default=6, gt=0)
    pf_extension: str = "000"

    @model_validator(mode="after")
    def _validate_card_lengths(self) -> Self:
        # The final card digit is reserved for the checksum.
        if self.card_prefix_length >= self.card_length:
            raise ConfigurationError(
                "identifiers.card_prefix_length must be shorter than card_length"
            )
        if not self.employee_prefix.isalpha():
            raise ConfigurationError("identifiers.employee_prefix must be alphabetic")
        return self


class ReferenceData(ImmutableModel):
    """Static lookup tables used by the categorical generators."""

    cities: tuple[str, ...]
    banks: tuple[str, ...]
    departments: tuple[str, ...]
    designations: tuple[str, ...]

    @field_validator("cities", "banks", "departments", "designations", mode="before")
    @classmethod
    def _coerce_entries(cls, value: Any) -> tuple[str, ...]:
        if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
            raise ConfigurationError("Reference data entries must be sequences of names")
        entries = tuple(str(entry).strip() for entry in value)
        if not entries:
            raise ConfigurationError("Reference data sequences cannot be empty")
        if any(not entry for entry in entries):
            raise ConfigurationError("Reference data entries cannot be blank")
        return entries


class PayrollConfiguration(ImmutableModel):
    """Top-level payroll configuration document."""

    currency: CurrencyConfig = Field(default_factory=CurrencyConfig)
    earnings: EarningsConfig
    deductions: DeductionConfig
    identifiers: IdentifierConfig = Field(default_factory=IdentifierConfig)
    reference_data: ReferenceData


__all__ = [
    "ConfigurationError",
    "CurrencyConfig",
    "DeductionConfig",
    "EarningsAllocation",
    "EarningsConfig",
    "IdentifierConfig",
    "ImmutableModel",
    "PayrollConfiguration",
    "ReferenceData",
]
