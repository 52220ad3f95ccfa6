"""Value objects and API schemas shared across the payroll services.

Calculator and generator results are plain frozen dataclasses so callers can
treat them as immutable snapshots. The Pydantic models in :mod:`.api` describe
the JSON surface and validate records before they reach persistence.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from .api import (
    CalculationRequest,
    CalculationResponse,
    CardRequest,
    DeductionsModel,
    EmployeeDetailsModel,
    FormattedAmounts,
    IdentityRequest,
    SalaryComponentsModel,
    SalarySlipModel,
    SampleSlipRequest,
    format_validation_error,
)

__all__ = [
    "EARNINGS_COMPONENTS",
    "DEDUCTION_FIELDS",
    "EarningsBreakdown",
    "DeductionBreakdown",
    "NetResult",
    "SyntheticIdentity",
    "CalculationRequest",
    "CalculationResponse",
    "CardRequest",
    "DeductionsModel",
    "EmployeeDetailsModel",
    "FormattedAmounts",
    "IdentityRequest",
    "SalaryComponentsModel",
    "SalarySlipModel",
    "SampleSlipRequest",
    "format_validation_error",
]


EARNINGS_COMPONENTS: tuple[str, ...] = (
    "basic",
    "hra",
    "da",
    "conveyance_allowance",
    "medical_allowance",
    "lta",
    "other_allowances",
    "performance_bonus",
)

DEDUCTION_FIELDS: tuple[str, ...] = (
    "pf",
    "professional_tax",
    "tds",
    "esi",
    "loan_repayments",
)


@dataclass(frozen=True)
class EarningsBreakdown:
    """Gross salary split into its weighted earnings components."""

    gross_salary: float
    basic: int
    hra: int
    da: int
    conveyance_allowance: int
    medical_allowance: int
    lta: int
    other_allowances: int
    performance_bonus: int

    def components(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in EARNINGS_COMPONENTS}

    @property
    def total(self) -> int:
        """Sum of the rounded components (may differ from gross by rounding)."""

        return sum(self.components().values())

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DeductionBreakdown:
    """Statutory withholdings derived from an :class:`EarningsBreakdown`."""

    pf: int
    professional_tax: int
    tds: int
    esi: int
    loan_repayments: float = 0

    @property
    def total(self) -> float:
        return sum(getattr(self, name) for name in DEDUCTION_FIELDS)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class NetResult:
    gross_salary: float
    total_deductions: float
    net_salary: float


@dataclass(frozen=True)
class SyntheticIdentity:
    """Fictitious employee identity assembled from independent generators."""

    employee_id: str
    tan: str
    pan: str
    pf_number: str
    esi_number: str
    designation: str
    department: str
    bank_name: str
    account_number: str
    ifsc_code: str
    location: str
    email: str
    password: str

    def employee_details(self) -> dict[str, str]:
        """Return the identity without credentials, as stored on a salary slip."""

        details = asdict(self)
        details.pop("password")
        return details

    def as_dict(self) -> dict[str, str]:
        return asdict(self)
