"""Pydantic models describing the public API surface."""

from __future__ import annotations

import math
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    ValidationError,
    field_validator,
)

__all__ = [
    "CalculationRequest",
    "IdentityRequest",
    "CardRequest",
    "SampleSlipRequest",
    "EmployeeDetailsModel",
    "SalaryComponentsModel",
    "DeductionsModel",
    "SalarySlipModel",
    "FormattedAmounts",
    "CalculationResponse",
    "format_validation_error",
]


def _require_finite(value: float | None) -> float | None:
    if value is not None and not math.isfinite(value):
        raise ValueError("value must be a finite number")
    return value


class CalculationRequest(BaseModel):
    """Gross salary submitted for a payroll breakdown."""

    model_config = ConfigDict(extra="forbid")

    gross_salary: float = Field(..., ge=0)
    loan_repayment: float = Field(default=0, ge=0)

    @field_validator("gross_salary", "loan_repayment", mode="before")
    @classmethod
    def _reject_booleans(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("value must be a number")
        return value

    @field_validator("gross_salary", "loan_repayment")
    @classmethod
    def _ensure_finite(cls, value: float) -> float:
        return _require_finite(value)


class IdentityRequest(BaseModel):
    """Optional seed used to reproduce a synthetic identity."""

    model_config = ConfigDict(extra="forbid")

    seed: int | None = None


class SampleSlipRequest(BaseModel):
    """Request for a complete, unsaved salary slip built from generated data."""

    model_config = ConfigDict(extra="forbid")

    seed: int | None = None
    gross_salary: float | None = Field(default=None, ge=1)

    @field_validator("gross_salary")
    @classmethod
    def _ensure_finite(cls, value: float | None) -> float | None:
        return _require_finite(value)


class CardRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    prefix: str
    seed: int | None = None


class EmployeeDetailsModel(BaseModel):
    """Identity fields persisted alongside a salary slip."""

    model_config = ConfigDict(extra="forbid")

    employee_id: str = Field(..., pattern=r"^[A-Z]+\d{6}$")
    tan: str = Field(..., pattern=r"^[A-Z]{4}\d{5}[A-Z]$")
    pan: str = Field(..., pattern=r"^[A-Z]{5}\d{4}[A-Z]$")
    pf_number: str = Field(..., pattern=r"^[A-Z]{2}/\d{3}/\d{7}/\d{3}/\d{4}$")
    esi_number: str = Field(..., pattern=r"^\d{17}$")
    designation: str = Field(..., min_length=1)
    department: str = Field(..., min_length=1)
    bank_name: str = Field(..., min_length=1)
    account_number: str = Field(..., pattern=r"^\d{11}$")
    ifsc_code: str = Field(..., pattern=r"^[A-Z]+0\d{6}$")
    location: str = Field(..., min_length=1)
    email: EmailStr


class SalaryComponentsModel(BaseModel):
    """Earnings breakdown as exchanged over the API."""

    model_config = ConfigDict(extra="forbid")

    gross_salary: float = Field(..., ge=1)
    basic: int = Field(..., ge=0)
    hra: int = Field(..., ge=0)
    da: int = Field(..., ge=0)
    conveyance_allowance: int = Field(..., ge=0)
    medical_allowance: int = Field(..., ge=0)
    lta: int = Field(..., ge=0)
    other_allowances: int = Field(..., ge=0)
    performance_bonus: int = Field(..., ge=0)

    @field_validator("gross_salary")
    @classmethod
    def _ensure_finite(cls, value: float) -> float:
        return _require_finite(value)


class DeductionsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    pf: int = Field(..., ge=0)
    professional_tax: int = Field(..., ge=0)
    tds: int = Field(..., ge=0)
    esi: int = Field(..., ge=0)
    loan_repayments: float = Field(..., ge=0)


class SalarySlipModel(BaseModel):
    """Complete salary slip accepted by the persistence endpoints."""

    model_config = ConfigDict(extra="forbid")

    employee_details: EmployeeDetailsModel
    earnings: SalaryComponentsModel
    deductions: DeductionsModel
    net_salary: float

    @field_validator("net_salary")
    @classmethod
    def _ensure_finite(cls, value: float) -> float:
        return _require_finite(value)


class FormattedAmounts(BaseModel):
    """Display strings for the headline amounts of a calculation."""

    gross_salary: str
    total_earnings: str
    total_deductions: str
    net_salary: str


class CalculationResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    earnings: dict[str, float]
    deductions: DeductionsModel
    total_earnings: int
    total_deductions: float
    net_salary: float
    formatted: FormattedAmounts
    meta: dict[str, Any] = Field(default_factory=dict)


def format_validation_error(error: ValidationError, *, subject: str = "payload") -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if "greater than or equal to 0" in message.lower():
            message = "value cannot be negative"
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid {subject}: {details}"
