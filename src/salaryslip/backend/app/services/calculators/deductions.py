"""Statutory deductions derived from an earnings breakdown."""

from __future__ import annotations

from numbers import Real

from salaryslip.backend.app.errors import InvalidInput
from salaryslip.backend.app.models import (
    DeductionBreakdown,
    EarningsBreakdown,
)
from salaryslip.backend.config.payroll_config import (
    DeductionConfig,
    load_payroll_configuration,
)

from .utils import apply_rate, ensure_amount


def _validate_earnings(earnings: EarningsBreakdown) -> None:
    ensure_amount(earnings.gross_salary, "gross_salary")
    for name, value in earnings.components().items():
        if value < 0:
            raise InvalidInput(f"Earnings field '{name}' cannot be negative")


def derive_deductions(
    earnings: EarningsBreakdown,
    *,
    loan_repayment: Real | None = None,
    rates: DeductionConfig | None = None,
) -> DeductionBreakdown:
    """Return the deductions owed for ``earnings``.

    Provident fund is charged on the basic component, TDS and ESI on the gross.
    Professional tax is flat. Loan repayments are supplied by the caller and
    default to the configured amount (zero).
    """

    _validate_earnings(earnings)
    config = rates or load_payroll_configuration().deductions

    if loan_repayment is None:
        loan = config.loan_repayments
    else:
        loan = ensure_amount(loan_repayment, "loan_repayment")

    return DeductionBreakdown(
        pf=apply_rate(earnings.basic, config.pf_rate),
        professional_tax=config.professional_tax,
        tds=apply_rate(earnings.gross_salary, config.tds_rate),
        esi=apply_rate(earnings.gross_salary, config.esi_rate),
        loan_repayments=loan,
    )


__all__ = ["derive_deductions"]
