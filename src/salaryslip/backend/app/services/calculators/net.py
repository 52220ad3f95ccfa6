"""Reduce earnings and deductions into the net salary."""

from __future__ import annotations

from salaryslip.backend.app.models import (
    DeductionBreakdown,
    EarningsBreakdown,
    NetResult,
)


def compute_net(earnings: EarningsBreakdown, deductions: DeductionBreakdown) -> NetResult:
    """Return ``gross − Σ deductions`` for the pair.

    The gross carried by ``earnings`` is used verbatim. A negative net is a valid
    result when deductions exceed the gross.
    """

    total_deductions = deductions.total
    return NetResult(
        gross_salary=earnings.gross_salary,
        total_deductions=total_deductions,
        net_salary=earnings.gross_salary - total_deductions,
    )


__all__ = ["compute_net"]
