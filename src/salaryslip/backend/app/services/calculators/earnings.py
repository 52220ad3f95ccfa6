"""Split a gross salary into its fixed earnings components."""

from __future__ import annotations

from numbers import Real

from salaryslip.backend.app.models import EarningsBreakdown
from salaryslip.backend.config.payroll_config import (
    EarningsAllocation,
    load_payroll_configuration,
)

from .utils import apply_rate, ensure_amount


def derive_earnings(
    gross: Real, allocation: EarningsAllocation | None = None
) -> EarningsBreakdown:
    """Return the earnings breakdown for ``gross``.

    Every component is ``round(gross × ratio)`` using the configured allocation
    table (basic 40%, HRA 20%, DA 10%, conveyance 5%, medical 5%, LTA 5%, other
    10%, bonus 5% by default). The breakdown is rebuilt from scratch on each
    call and keeps the exact ``gross`` it was derived from.
    """

    amount = ensure_amount(gross, "gross_salary")
    table = allocation or load_payroll_configuration().earnings.allocation

    components = {name: apply_rate(amount, ratio) for name, ratio in table.items()}
    return EarningsBreakdown(gross_salary=amount, **components)


__all__ = ["derive_earnings"]
