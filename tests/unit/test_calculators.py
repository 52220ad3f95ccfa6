"""Unit tests for the earnings, deductions and net salary calculators."""

from __future__ import annotations

import math
from decimal import Decimal

import pytest

from salaryslip.backend.app.errors import InvalidInput
from salaryslip.backend.app.models import EarningsBreakdown
from salaryslip.backend.app.services.calculators import (
    apply_rate,
    compute_net,
    derive_deductions,
    derive_earnings,
    round_currency,
)


def test_derive_earnings_splits_reference_gross() -> None:
    earnings = derive_earnings(1_000_000)

    assert earnings.components() == {
        "basic": 400_000,
        "hra": 200_000,
        "da": 100_000,
        "conveyance_allowance": 50_000,
        "medical_allowance": 50_000,
        "lta": 50_000,
        "other_allowances": 100_000,
        "performance_bonus": 50_000,
    }
    assert earnings.gross_salary == 1_000_000
    assert earnings.total == 1_000_000


@pytest.mark.parametrize("gross", [1, 7, 999, 123_457, 333_333, 1_234_567, 9_999_999])
def test_component_sum_stays_within_rounding_tolerance(gross: int) -> None:
    earnings = derive_earnings(gross)

    # Eight independently rounded components drift by at most half a unit each.
    assert abs(earnings.total - gross) <= 8


def test_derive_earnings_keeps_fractional_gross_verbatim() -> None:
    earnings = derive_earnings(1000.5)

    assert earnings.gross_salary == 1000.5
    assert earnings.basic == 400  # 400.2
    assert earnings.conveyance_allowance == 50  # 50.025


@pytest.mark.parametrize("gross", [-1, -0.01, math.nan, math.inf, -math.inf, True, "1000"])
def test_derive_earnings_rejects_invalid_gross(gross: object) -> None:
    with pytest.raises(InvalidInput):
        derive_earnings(gross)  # type: ignore[arg-type]


def test_half_units_round_away_from_zero() -> None:
    assert round_currency(2.5) == 3
    assert round_currency(0.5) == 1
    assert apply_rate(25_000, 0.0075) == 188
    assert apply_rate(10, 0.05) == 1


def test_derive_deductions_for_reference_gross() -> None:
    deductions = derive_deductions(derive_earnings(1_000_000))

    assert deductions.pf == 48_000
    assert deductions.professional_tax == 200
    assert deductions.tds == 100_000
    assert deductions.esi == 7_500
    assert deductions.loan_repayments == 0
    assert deductions.total == 155_700


def test_derive_deductions_is_deterministic() -> None:
    earnings = derive_earnings(777_777)

    assert derive_deductions(earnings) == derive_deductions(earnings)


def test_pf_is_charged_on_basic_only() -> None:
    base = derive_earnings(100_000)
    inflated = EarningsBreakdown(**{**base.as_dict(), "hra": 90_000})

    assert derive_deductions(inflated).pf == derive_deductions(base).pf == 4_800


def test_loan_repayment_is_included_in_total() -> None:
    deductions = derive_deductions(derive_earnings(500_000), loan_repayment=10_000)

    assert deductions.loan_repayments == 10_000
    assert deductions.total == 87_950


def test_negative_earnings_field_is_rejected() -> None:
    base = derive_earnings(100_000)
    broken = EarningsBreakdown(**{**base.as_dict(), "basic": -1})

    with pytest.raises(InvalidInput, match="basic"):
        derive_deductions(broken)


def test_negative_loan_repayment_is_rejected() -> None:
    with pytest.raises(InvalidInput):
        derive_deductions(derive_earnings(100_000), loan_repayment=-5)


def test_compute_net_for_reference_gross() -> None:
    earnings = derive_earnings(1_000_000)
    result = compute_net(earnings, derive_deductions(earnings))

    assert result.gross_salary == 1_000_000
    assert result.total_deductions == 155_700
    assert result.net_salary == 844_300


def test_compute_net_uses_gross_not_component_sum() -> None:
    earnings = derive_earnings(123_457)
    deductions = derive_deductions(earnings)

    result = compute_net(earnings, deductions)

    assert earnings.total == 123_458
    assert result.net_salary == 123_457 - deductions.total


def test_compute_net_may_be_negative() -> None:
    earnings = derive_earnings(0)
    result = compute_net(earnings, derive_deductions(earnings))

    assert result.total_deductions == 200
    assert result.net_salary == -200


@pytest.mark.parametrize("gross", [10**28, 10**30, 1e30, 123_456_789_012_345_678_901_234_567_891])
def test_very_large_gross_is_split_exactly(gross: float) -> None:
    earnings = derive_earnings(gross)

    whole = int(Decimal(str(gross)))
    # Half-up rounding of whole × 0.4 and whole × 0.1 in integer arithmetic.
    assert earnings.basic == (whole * 4 + 5) // 10
    assert abs(earnings.total - whole) <= 8
    assert derive_deductions(earnings).tds == (whole + 5) // 10


def test_large_half_unit_still_rounds_up() -> None:
    assert round_currency(Decimal("12345678901234567890123456789.5")) == (
        12345678901234567890123456790
    )
    assert apply_rate(10**40 + 10, 0.05) == 5 * 10**38 + 1


def test_decimal_amounts_are_rejected() -> None:
    with pytest.raises(InvalidInput):
        derive_earnings(Decimal("100000"))  # type: ignore[arg-type]

    earnings = derive_earnings(100_000)
    with pytest.raises(InvalidInput):
        derive_deductions(earnings, loan_repayment=Decimal("0.5"))  # type: ignore[arg-type]


def test_fractional_loan_keeps_net_computable() -> None:
    earnings = derive_earnings(100_000)

    result = compute_net(earnings, derive_deductions(earnings, loan_repayment=0.5))

    assert result.net_salary == 100_000 - (4_800 + 200 + 10_000 + 750 + 0.5)
