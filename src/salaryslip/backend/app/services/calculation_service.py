"""Orchestrate request validation and the gross → earnings → deductions → net chain.

Each calculator stage is a pure function; this module validates the incoming
payload, runs the stages in order and shapes the JSON payload returned by the
API. Profiling hooks live here so the calculators stay free of side effects.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from contextlib import contextmanager
from time import perf_counter
from typing import Any

from pydantic import ValidationError

from salaryslip.backend.app.errors import InvalidInput
from salaryslip.backend.app.models import (
    CalculationRequest,
    CalculationResponse,
    DeductionBreakdown,
    EarningsBreakdown,
    NetResult,
    format_validation_error,
)
from salaryslip.backend.config.payroll_config import (
    PayrollConfiguration,
    load_payroll_configuration,
)

from .calculators import (
    compute_net,
    derive_deductions,
    derive_earnings,
    format_amount,
    format_percentage,
)

_LOGGER = logging.getLogger(__name__)


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv("SALARYSLIP_PROFILE_CALCULATIONS", "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def _normalise_amount(value: float) -> int | float:
    # JSON numbers arrive as floats once validated; keep whole amounts integral.
    if float(value).is_integer():
        return int(value)
    return value


def _parse_request(payload: Mapping[str, Any] | CalculationRequest) -> CalculationRequest:
    if isinstance(payload, CalculationRequest):
        return payload
    if not isinstance(payload, Mapping):
        raise InvalidInput("Payload must be a mapping")
    if "gross_salary" not in payload:
        raise InvalidInput("Payload must include a gross_salary")
    try:
        return CalculationRequest.model_validate(payload)
    except ValidationError as exc:
        raise InvalidInput(
            format_validation_error(exc, subject="calculation payload")
        ) from exc


def run_pipeline(
    gross: int | float,
    *,
    loan_repayment: int | float | None = None,
    config: PayrollConfiguration | None = None,
) -> tuple[EarningsBreakdown, DeductionBreakdown, NetResult]:
    """Run the three calculator stages for ``gross`` and return every result."""

    settings = config or load_payroll_configuration()
    earnings = derive_earnings(gross, settings.earnings.allocation)
    deductions = derive_deductions(
        earnings, loan_repayment=loan_repayment, rates=settings.deductions
    )
    return earnings, deductions, compute_net(earnings, deductions)


def calculate_salary(
    payload: Mapping[str, Any] | CalculationRequest,
) -> dict[str, Any]:
    """Compute the salary breakdown for the provided payload."""

    request_model = _parse_request(payload)

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    config = load_payroll_configuration()
    gross = _normalise_amount(request_model.gross_salary)
    loan = _normalise_amount(request_model.loan_repayment)

    with _profile_section("earnings", timings):
        earnings = derive_earnings(gross, config.earnings.allocation)

    with _profile_section("deductions", timings):
        deductions = derive_deductions(
            earnings, loan_repayment=loan, rates=config.deductions
        )

    with _profile_section("net", timings):
        net = compute_net(earnings, deductions)

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
        _LOGGER.debug(
            "calculate_salary timings (ms): %s",
            {name: round(duration * 1000, 3) for name, duration in timings.items()},
        )

    symbol = config.currency.symbol
    formatted: dict[str, str] = {
        "gross_salary": str(earnings.gross_salary),
        "total_earnings": format_amount(earnings.total, symbol=symbol),
        "total_deductions": str(net.total_deductions),
        "net_salary": str(net.net_salary),
    }
    # Fractional gross or loan amounts are shown as-is rather than re-rounded.
    for key, value in (
        ("gross_salary", earnings.gross_salary),
        ("total_deductions", net.total_deductions),
        ("net_salary", net.net_salary),
    ):
        if float(value).is_integer():
            formatted[key] = format_amount(value, symbol=symbol)

    result: dict[str, Any] = {
        "earnings": earnings.as_dict(),
        "deductions": deductions.as_dict(),
        "total_earnings": earnings.total,
        "total_deductions": net.total_deductions,
        "net_salary": net.net_salary,
        "formatted": formatted,
        "meta": {
            "currency": config.currency.code,
            "allocation": {
                name: format_percentage(ratio)
                for name, ratio in config.earnings.allocation.items()
            },
        },
    }

    # Guard the response shape; the payload itself is returned untouched.
    CalculationResponse.model_validate(result)
    return result


__all__ = ["calculate_salary", "run_pipeline"]
