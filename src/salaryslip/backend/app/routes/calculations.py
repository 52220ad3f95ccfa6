"""REST endpoint for salary breakdowns."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from salaryslip.backend.app.services.calculation_service import calculate_salary
from salaryslip.backend.services import build_json_response, parse_json_payload

blueprint = Blueprint("calculations", __name__, url_prefix="/api/v1")


@blueprint.post("/calculations")
def create_calculation() -> tuple[Any, int]:
    """Break the submitted gross salary into earnings, deductions and net pay."""

    payload = parse_json_payload(request)
    result = calculate_salary(payload)

    return build_json_response(result)
