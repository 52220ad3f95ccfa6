"""Expose the payroll configuration consumed by API clients.

Clients use these endpoints to show allocation ratios and deduction rates next to
a calculation, and to populate pickers from the same lookup tables the
generators draw from.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from flask import Blueprint, jsonify

from salaryslip.backend.app.services.calculators import format_percentage
from salaryslip.backend.config.payroll_config import load_payroll_configuration
from salaryslip.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Expose runtime metadata derived from the loaded configuration."""

    config = load_payroll_configuration()
    return {
        "version": get_project_version(),
        "currency": config.currency.code,
    }


def _serialise_model(value: Any) -> Any:
    """Convert Pydantic models into JSON-ready structures."""

    if hasattr(value, "model_dump"):
        return _serialise_model(value.model_dump(mode="python"))

    if isinstance(value, Mapping):
        return {key: _serialise_model(item) for key, item in value.items()}

    if isinstance(value, Sequence) and not isinstance(value, str | bytes | bytearray):
        return [_serialise_model(item) for item in value]

    return value


def serialise_configuration() -> dict[str, Any]:
    config = load_payroll_configuration()
    allocation = config.earnings.allocation
    return {
        **get_configuration_metadata(),
        "currency": _serialise_model(config.currency),
        "earnings": {
            "allocation": _serialise_model(allocation),
            "percentages": {
                name: format_percentage(ratio) for name, ratio in allocation.items()
            },
        },
        "deductions": _serialise_model(config.deductions),
        "identifiers": _serialise_model(config.identifiers),
        "reference_data": _serialise_model(config.reference_data),
    }


@blueprint.get("")
def get_configuration() -> tuple[Any, int]:
    """Return allocation ratios, deduction rates and lookup tables."""

    return jsonify(serialise_configuration()), 200


@blueprint.get("/meta")
def get_application_metadata() -> tuple[Any, int]:
    """Expose lightweight application metadata such as the version identifier."""

    return jsonify(get_configuration_metadata()), 200
