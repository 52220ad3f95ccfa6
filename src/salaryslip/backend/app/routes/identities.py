"""Endpoints producing synthetic employee identities and card numbers."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from salaryslip.backend.app.services.identity_service import (
    build_card_payload,
    build_identity_payload,
)
from salaryslip.backend.services import build_json_response, parse_json_payload

blueprint = Blueprint("identities", __name__, url_prefix="/api/v1/identities")


@blueprint.post("")
def create_identity() -> tuple[Any, int]:
    payload = parse_json_payload(request, allow_empty=True)
    return build_json_response(build_identity_payload(payload))


@blueprint.post("/cards")
def create_card_number() -> tuple[Any, int]:
    """Return a Luhn-valid card number for the submitted issuer prefix."""

    payload = parse_json_payload(request)
    return build_json_response(build_card_payload(payload))
