"""Endpoints for persisting and exporting salary slips."""

from __future__ import annotations

import logging
import os
from http import HTTPStatus
from pathlib import Path
from typing import Any

from flask import Blueprint, Response, request, url_for

from salaryslip.backend.app.http import download, not_found
from salaryslip.backend.app.services.slip_service import (
    InMemorySlipRepository,
    SalarySlipRecord,
    SQLiteSlipRepository,
    build_sample_slip,
    render_csv,
    render_html,
    render_pdf,
    validate_slip_payload,
)
from salaryslip.backend.services import build_json_response, parse_json_payload

blueprint = Blueprint("salary_slips", __name__, url_prefix="/api/v1/salary-slips")

logger = logging.getLogger(__name__)


def _parse_positive_int(value: str | None, *, env: str) -> int | None:
    if value is None or not value.strip():
        return None
    try:
        parsed = int(value)
    except ValueError:
        logger.warning("Ignoring invalid value for %s: %s", env, value)
        return None
    if parsed <= 0:
        logger.warning("Ignoring non-positive value for %s: %s", env, value)
        return None
    return parsed


def _build_repository() -> InMemorySlipRepository | SQLiteSlipRepository:
    capacity = _parse_positive_int(
        os.getenv("SALARYSLIP_SLIP_CAPACITY"), env="SALARYSLIP_SLIP_CAPACITY"
    )

    db_path = os.getenv("SALARYSLIP_SLIP_DB")
    if db_path:
        logger.info("Persisting salary slips to %s", db_path)
        return SQLiteSlipRepository(Path(db_path).expanduser(), max_items=capacity)

    return InMemorySlipRepository(max_items=capacity)


_REPOSITORY = _build_repository()


def _serialise(record: SalarySlipRecord) -> dict[str, Any]:
    return {
        **record.as_dict(),
        "links": {
            "self": url_for("salary_slips.get_salary_slip", slip_id=record.id),
            "html": url_for("salary_slips.get_salary_slip_html", slip_id=record.id),
            "csv": url_for("salary_slips.download_salary_slip_csv", slip_id=record.id),
            "pdf": url_for("salary_slips.download_salary_slip_pdf", slip_id=record.id),
        },
    }


@blueprint.get("")
def list_salary_slips() -> tuple[Any, int]:
    """Return every stored slip, oldest first."""

    return build_json_response([_serialise(record) for record in _REPOSITORY.list()])


@blueprint.post("")
def create_salary_slip() -> tuple[Any, int]:
    payload = parse_json_payload(request)
    record = _REPOSITORY.save(validate_slip_payload(payload))
    logger.info("Stored salary slip %s", record.id)
    return build_json_response(_serialise(record), HTTPStatus.CREATED)


@blueprint.post("/sample")
def create_sample_salary_slip() -> tuple[Any, int]:
    """Generate an unsaved slip from a synthetic identity."""

    payload = parse_json_payload(request, allow_empty=True)
    return build_json_response(build_sample_slip(payload))


@blueprint.get("/<string:slip_id>")
def get_salary_slip(slip_id: str) -> tuple[Any, int]:
    try:
        record = _REPOSITORY.get(slip_id)
    except KeyError:
        return not_found("Salary slip", slip_id)

    return build_json_response(_serialise(record))


@blueprint.get("/<string:slip_id>/html")
def get_salary_slip_html(slip_id: str) -> tuple[str, int, dict[str, str]]:
    try:
        record = _REPOSITORY.get(slip_id)
    except KeyError:
        return "Salary slip not found", HTTPStatus.NOT_FOUND, {"Content-Type": "text/plain"}

    return render_html(record), HTTPStatus.OK, {"Content-Type": "text/html; charset=utf-8"}


@blueprint.get("/<string:slip_id>/csv")
def download_salary_slip_csv(slip_id: str) -> Response:
    try:
        record = _REPOSITORY.get(slip_id)
    except KeyError:
        return Response("Salary slip not found", HTTPStatus.NOT_FOUND, mimetype="text/plain")

    return download(
        render_csv(record),
        mimetype="text/csv; charset=utf-8",
        filename=f"salary-slip-{slip_id}.csv",
    )


@blueprint.get("/<string:slip_id>/pdf")
def download_salary_slip_pdf(slip_id: str) -> Response:
    try:
        record = _REPOSITORY.get(slip_id)
    except KeyError:
        return Response("Salary slip not found", HTTPStatus.NOT_FOUND, mimetype="text/plain")

    return download(
        render_pdf(record),
        mimetype="application/pdf",
        filename=f"salary-slip-{slip_id}.pdf",
    )
