"""HTTP helper utilities shared across Flask blueprints."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Mapping

from flask import Response, jsonify


@dataclass(frozen=True)
class ProblemResponse:
    """Error payload returned by every JSON endpoint."""

    error: str
    status: int
    message: str | None = None
    extra: Mapping[str, Any] | None = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error}
        if self.message:
            payload["message"] = self.message
        if self.extra:
            payload.update(self.extra)
        return payload

    def to_response(self) -> tuple[Any, int]:
        """Convert the problem payload into a Flask response tuple."""

        return jsonify(self.as_dict()), self.status


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    **extra: Any,
) -> ProblemResponse:
    """Build a :class:`ProblemResponse` with optional extra members."""

    additional: Mapping[str, Any] | None = extra or None
    return ProblemResponse(error=error, status=int(status), message=message, extra=additional)


def not_found(resource: str, identifier: str) -> tuple[Any, int]:
    """Return the standard 404 payload for a missing ``resource``."""

    return problem_response(
        "not_found",
        status=HTTPStatus.NOT_FOUND,
        message=f"{resource} not found",
        id=identifier,
    ).to_response()


def download(body: str | bytes, *, mimetype: str, filename: str) -> Response:
    """Wrap ``body`` in an attachment response."""

    response = Response(body, mimetype=mimetype)
    response.headers["Content-Disposition"] = f"attachment; filename={filename}"
    return response


__all__ = ["ProblemResponse", "download", "not_found", "problem_response"]
