"""Helpers for normalising incoming JSON requests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import Request
from werkzeug.exceptions import BadRequest


def parse_json_payload(req: Request, *, allow_empty: bool = False) -> dict[str, Any]:
    """Extract a JSON object from ``req``.

    When ``allow_empty`` is set a missing body is treated as an empty object,
    which suits endpoints whose fields are all optional.
    """

    data = req.get_json(silent=True)
    if data is None:
        if allow_empty and not req.get_data(cache=True):
            return {}
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(data, Mapping):
        raise BadRequest("Request JSON must be an object")

    return dict(data)
