"""Request and response helpers shared by the Flask blueprints."""

from .request_parser import parse_json_payload
from .response_builder import build_json_response

__all__ = [
    "build_json_response",
    "parse_json_payload",
]
