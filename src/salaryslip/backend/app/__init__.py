"""Application factory for the salary slip backend."""

import logging
import os
from warnings import warn

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import BadRequest

from .http import problem_response
from .routes import register_routes
from .routes.config import get_configuration_metadata

_LOGGER = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _parse_allowed_origins(raw: str | None) -> set[str]:
    """Convert an environment variable into a normalised set of origins."""

    if not raw:
        return set()

    return {origin.strip() for origin in raw.split(",") if origin.strip()}


def configure_logging(level: str | None = None) -> None:
    """Configure the package logger from ``SALARYSLIP_LOG_LEVEL``.

    Only the ``salaryslip`` logger is touched so that host applications keep
    control of the root logger.
    """

    name = (level or os.getenv("SALARYSLIP_LOG_LEVEL") or "INFO").strip().upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        warn(f"Unknown log level {name!r}; using INFO", stacklevel=2)
        resolved = logging.INFO

    logger = logging.getLogger("salaryslip")
    logger.setLevel(resolved)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(handler)


def create_app() -> Flask:
    """Create and configure the Flask application instance."""

    configure_logging()
    app = Flask(__name__)

    allowed_origins = _parse_allowed_origins(os.getenv("SALARYSLIP_ALLOWED_ORIGINS"))

    if not allowed_origins:
        warn(
            "No allowed origins configured; cross-origin requests will be rejected.",
            stacklevel=1,
        )

    CORS(
        app,
        resources={r"/api/*": {"origins": sorted(allowed_origins)}},
        supports_credentials=False,
        methods=["GET", "OPTIONS", "POST"],
        allow_headers=["Content-Type"],
    )

    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        payload = {"status": "ok", "version": get_configuration_metadata()["version"]}
        return jsonify(payload)

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed payloads."""

        message = error.description or "Invalid request"
        return problem_response("bad_request", status=400, message=message).to_response()

    @app.errorhandler(ValueError)
    def handle_value_error(error: ValueError):
        """Surface domain validation errors to clients."""

        _LOGGER.info("Rejected request: %s", error)
        return problem_response(
            "validation_error", status=400, message=str(error)
        ).to_response()

    _LOGGER.debug("Application created with %d allowed origin(s)", len(allowed_origins))
    return app
