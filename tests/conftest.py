"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import random  # noqa: E402

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from salaryslip.backend.app import create_app  # noqa: E402
from salaryslip.backend.app.routes import salary_slips  # noqa: E402
from salaryslip.backend.app.services.slip_service import InMemorySlipRepository  # noqa: E402


@pytest.fixture()
def app(monkeypatch: pytest.MonkeyPatch) -> Flask:
    """Return a configured Flask application with an empty slip store."""

    monkeypatch.setattr(salary_slips, "_REPOSITORY", InMemorySlipRepository())
    application = create_app()
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()


@pytest.fixture()
def rng() -> random.Random:
    """Deterministic randomness source for generator tests."""

    return random.Random(20240601)
