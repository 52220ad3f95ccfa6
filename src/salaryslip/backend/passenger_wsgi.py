"""WSGI entrypoint for deploying the salary slip backend behind Passenger."""

import sys
from pathlib import Path

SRC = Path(__file__).resolve().parents[2]
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from salaryslip.backend.app import create_app  # noqa: E402

# Passenger expects a module-level variable named ``application``.
application = create_app()
