#!/usr/bin/env python3
"""Collect baseline timings for the payroll calculators and generators."""

from __future__ import annotations

import json
import os
import random
import sys
from pathlib import Path
from time import perf_counter
from typing import Callable

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from salaryslip.backend.app.services.calculation_service import calculate_salary  # noqa: E402
from salaryslip.backend.app.services.identity_service import generate_identity  # noqa: E402
from salaryslip.backend.app.services.slip_service import (  # noqa: E402
    InMemorySlipRepository,
    build_sample_slip,
    render_pdf,
)

SAMPLE_PAYLOAD = {"gross_salary": 1_000_000, "loan_repayment": 12_500}


def _time(operation: Callable[[], object], iterations: int) -> dict[str, float]:
    operation()  # Warm caches
    start = perf_counter()
    for _ in range(iterations):
        operation()
    elapsed = perf_counter() - start
    return {
        "iterations": iterations,
        "total_ms": elapsed * 1000,
        "average_ms": (elapsed / iterations) * 1000,
    }


def measure_calculations(iterations: int) -> dict[str, float]:
    return _time(lambda: calculate_salary(dict(SAMPLE_PAYLOAD)), iterations)


def measure_identities(iterations: int) -> dict[str, float]:
    rng = random.Random(0)
    return _time(lambda: generate_identity(rng), iterations)


def measure_pdf(iterations: int) -> dict[str, float]:
    """Time PDF rendering of a stored sample slip."""

    repository = InMemorySlipRepository()
    record = repository.save(build_sample_slip({"seed": 7}))
    return _time(lambda: render_pdf(record), iterations)


def main() -> None:
    iterations = int(os.getenv("SALARYSLIP_PROFILE_ITERATIONS", "75"))
    report = {
        "calculations": measure_calculations(iterations),
        "identities": measure_identities(iterations),
        "pdf": measure_pdf(max(1, iterations // 5)),
    }
    print(json.dumps(report, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
