"""Utilities for validating payroll configuration data and surfacing issues."""

from __future__ import annotations

import argparse
import math
from collections import Counter
from pathlib import Path
from typing import Iterable, Sequence

from .payroll_config import (
    CONFIG_FILE,
    ConfigurationError,
    DeductionConfig,
    EarningsAllocation,
    IdentifierConfig,
    PayrollConfiguration,
    ReferenceData,
    read_payroll_configuration,
)


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_rate(scope: str, value: float) -> list[str]:
    if not math.isfinite(value) or not 0 <= value <= 1:
        return [_format_scope(scope, f"rate {value!r} must be between 0 and 1")]
    return []


def _validate_allocation(allocation: EarningsAllocation) -> list[str]:
    errors: list[str] = []
    scope = "earnings.allocation"

    total = 0.0
    for name, ratio in allocation.items():
        errors.extend(_validate_rate(f"{scope}.{name}", ratio))
        total += ratio

    if not math.isclose(total, 1.0, abs_tol=1e-9):
        errors.append(_format_scope(scope, f"ratios sum to {total:.6f}, expected 1"))

    return errors


def _validate_deductions(deductions: DeductionConfig) -> list[str]:
    errors: list[str] = []
    errors.extend(_validate_rate("deductions.pf_rate", deductions.pf_rate))
    errors.extend(_validate_rate("deductions.tds_rate", deductions.tds_rate))
    errors.extend(_validate_rate("deductions.esi_rate", deductions.esi_rate))

    if deductions.professional_tax < 0:
        errors.append(_format_scope("deductions.professional_tax", "cannot be negative"))
    if deductions.loan_repayments < 0:
        errors.append(_format_scope("deductions.loan_repayments", "cannot be negative"))

    return errors


def _validate_identifiers(identifiers: IdentifierConfig) -> list[str]:
    errors: list[str] = []
    scope = "identifiers"

    if identifiers.card_prefix_length >= identifiers.card_length:
        errors.append(
            _format_scope(scope, "card prefix must leave room for the check digit")
        )
    if not identifiers.employee_prefix or not identifiers.employee_prefix.isalpha():
        errors.append(_format_scope(scope, "employee prefix must be alphabetic"))
    if "@" in identifiers.email_domain or "." not in identifiers.email_domain:
        errors.append(
            _format_scope(scope, f"invalid email domain {identifiers.email_domain!r}")
        )
    if not identifiers.pf_extension.isdigit():
        errors.append(_format_scope(scope, "PF extension must be numeric"))

    return errors


def _validate_table(scope: str, entries: Iterable[str]) -> list[str]:
    values = list(entries)
    if not values:
        return [_format_scope(scope, "no entries defined")]

    errors: list[str] = []
    duplicates = sorted(value for value, count in Counter(values).items() if count > 1)
    if duplicates:
        errors.append(_format_scope(scope, f"duplicate entries detected: {duplicates}"))
    return errors


def _validate_reference_data(reference: ReferenceData) -> list[str]:
    errors: list[str] = []
    errors.extend(_validate_table("reference_data.cities", reference.cities))
    errors.extend(_validate_table("reference_data.banks", reference.banks))
    errors.extend(_validate_table("reference_data.departments", reference.departments))
    errors.extend(_validate_table("reference_data.designations", reference.designations))

    # Routing codes are derived from the first word of the bank name.
    for bank in reference.banks:
        token = bank.split(" ")[0]
        if not token.isalpha():
            errors.append(
                _format_scope(
                    "reference_data.banks",
                    f"bank {bank!r} does not start with an alphabetic token",
                )
            )

    return errors


def validate_configuration(config: PayrollConfiguration) -> list[str]:
    """Return human-readable issues detected in ``config``."""

    errors: list[str] = []
    errors.extend(_validate_allocation(config.earnings.allocation))
    errors.extend(_validate_deductions(config.deductions))
    errors.extend(_validate_identifiers(config.identifiers))
    errors.extend(_validate_reference_data(config.reference_data))
    return errors


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate payroll configuration files and report issues."
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Configuration files to validate (defaults to the bundled payroll.yaml)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    paths: list[Path] = args.paths or [CONFIG_FILE]

    exit_code = 0

    for path in paths:
        try:
            config = read_payroll_configuration(path)
        except (FileNotFoundError, ConfigurationError) as error:
            print(f"[{path.name}] failed to load configuration: {error}")
            exit_code = 1
            continue

        issues = validate_configuration(config)
        if issues:
            exit_code = 1
            print(f"[{path.name}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{path.name}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
