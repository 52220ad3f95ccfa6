"""Generators for fixed-format government and account identifiers."""

from __future__ import annotations

from salaryslip.backend.app.errors import InvalidInput
from salaryslip.backend.config.payroll_config import (
    IdentifierConfig,
    load_payroll_configuration,
)

from .checksum import luhn_check_digit
from .utils import RandomSource, random_string


def _identifier_config(config: IdentifierConfig | None) -> IdentifierConfig:
    return config or load_payroll_configuration().identifiers


def generate_employee_id(
    *, rng: RandomSource | None = None, config: IdentifierConfig | None = None
) -> str:
    """Return an employee identifier such as ``EMP042917``."""

    prefix = _identifier_config(config).employee_prefix
    return f"{prefix}{random_string(6, 'numeric', rng=rng)}"


def generate_tan(*, rng: RandomSource | None = None) -> str:
    """Return a tax-deduction account number: 4 letters, 5 digits, 1 letter."""

    return (
        random_string(4, "alpha", rng=rng)
        + random_string(5, "numeric", rng=rng)
        + random_string(1, "alpha", rng=rng)
    )


def generate_pan(*, rng: RandomSource | None = None) -> str:
    """Return a permanent account number: 5 letters, 4 digits, 1 letter."""

    return (
        random_string(5, "alpha", rng=rng)
        + random_string(4, "numeric", rng=rng)
        + random_string(1, "alpha", rng=rng)
    )


def generate_card_number(
    prefix: str,
    *,
    rng: RandomSource | None = None,
    config: IdentifierConfig | None = None,
) -> str:
    """Return a Luhn-valid card number starting with the issuer ``prefix``.

    The prefix must be exactly six ASCII digits; shorter prefixes are rejected
    rather than padded.
    """

    settings = _identifier_config(config)
    prefix_length = settings.card_prefix_length
    if (
        not isinstance(prefix, str)
        or len(prefix) != prefix_length
        or not prefix.isascii()
        or not prefix.isdigit()
    ):
        raise InvalidInput(f"Card prefix must be exactly {prefix_length} digits")

    body_length = settings.card_length - prefix_length - 1
    payload = prefix + random_string(body_length, "numeric", rng=rng)
    return f"{payload}{luhn_check_digit(payload)}"


def generate_pf_number(
    *, rng: RandomSource | None = None, config: IdentifierConfig | None = None
) -> str:
    """Return a provident fund account as ``RR/EEE/AAAAAAA/000/CCCC``."""

    segments = (
        random_string(2, "alpha", rng=rng),
        random_string(3, "numeric", rng=rng),
        random_string(7, "numeric", rng=rng),
        _identifier_config(config).pf_extension,
        random_string(4, "numeric", rng=rng),
    )
    return "/".join(segments)


def generate_esi_number(*, rng: RandomSource | None = None) -> str:
    """Return a 17-digit employee insurance number."""

    return random_string(17, "numeric", rng=rng)


__all__ = [
    "generate_card_number",
    "generate_employee_id",
    "generate_esi_number",
    "generate_pan",
    "generate_pf_number",
    "generate_tan",
]
