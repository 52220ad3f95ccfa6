"""Categorical attributes and account details for synthetic employees."""

from __future__ import annotations

from typing import NamedTuple

from salaryslip.backend.config.payroll_config import (
    IdentifierConfig,
    ReferenceData,
    load_payroll_configuration,
)

from .utils import RandomSource, pick, random_string


class JobAttributes(NamedTuple):
    designation: str
    department: str


class BankDetails(NamedTuple):
    bank_name: str
    account_number: str
    ifsc_code: str


class Credentials(NamedTuple):
    email: str
    password: str


def _reference_data(reference: ReferenceData | None) -> ReferenceData:
    return reference or load_payroll_configuration().reference_data


def generate_designation_and_department(
    *, rng: RandomSource | None = None, reference: ReferenceData | None = None
) -> JobAttributes:
    """Draw a job title and a department independently of each other."""

    tables = _reference_data(reference)
    return JobAttributes(
        designation=pick(tables.designations, rng=rng),
        department=pick(tables.departments, rng=rng),
    )


def generate_bank_name(
    *, rng: RandomSource | None = None, reference: ReferenceData | None = None
) -> str:
    return pick(_reference_data(reference).banks, rng=rng)


def routing_code_prefix(bank_name: str) -> str:
    """Return the upper-cased first word of ``bank_name``."""

    token = bank_name.split(" ")[0].upper()
    if not token.isalpha():
        raise ValueError(f"Bank name {bank_name!r} has no alphabetic leading token")
    return token


def generate_bank_details(
    *,
    bank_name: str | None = None,
    rng: RandomSource | None = None,
    reference: ReferenceData | None = None,
) -> BankDetails:
    """Return an 11-digit account number and an IFSC-style routing code.

    The routing code is the first word of the bank name followed by ``0`` and six
    digits, e.g. ``HDFC0123456``. A bank is drawn from the reference table when
    ``bank_name`` is not supplied.
    """

    chosen = bank_name or generate_bank_name(rng=rng, reference=reference)
    account_number = random_string(11, "numeric", rng=rng)
    ifsc_code = f"{routing_code_prefix(chosen)}0{random_string(6, 'numeric', rng=rng)}"
    return BankDetails(bank_name=chosen, account_number=account_number, ifsc_code=ifsc_code)


def generate_location(
    *, rng: RandomSource | None = None, reference: ReferenceData | None = None
) -> str:
    return pick(_reference_data(reference).cities, rng=rng)


def generate_gross_salary(
    *,
    minimum: int = 300_000,
    maximum: int = 2_000_000,
    rng: RandomSource | None = None,
) -> int:
    """Draw a whole gross salary uniformly from ``[minimum, maximum]``."""

    if minimum < 0 or maximum < minimum:
        raise ValueError("Salary range must be non-negative and ordered")
    return pick(range(minimum, maximum + 1), rng=rng)


def generate_email_and_password(
    employee_id: str,
    *,
    rng: RandomSource | None = None,
    config: IdentifierConfig | None = None,
) -> Credentials:
    """Derive a work email from ``employee_id`` and draw a fresh password.

    Passwords are eight alphanumeric characters, ``#`` and two digits.
    """

    if not employee_id or not employee_id.isalnum():
        raise ValueError("Employee identifier must be a non-empty alphanumeric string")

    domain = (config or load_payroll_configuration().identifiers).email_domain
    password = (
        random_string(8, "alphanumeric", rng=rng)
        + "#"
        + random_string(2, "numeric", rng=rng)
    )
    return Credentials(email=f"{employee_id.lower()}@{domain}", password=password)


__all__ = [
    "BankDetails",
    "Credentials",
    "JobAttributes",
    "generate_bank_details",
    "generate_bank_name",
    "generate_designation_and_department",
    "generate_email_and_password",
    "generate_gross_salary",
    "generate_location",
    "routing_code_prefix",
]
