"""Synthetic identifier and attribute generators."""

from .attributes import (
    BankDetails,
    Credentials,
    JobAttributes,
    generate_bank_details,
    generate_bank_name,
    generate_designation_and_department,
    generate_email_and_password,
    generate_gross_salary,
    generate_location,
)
from .checksum import luhn_check_digit, luhn_is_valid
from .identifiers import (
    generate_card_number,
    generate_employee_id,
    generate_esi_number,
    generate_pan,
    generate_pf_number,
    generate_tan,
)
from .utils import RandomSource, random_string

__all__ = [
    "BankDetails",
    "Credentials",
    "JobAttributes",
    "RandomSource",
    "generate_bank_details",
    "generate_bank_name",
    "generate_card_number",
    "generate_designation_and_department",
    "generate_email_and_password",
    "generate_employee_id",
    "generate_gross_salary",
    "generate_esi_number",
    "generate_location",
    "generate_pan",
    "generate_pf_number",
    "generate_tan",
    "luhn_check_digit",
    "luhn_is_valid",
    "random_string",
]
