"""Assemble synthetic employee identities from the individual generators.

Identity generation is always an explicit request: the calculation service never
fabricates an identity on its own. Callers who need reproducible output pass a
seeded :class:`random.Random` (or a ``seed`` through the API helpers); otherwise
the generators draw from the operating system's randomness source.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from salaryslip.backend.app.errors import InvalidInput
from salaryslip.backend.app.models import (
    CardRequest,
    IdentityRequest,
    SyntheticIdentity,
    format_validation_error,
)
from salaryslip.backend.config.payroll_config import (
    PayrollConfiguration,
    load_payroll_configuration,
)

from .generators import (
    RandomSource,
    generate_bank_details,
    generate_bank_name,
    generate_card_number,
    generate_designation_and_department,
    generate_email_and_password,
    generate_employee_id,
    generate_esi_number,
    generate_location,
    generate_pan,
    generate_pf_number,
    generate_tan,
    luhn_is_valid,
)

_LOGGER = logging.getLogger(__name__)


def random_source(seed: int | None = None) -> RandomSource | None:
    """Return a seeded generator, or ``None`` to use the system source."""

    if seed is None:
        return None
    return random.Random(seed)


def generate_identity(
    rng: RandomSource | None = None,
    *,
    config: PayrollConfiguration | None = None,
) -> SyntheticIdentity:
    """Generate a complete synthetic identity in a single call.

    The bank account's routing code is derived from the same bank that is
    reported as ``bank_name``, and the email is derived from the generated
    employee identifier.
    """

    settings = config or load_payroll_configuration()
    identifiers = settings.identifiers
    reference = settings.reference_data

    employee_id = generate_employee_id(rng=rng, config=identifiers)
    job = generate_designation_and_department(rng=rng, reference=reference)
    bank_name = generate_bank_name(rng=rng, reference=reference)
    bank = generate_bank_details(bank_name=bank_name, rng=rng, reference=reference)
    credentials = generate_email_and_password(employee_id, rng=rng, config=identifiers)

    identity = SyntheticIdentity(
        employee_id=employee_id,
        tan=generate_tan(rng=rng),
        pan=generate_pan(rng=rng),
        pf_number=generate_pf_number(rng=rng, config=identifiers),
        esi_number=generate_esi_number(rng=rng),
        designation=job.designation,
        department=job.department,
        bank_name=bank.bank_name,
        account_number=bank.account_number,
        ifsc_code=bank.ifsc_code,
        location=generate_location(rng=rng, reference=reference),
        email=credentials.email,
        password=credentials.password,
    )
    _LOGGER.debug("Generated synthetic identity %s", identity.employee_id)
    return identity


def _validate(
    model: type[IdentityRequest] | type[CardRequest], payload: Any, subject: str
) -> Any:
    if not isinstance(payload, Mapping):
        raise InvalidInput("Payload must be a mapping")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise InvalidInput(format_validation_error(exc, subject=subject)) from exc


def build_identity_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Validate an identity request and return the generated identity as JSON data."""

    request = _validate(IdentityRequest, payload, "identity request")
    identity = generate_identity(random_source(request.seed))

    meta: dict[str, Any] = {"seeded": request.seed is not None}
    return {"identity": identity.as_dict(), "meta": meta}


def build_card_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Validate a card request and return a Luhn-valid card number."""

    request = _validate(CardRequest, payload, "card request")
    number = generate_card_number(request.prefix, rng=random_source(request.seed))
    return {
        "card_number": number,
        "prefix": request.prefix,
        "luhn_valid": luhn_is_valid(number),
    }


__all__ = [
    "build_card_payload",
    "build_identity_payload",
    "generate_identity",
    "random_source",
]
