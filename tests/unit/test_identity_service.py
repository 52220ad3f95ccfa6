"""Unit tests for identity assembly and the identity API helpers."""

from __future__ import annotations

import random

import pytest

from salaryslip.backend.app.errors import InvalidInput
from salaryslip.backend.app.models import EmployeeDetailsModel
from salaryslip.backend.app.services.generators import luhn_is_valid
from salaryslip.backend.app.services.generators.attributes import routing_code_prefix
from salaryslip.backend.app.services.identity_service import (
    build_card_payload,
    build_identity_payload,
    generate_identity,
    random_source,
)


def test_generated_identity_satisfies_employee_schema(rng: random.Random) -> None:
    for _ in range(50):
        identity = generate_identity(rng)
        EmployeeDetailsModel.model_validate(identity.employee_details())


def test_identity_fields_are_consistent(rng: random.Random) -> None:
    identity = generate_identity(rng)

    assert identity.email == f"{identity.employee_id.lower()}@company.com"
    assert identity.ifsc_code.startswith(routing_code_prefix(identity.bank_name) + "0")
    assert "password" not in identity.employee_details()
    assert identity.as_dict()["password"] == identity.password


def test_same_seed_reproduces_identity() -> None:
    assert generate_identity(random_source(11)) == generate_identity(random_source(11))


def test_random_source_defaults_to_system_randomness() -> None:
    assert random_source(None) is None
    assert isinstance(random_source(5), random.Random)


def test_build_identity_payload_reports_seeding() -> None:
    seeded = build_identity_payload({"seed": 42})
    unseeded = build_identity_payload({})

    assert seeded["meta"] == {"seeded": True}
    assert unseeded["meta"] == {"seeded": False}
    assert seeded["identity"] == build_identity_payload({"seed": 42})["identity"]
    assert set(seeded["identity"]) == set(unseeded["identity"])


@pytest.mark.parametrize("payload", [{"seed": "abc"}, {"unexpected": 1}, ["seed"]])
def test_build_identity_payload_rejects_invalid_requests(payload: object) -> None:
    with pytest.raises(InvalidInput):
        build_identity_payload(payload)  # type: ignore[arg-type]


def test_build_card_payload() -> None:
    payload = build_card_payload({"prefix": "411111", "seed": 9})

    assert payload["prefix"] == "411111"
    assert payload["card_number"].startswith("411111")
    assert payload["luhn_valid"] is True
    assert luhn_is_valid(payload["card_number"])
    assert payload == build_card_payload({"prefix": "411111", "seed": 9})


@pytest.mark.parametrize("payload", [{"prefix": "12345"}, {"prefix": "12345A"}, {}])
def test_build_card_payload_rejects_bad_prefix(payload: dict) -> None:
    with pytest.raises(InvalidInput):
        build_card_payload(payload)
