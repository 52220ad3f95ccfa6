"""Integration tests for the synthetic identity endpoints."""

from __future__ import annotations

import re
from http import HTTPStatus

import pytest
from flask.testing import FlaskClient

from salaryslip.backend.app.services.generators import luhn_is_valid


def test_identity_endpoint_returns_full_identity(client: FlaskClient) -> None:
    response = client.post("/api/v1/identities", json={})

    assert response.status_code == HTTPStatus.OK
    identity = response.get_json()["identity"]
    assert re.fullmatch(r"EMP\d{6}", identity["employee_id"])
    assert identity["email"] == f"{identity['employee_id'].lower()}@company.com"
    assert re.fullmatch(r"[A-Z0-9]{8}#\d{2}", identity["password"])


def test_identity_endpoint_accepts_empty_body(client: FlaskClient) -> None:
    response = client.post("/api/v1/identities")

    assert response.status_code == HTTPStatus.OK
    assert response.get_json()["meta"]["seeded"] is False


def test_seeded_identity_is_reproducible(client: FlaskClient) -> None:
    first = client.post("/api/v1/identities", json={"seed": 1234}).get_json()
    second = client.post("/api/v1/identities", json={"seed": 1234}).get_json()

    assert first == second
    assert first["meta"]["seeded"] is True


def test_identity_endpoint_rejects_unknown_fields(client: FlaskClient) -> None:
    response = client.post("/api/v1/identities", json={"name": "Ravi"})

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json()["error"] == "validation_error"


def test_card_endpoint_returns_luhn_valid_number(client: FlaskClient) -> None:
    response = client.post("/api/v1/identities/cards", json={"prefix": "411111"})

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert len(payload["card_number"]) == 16
    assert payload["card_number"].startswith("411111")
    assert luhn_is_valid(payload["card_number"])
    assert payload["luhn_valid"] is True


@pytest.mark.parametrize("prefix", ["12345", "12345A"])
def test_card_endpoint_rejects_bad_prefix(client: FlaskClient, prefix: str) -> None:
    response = client.post("/api/v1/identities/cards", json={"prefix": prefix})

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert "6 digits" in response.get_json()["message"]
