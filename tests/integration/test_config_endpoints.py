"""Integration tests for configuration metadata endpoints."""

from http import HTTPStatus

from flask.testing import FlaskClient

from salaryslip.backend.version import get_project_version


def test_configuration_endpoint_exposes_rates_and_tables(client: FlaskClient) -> None:
    response = client.get("/api/v1/config")
    assert response.status_code == HTTPStatus.OK

    payload = response.get_json()
    assert payload["version"] == get_project_version()
    assert payload["currency"]["code"] == "INR"
    assert payload["earnings"]["allocation"]["basic"] == 0.4
    assert payload["earnings"]["percentages"]["hra"] == "20%"
    assert payload["deductions"]["professional_tax"] == 200
    assert payload["deductions"]["esi_rate"] == 0.0075
    assert "HDFC Bank" in payload["reference_data"]["banks"]
    assert len(payload["reference_data"]["designations"]) == 10


def test_meta_endpoint(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/meta")

    assert response.status_code == HTTPStatus.OK
    assert response.get_json() == {"version": get_project_version(), "currency": "INR"}
