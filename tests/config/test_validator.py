from pathlib import Path

import pytest
import yaml

from salaryslip.backend.config.payroll_config import (
    CONFIG_FILE,
    ConfigurationError,
    load_payroll_configuration,
    parse_payroll_configuration,
    read_payroll_configuration,
)
from salaryslip.backend.config.validator import main, validate_configuration


def _raw_config() -> dict:
    with CONFIG_FILE.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def test_bundled_configuration_is_valid() -> None:
    assert validate_configuration(load_payroll_configuration()) == []


def test_bundled_configuration_values() -> None:
    config = load_payroll_configuration()

    assert dict(config.earnings.allocation.items())["basic"] == pytest.approx(0.40)
    assert config.deductions.pf_rate == pytest.approx(0.12)
    assert config.deductions.professional_tax == 200
    assert config.identifiers.card_length == 16
    assert len(config.reference_data.banks) == 10
    assert "Mumbai" in config.reference_data.cities


def test_allocation_must_sum_to_one() -> None:
    raw = _raw_config()
    raw["earnings"]["allocation"]["basic"] = 0.5

    with pytest.raises(ConfigurationError, match="sum to 1"):
        parse_payroll_configuration(raw)


def test_rates_must_be_fractions() -> None:
    raw = _raw_config()
    raw["deductions"]["tds_rate"] = 1.5

    with pytest.raises(ConfigurationError):
        parse_payroll_configuration(raw)


def test_empty_reference_table_is_rejected() -> None:
    raw = _raw_config()
    raw["reference_data"]["cities"] = []

    with pytest.raises(ConfigurationError):
        parse_payroll_configuration(raw)


def test_validator_flags_duplicate_reference_entries() -> None:
    config = load_payroll_configuration()
    reference = config.reference_data.model_copy(
        update={"cities": config.reference_data.cities + ("Mumbai",)}
    )
    broken = config.model_copy(update={"reference_data": reference})

    errors = validate_configuration(broken)

    assert any("reference_data.cities" in error and "duplicate" in error for error in errors)


def test_validator_flags_bank_without_routing_token() -> None:
    config = load_payroll_configuration()
    reference = config.reference_data.model_copy(
        update={"banks": config.reference_data.banks + ("1st Federal Bank",)}
    )
    broken = config.model_copy(update={"reference_data": reference})

    errors = validate_configuration(broken)

    assert any("1st Federal Bank" in error for error in errors)


def test_validator_flags_invalid_email_domain() -> None:
    config = load_payroll_configuration()
    identifiers = config.identifiers.model_copy(update={"email_domain": "@company"})
    broken = config.model_copy(update={"identifiers": identifiers})

    errors = validate_configuration(broken)

    assert any("email domain" in error for error in errors)


def test_read_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_payroll_configuration(tmp_path / "missing.yaml")


def test_main_reports_success(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 0
    assert "OK" in capsys.readouterr().out


def test_main_reports_failures(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    broken = tmp_path / "broken.yaml"
    broken.write_text("- just\n- a list\n", encoding="utf-8")

    assert main([str(broken)]) == 1
    assert "failed to load configuration" in capsys.readouterr().out


def test_currency_section_accepts_only_code_and_symbol() -> None:
    config = load_payroll_configuration()
    assert set(config.currency.model_dump()) == {"code", "symbol"}

    raw = _raw_config()
    raw["currency"]["locale"] = "en-US"
    with pytest.raises(ConfigurationError):
        parse_payroll_configuration(raw)
