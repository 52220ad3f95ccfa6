"""Unit tests for the package logging setup."""

from __future__ import annotations

import logging

import pytest

from salaryslip.backend.app import configure_logging


@pytest.fixture(autouse=True)
def restore_logger():
    logger = logging.getLogger("salaryslip")
    level, handlers = logger.level, list(logger.handlers)
    yield
    logger.setLevel(level)
    logger.handlers[:] = handlers


def test_configure_logging_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SALARYSLIP_LOG_LEVEL", "debug")

    configure_logging()

    assert logging.getLogger("salaryslip").level == logging.DEBUG


def test_configure_logging_does_not_duplicate_handlers() -> None:
    configure_logging("WARNING")
    configure_logging("WARNING")

    logger = logging.getLogger("salaryslip")
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1


def test_unknown_level_falls_back_to_info() -> None:
    with pytest.warns(UserWarning):
        configure_logging("chatty")

    assert logging.getLogger("salaryslip").level == logging.INFO
