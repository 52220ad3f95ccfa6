"""Domain errors raised by the payroll core and its validation layer."""

from __future__ import annotations


class InvalidInput(ValueError):
    """Raised when a caller supplies a value the core cannot process.

    Covers negative or non-finite gross amounts, negative earnings fields and
    malformed payment-card prefixes. The failing computation produces no partial
    result.
    """


class FormatViolation(ValueError):
    """Raised when a serialised record does not satisfy the salary slip schema."""


__all__ = ["FormatViolation", "InvalidInput"]
