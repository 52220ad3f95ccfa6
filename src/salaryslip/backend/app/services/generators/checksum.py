"""Luhn (mod 10) checksum arithmetic for payment-card numbers."""

from __future__ import annotations


def _luhn_sum(digits: str, *, double_first: bool) -> int:
    total = 0
    double = double_first
    for char in reversed(digits):
        digit = int(char)
        if double:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
        double = not double
    return total


def luhn_check_digit(payload: str) -> int:
    """Return the digit that completes ``payload`` into a Luhn-valid number.

    Digits are walked from the right. The first digit walked, and every second
    one after it, is doubled (minus 9 when above 9) because the check digit will
    occupy the rightmost position once appended.
    """

    if not payload.isdigit() or not payload.isascii():
        raise ValueError("Luhn payload must contain only digits")
    return (10 - _luhn_sum(payload, double_first=True) % 10) % 10


def luhn_is_valid(number: str) -> bool:
    """Return ``True`` when ``number`` (check digit included) passes Luhn."""

    if len(number) < 2 or not number.isdigit() or not number.isascii():
        return False
    return _luhn_sum(number, double_first=False) % 10 == 0


__all__ = ["luhn_check_digit", "luhn_is_valid"]
