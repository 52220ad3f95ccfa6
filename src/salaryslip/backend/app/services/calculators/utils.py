"""Utility helpers for calculator modules."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from numbers import Real

from salaryslip.backend.app.errors import InvalidInput

_WHOLE_UNIT = Decimal(1)


def ensure_amount(value: object, field_name: str) -> Real:
    """Return ``value`` when it is a finite, non-negative int or float.

    ``Decimal`` is rejected so every stage works in a single numeric domain.
    """

    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInput(f"Field '{field_name}' must be a number")
    if not math.isfinite(value):
        raise InvalidInput(f"Field '{field_name}' must be finite")
    if value < 0:
        raise InvalidInput(f"Field '{field_name}' cannot be negative")
    return value


def _to_decimal(value: Real | Decimal) -> Decimal:
    # ``str`` gives the shortest repr of a float, so 0.05 stays 0.05.
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _exact_precision(*values: Decimal) -> int:
    # Digits needed to hold the product of ``values`` and its integral part exactly.
    digits = sum(len(value.as_tuple().digits) for value in values)
    magnitude = sum(max(value.adjusted(), 0) for value in values)
    return max(digits, magnitude) + 2


def round_currency(value: Real | Decimal) -> int:
    """Round to the nearest whole currency unit, halves away from zero."""

    amount = _to_decimal(value)
    with localcontext() as context:
        context.prec = max(context.prec, _exact_precision(amount))
        return int(amount.quantize(_WHOLE_UNIT, rounding=ROUND_HALF_UP))


def apply_rate(amount: Real | Decimal, rate: Real | Decimal) -> int:
    """Return ``amount × rate`` rounded to whole currency units."""

    base, ratio = _to_decimal(amount), _to_decimal(rate)
    with localcontext() as context:
        context.prec = max(context.prec, _exact_precision(base, ratio))
        return round_currency(base * ratio)


def format_percentage(value: float) -> str:
    """Return a human-readable percentage label for ``value``."""

    percentage = round(value * 100, 4)
    if float(int(percentage)) == percentage:
        return f"{int(percentage)}%"
    return f"{percentage:.2f}%"


def _group_indian(digits: str) -> str:
    """Insert separators as 12,34,56,789 (thousands, then pairs)."""

    if len(digits) <= 3:
        return digits

    head, tail = digits[:-3], digits[-3:]
    pairs: list[str] = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_amount(value: Real | Decimal, *, symbol: str = "₹") -> str:
    """Render a whole currency amount with en-IN digit grouping.

    The value is displayed as-is: integral floats are accepted, while
    fractional amounts are rejected instead of being rounded again.
    """

    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise InvalidInput("Amount must be a number")
    if not math.isfinite(value):
        raise InvalidInput("Amount must be finite")
    if value != int(value):
        raise InvalidInput(f"Amount {value!r} is not a whole currency unit")

    whole = int(value)
    sign = "-" if whole < 0 else ""
    return f"{sign}{symbol}{_group_indian(str(abs(whole)))}"


__all__ = [
    "apply_rate",
    "ensure_amount",
    "format_amount",
    "format_percentage",
    "round_currency",
]
