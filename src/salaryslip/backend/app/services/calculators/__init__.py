"""Payroll calculation helpers."""

from .deductions import derive_deductions
from .earnings import derive_earnings
from .net import compute_net
from .utils import apply_rate, format_amount, format_percentage, round_currency

__all__ = [
    "apply_rate",
    "compute_net",
    "derive_deductions",
    "derive_earnings",
    "format_amount",
    "format_percentage",
    "round_currency",
]
