"""Utility functions for shareledger."""

from shareledger.utils.money import parse_amount, quantize, to_decimal
from shareledger.utils.period import month_window, parse_period, parse_timestamp

__all__ = [
    "parse_amount",
    "quantize",
    "to_decimal",
    "month_window",
    "parse_period",
    "parse_timestamp",
]
