"""Monetary value utilities.

All money is handled as ``Decimal`` rounded to the ledger's minor unit
(cents) with ROUND_HALF_UP.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

MINOR_UNIT = Decimal("0.01")
ZERO = Decimal("0.00")


def quantize(amount: Decimal) -> Decimal:
    """Round an amount to the minor currency unit (half-up)."""
    return Decimal(amount).quantize(MINOR_UNIT, rounding=ROUND_HALF_UP)


def to_decimal(value) -> Decimal:
    """Convert a stored or supplied value to Decimal without float drift.

    ``None`` is treated as zero. Floats go through ``str`` so that 0.1
    becomes Decimal("0.1") rather than its binary expansion.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "₹123.45" / "$123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount rounded to the minor unit

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if amount_str is None or not str(amount_str).strip():
        raise ValueError("Empty amount string")

    amount_str = str(amount_str).strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"[$€£¥₹]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if is_negative:
        amount = -amount
    return quantize(amount)


def parse_non_negative_amount(amount_str: str) -> Decimal:
    """Parse an amount and reject negative values."""
    amount = parse_amount(amount_str)
    if amount < 0:
        raise ValueError(f"Amount must not be negative (got {amount})")
    return amount
