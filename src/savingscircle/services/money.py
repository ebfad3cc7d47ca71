"""Decimal money helpers.

Amounts are kept as ``Decimal`` quantized to cents so running totals never
pick up binary floating point drift.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from ..errors import ValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
# Largest value the Numeric(12, 2) amount column holds
MAX_AMOUNT = Decimal("9999999999.99")


def as_decimal(value: Any) -> Decimal:
    """Convert a stored amount to a cent-quantized Decimal (``None`` counts as zero)."""

    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, float):
        # str() keeps 0.1 as 0.1 instead of its binary expansion
        amount = Decimal(str(value))
    else:
        amount = Decimal(value)
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def parse_amount(raw: Any) -> Decimal:
    """Validate user input as a positive amount.

    Accepts numbers or text such as ``"1,500"``; rejects empty, non-numeric,
    non-finite, zero, negative and oversized values.
    """

    if raw is None or isinstance(raw, bool):
        raise ValidationError("Please enter a valid amount")
    if isinstance(raw, str):
        text = raw.strip().replace(",", "")
        if not text:
            raise ValidationError("Please enter a valid amount")
        raw = text
    try:
        amount = Decimal(str(raw)) if isinstance(raw, float) else Decimal(raw)
        amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError("Please enter a valid amount") from None
    if not amount.is_finite():
        raise ValidationError("Please enter a valid amount")
    if amount > MAX_AMOUNT:
        raise ValidationError(f"Amount cannot exceed {MAX_AMOUNT:,}")
    if amount <= 0:
        raise ValidationError("Amount must be greater than zero")
    return amount


def format_amount(amount: Any, symbol: str = "₱") -> str:
    """Render an amount for display, e.g. ``₱1,250.00``."""

    value = as_decimal(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"
