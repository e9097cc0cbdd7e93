"""
Money Utilities - Decimal operations for cart prices.

Product snapshots arrive from JSON with float or string prices; everything
is converted to Decimal before arithmetic and back to float only at the
JSON boundary.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal, None]

MONEY_PRECISION = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if
        None, invalid, NaN or infinite
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")

    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, float):
            result = Decimal(str(value))
        else:
            result = Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")

    # Snapshot prices come from untrusted JSON, which accepts NaN and Infinity
    if not result.is_finite():
        return Decimal("0")
    return result


def round_money(value: Number) -> Decimal:
    """Round a monetary value to cents. Values too large to quantize are returned unrounded."""
    decimal_value = to_decimal(value)
    try:
        return decimal_value.quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return decimal_value


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def to_float(value: Number) -> float:
    """
    Convert Decimal to float for JSON serialization.

    Use only at API boundaries, not for internal calculations.
    """
    return float(to_decimal(value))
