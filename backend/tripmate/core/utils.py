"""
Currency helpers shared by the cost engine and response schemas.
"""
from typing import Any
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """
    Coerce a raw amount to Decimal.
    Missing, non-numeric, NaN and infinite values become 0 so callers never crash
    on a half-filled itinerary row.
    """
    if value is None or isinstance(value, bool):
        return Decimal(0)
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            # str() first so floats keep their shortest repr (0.1 -> "0.1")
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return Decimal(0)
    if not result.is_finite():
        return Decimal(0)
    return result


def round_currency(value: Any) -> Decimal:
    """Round an amount to cents for display."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
