from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

TWOPLACES = Decimal("0.01")
FOURPLACES = Decimal("0.0001")
ZERO = Decimal("0")


def d(val) -> Decimal:
    """Coerce incoming values to Decimal safely."""
    if val is None:
        return ZERO
    if isinstance(val, Decimal):
        return val
    return Decimal(str(val))


def q2(val) -> Decimal:
    """Money precision."""
    return d(val).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def q4(val) -> Decimal:
    """Rate and quantity precision."""
    return d(val).quantize(FOURPLACES, rounding=ROUND_HALF_UP)


def as_float(val):
    if val is None:
        return None
    return float(val)
