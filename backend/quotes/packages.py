"""
Package dimension helpers.

Turns a list of package rows ({qty, length, width, height, unit}) into the
quote-level piece count, volume in m3 and volumetric chargeable weight.
"""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Tuple

from pricing.services.utils import TWOPLACES, ZERO, d

VOLUMETRIC_DIVISOR = Decimal("6000")
CM3_PER_M3 = Decimal("1000000")

# Multipliers from each accepted unit to centimetres
_TO_CM = {
    "cm": Decimal("1"),
    "in": Decimal("2.54"),
    "mm": Decimal("0.1"),
    "m": Decimal("100"),
}


def to_cm(value, unit: str = "cm") -> Decimal:
    factor = _TO_CM.get((unit or "cm").lower())
    if factor is None:
        raise ValueError(f"Unsupported dimension unit: {unit}")
    return d(value) * factor


def _num(value) -> Decimal:
    try:
        return d(value if value is not None else 0)
    except (InvalidOperation, ValueError):
        return ZERO


def calc_from_packages(packages: Iterable[dict]) -> Tuple[int, Optional[Decimal], Optional[Decimal]]:
    """
    Returns (pieces, volume_cbm, chargeable_weight_kg).

    Rows with a non-positive quantity or dimension are skipped. When no row
    counts, volume and chargeable weight are None.
    """
    pieces = 0
    cm3 = ZERO

    for pkg in packages or []:
        qty = int(_num(pkg.get("qty")))
        length = _num(pkg.get("length"))
        width = _num(pkg.get("width"))
        height = _num(pkg.get("height"))
        if qty <= 0 or length <= 0 or width <= 0 or height <= 0:
            continue
        unit = pkg.get("unit") or "cm"
        cm3 += to_cm(length, unit) * to_cm(width, unit) * to_cm(height, unit) * qty
        pieces += qty

    if pieces == 0:
        return 0, None, None

    volume_cbm = (cm3 / CM3_PER_M3).quantize(TWOPLACES)
    chargeable = (cm3 / VOLUMETRIC_DIVISOR).quantize(TWOPLACES)
    return pieces, volume_cbm, chargeable
