"""
Charge computation.

Pure functions: given a charge line's quantity basis, its rates and the
shipment's physical attributes, work out the billed quantity, the sell total
and the margin. Nothing here touches the database.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from ..dataclasses import ChargeResult, QuoteWeightInput
from ..types import QtyBasis
from .errors import ValidationError
from .utils import ZERO, d, q2, q4

logger = logging.getLogger(__name__)

VOLUMETRIC_DIVISOR = Decimal("6000")
CM3_PER_M3 = Decimal("1000000")

LABELLING_FLAT_PIECES = 100
LABELLING_FLAT_AMOUNT = Decimal("36")
LABELLING_PER_PIECE = Decimal("0.36")


def chargeable_weight_kg(physical: QuoteWeightInput) -> Decimal:
    """
    Volumetric (chargeable) weight.

    Uses the supplied chargeable weight when positive, else converts the
    volume (1 m3 = 1,000,000 / 6000 kg), else the single L x W x H triple,
    else 0.
    """
    supplied = d(physical.chargeable_weight_kg)
    if supplied > 0:
        return supplied

    volume = d(physical.volume_cbm)
    if volume > 0:
        return volume * CM3_PER_M3 / VOLUMETRIC_DIVISOR

    length, width, height = d(physical.length_cm), d(physical.width_cm), d(physical.height_cm)
    if length > 0 and width > 0 and height > 0:
        return length * width * height / VOLUMETRIC_DIVISOR

    return ZERO


def airfreight_weight_kg(physical: QuoteWeightInput) -> Decimal:
    return max(d(physical.actual_weight_kg), chargeable_weight_kg(physical))


def labelling_sell_total(pieces) -> Decimal:
    """Flat 36 up to 100 pieces, 0.36 per piece above that, 0 without pieces."""
    pcs = d(pieces)
    if pcs <= 0:
        return ZERO
    if pcs <= LABELLING_FLAT_PIECES:
        return LABELLING_FLAT_AMOUNT
    return pcs * LABELLING_PER_PIECE


def resolve_quantity(
    qty_basis: str,
    physical: QuoteWeightInput,
    container_qty: Optional[int] = None,
    stored_qty=None,
) -> Decimal:
    if qty_basis == QtyBasis.SHIPMENT:
        return Decimal("1")
    if qty_basis == QtyBasis.KG_ACTUAL:
        return d(physical.actual_weight_kg)
    if qty_basis == QtyBasis.KG_CHARGEABLE_MAX:
        return airfreight_weight_kg(physical)
    if qty_basis == QtyBasis.PIECE:
        if physical.pieces is not None:
            return d(physical.pieces)
        return d(stored_qty if stored_qty is not None else 0)
    if qty_basis == QtyBasis.CBM:
        return d(physical.volume_cbm)
    if qty_basis == QtyBasis.CONTAINER:
        if container_qty is None:
            raise ValidationError("Container-based charges must belong to a container block")
        return d(container_qty)
    raise ValidationError(f"Unknown quantity basis: {qty_basis}")


def compute_charge(
    qty_basis: str,
    buy_rate,
    sell_rate,
    physical: QuoteWeightInput,
    container_qty: Optional[int] = None,
    stored_qty=None,
    is_labelling: bool = False,
    is_discount: bool = False,
    can_be_negative: bool = False,
) -> ChargeResult:
    """
    Compute billed quantity, sell total and margin for one charge line.

    Labelling lines ignore the rates: the total follows the labelling rule
    and the margin is always None. Negative rates are only accepted on lines
    flagged ``can_be_negative`` (discounts and round-off).
    """
    if is_labelling:
        pieces = physical.pieces or 0
        return ChargeResult(
            billed_quantity=q4(pieces),
            total_sell=q2(labelling_sell_total(pieces)),
            margin=None,
        )

    buy = d(buy_rate)
    sell = d(sell_rate)
    if buy < 0:
        raise ValidationError("Buy rate cannot be negative")
    if sell < 0 and not (can_be_negative or is_discount):
        raise ValidationError("Sell rate cannot be negative for this charge")

    qty = resolve_quantity(qty_basis, physical, container_qty=container_qty, stored_qty=stored_qty)
    total_sell = sell * qty
    margin = (sell - buy) * qty

    logger.debug(f"Computed {qty_basis} charge: qty={qty} sell={sell} buy={buy} total={total_sell}")

    return ChargeResult(billed_quantity=q4(qty), total_sell=q2(total_sell), margin=q2(margin))
