from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .services.utils import ZERO, d


@dataclass
class QuoteWeightInput:
    """Physical attributes of a shipment as read from the quote."""
    actual_weight_kg: Decimal = ZERO
    chargeable_weight_kg: Optional[Decimal] = None
    pieces: Optional[int] = None
    volume_cbm: Optional[Decimal] = None
    length_cm: Optional[Decimal] = None
    width_cm: Optional[Decimal] = None
    height_cm: Optional[Decimal] = None

    @classmethod
    def from_quote(cls, quote) -> "QuoteWeightInput":
        return cls(
            actual_weight_kg=d(quote.weight_kg),
            chargeable_weight_kg=quote.chargeable_weight_kg,
            pieces=quote.pieces,
            volume_cbm=quote.volume_cbm,
            length_cm=quote.length_cm,
            width_cm=quote.width_cm,
            height_cm=quote.height_cm,
        )


@dataclass(frozen=True)
class ChargeResult:
    billed_quantity: Decimal
    total_sell: Decimal
    margin: Optional[Decimal]
