"""
Charge computation: quantity bases, totals, margins and the labelling rule.
"""
from decimal import Decimal

import pytest

from ..dataclasses import QuoteWeightInput
from ..services.calculator import (
    airfreight_weight_kg,
    chargeable_weight_kg,
    compute_charge,
    labelling_sell_total,
    resolve_quantity,
)
from ..services.errors import ValidationError
from ..types import QtyBasis


def _physical(**kw):
    kw.setdefault("actual_weight_kg", Decimal("0"))
    return QuoteWeightInput(**kw)


class TestChargeableWeight:

    def test_supplied_chargeable_weight_wins(self):
        p = _physical(chargeable_weight_kg=Decimal("55"), volume_cbm=Decimal("2"))
        assert chargeable_weight_kg(p) == Decimal("55")

    def test_volume_converts_at_6000(self):
        p = _physical(volume_cbm=Decimal("0.6"))
        assert chargeable_weight_kg(p) == Decimal("100")

    def test_dimensions_used_when_no_volume(self):
        p = _physical(length_cm=Decimal("100"), width_cm=Decimal("60"), height_cm=Decimal("50"))
        assert chargeable_weight_kg(p) == Decimal("50")

    def test_nothing_supplied_is_zero(self):
        assert chargeable_weight_kg(_physical()) == Decimal("0")

    def test_airfreight_weight_is_max_of_actual_and_volumetric(self):
        p = _physical(actual_weight_kg=Decimal("80"), volume_cbm=Decimal("0.6"))
        assert airfreight_weight_kg(p) == Decimal("100")

        heavy = _physical(actual_weight_kg=Decimal("150"), volume_cbm=Decimal("0.6"))
        assert airfreight_weight_kg(heavy) == Decimal("150")


class TestResolveQuantity:

    def test_shipment_is_one(self):
        assert resolve_quantity(QtyBasis.SHIPMENT, _physical(actual_weight_kg=Decimal("40"))) == Decimal("1")

    def test_kg_actual(self):
        assert resolve_quantity(QtyBasis.KG_ACTUAL, _physical(actual_weight_kg=Decimal("40"))) == Decimal("40")

    def test_piece_falls_back_to_stored_quantity(self):
        assert resolve_quantity(QtyBasis.PIECE, _physical(pieces=7)) == Decimal("7")
        assert resolve_quantity(QtyBasis.PIECE, _physical(), stored_qty=Decimal("3")) == Decimal("3")
        assert resolve_quantity(QtyBasis.PIECE, _physical()) == Decimal("0")

    def test_cbm(self):
        assert resolve_quantity(QtyBasis.CBM, _physical(volume_cbm=Decimal("2.5"))) == Decimal("2.5")

    def test_container_needs_a_block(self):
        assert resolve_quantity(QtyBasis.CONTAINER, _physical(), container_qty=3) == Decimal("3")
        with pytest.raises(ValidationError):
            resolve_quantity(QtyBasis.CONTAINER, _physical())

    def test_unknown_basis(self):
        with pytest.raises(ValidationError):
            resolve_quantity("PER_PALLET", _physical())


class TestComputeCharge:

    def test_total_and_margin_follow_quantity(self):
        p = _physical(actual_weight_kg=Decimal("40"), chargeable_weight_kg=Decimal("55"))
        result = compute_charge(QtyBasis.KG_CHARGEABLE_MAX, "3", "5", p)
        assert result.billed_quantity == Decimal("55.0000")
        assert result.total_sell == Decimal("275.00")
        assert result.margin == Decimal("110.00")

    @pytest.mark.parametrize("buy,sell,qty", [
        ("0", "0", "1"),
        ("1.25", "2.10", "3"),
        ("10", "7.5", "4"),
    ])
    def test_total_is_sell_times_qty(self, buy, sell, qty):
        p = _physical(actual_weight_kg=Decimal(qty))
        result = compute_charge(QtyBasis.KG_ACTUAL, buy, sell, p)
        assert result.total_sell == (Decimal(sell) * Decimal(qty)).quantize(Decimal("0.01"))
        assert result.margin == ((Decimal(sell) - Decimal(buy)) * Decimal(qty)).quantize(Decimal("0.01"))

    def test_money_rounds_half_up(self):
        result = compute_charge(QtyBasis.SHIPMENT, "0", "0.125", _physical())
        assert result.total_sell == Decimal("0.13")

    def test_negative_buy_rate_rejected(self):
        with pytest.raises(ValidationError):
            compute_charge(QtyBasis.SHIPMENT, "-1", "5", _physical())

    def test_negative_sell_only_on_discount_lines(self):
        with pytest.raises(ValidationError):
            compute_charge(QtyBasis.SHIPMENT, "0", "-20", _physical())

        result = compute_charge(QtyBasis.SHIPMENT, "0", "-20", _physical(), can_be_negative=True)
        assert result.total_sell == Decimal("-20.00")

        result = compute_charge(QtyBasis.SHIPMENT, "0", "-5", _physical(), is_discount=True)
        assert result.total_sell == Decimal("-5.00")


class TestLabelling:

    @pytest.mark.parametrize("pieces,expected", [
        (0, Decimal("0")),
        (1, Decimal("36")),
        (50, Decimal("36")),
        (100, Decimal("36")),
        (101, Decimal("36.36")),
        (250, Decimal("90")),
    ])
    def test_labelling_total(self, pieces, expected):
        assert labelling_sell_total(pieces) == expected

    def test_labelling_ignores_rates_and_has_no_margin(self):
        result = compute_charge(
            QtyBasis.PIECE, "99", "99", _physical(pieces=50), is_labelling=True,
        )
        assert result.total_sell == Decimal("36.00")
        assert result.billed_quantity == Decimal("50.0000")
        assert result.margin is None

    def test_labelling_without_pieces_is_zero(self):
        result = compute_charge(QtyBasis.PIECE, "0", "0", _physical(), is_labelling=True)
        assert result.total_sell == Decimal("0.00")
        assert result.margin is None
