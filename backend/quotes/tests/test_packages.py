from decimal import Decimal

import pytest

from quotes.packages import calc_from_packages, to_cm


def test_unit_conversion():
    assert to_cm("2", "m") == Decimal("200")
    assert to_cm("10", "in") == Decimal("25.40")
    assert to_cm("15", "mm") == Decimal("1.5")


def test_unknown_unit():
    with pytest.raises(ValueError):
        to_cm(1, "ft")


def test_sums_pieces_volume_and_chargeable_weight():
    pieces, volume, chargeable = calc_from_packages([
        {"qty": 2, "length": 100, "width": 50, "height": 40},
        {"qty": 1, "length": 60, "width": 60, "height": 60},
    ])
    assert pieces == 3
    # 400000 + 216000 cm3
    assert volume == Decimal("0.62")
    assert chargeable == Decimal("102.67")


def test_skips_empty_rows():
    pieces, volume, chargeable = calc_from_packages([
        {"qty": 0, "length": 100, "width": 50, "height": 40},
        {"qty": 3, "length": None, "width": 50, "height": 40},
    ])
    assert (pieces, volume, chargeable) == (0, None, None)
