from __future__ import annotations

from ..scenarios import Scenario
from ..types import ChargeGroup, QtyBasis, TradeDirection
from .helpers import ViewContext, amount_of, calc_compact, exworks_total, find_charge


def _exworks_lines(ctx: ViewContext, charges) -> list:
    lines = ctx.detail_lines(charges)
    by_code = {c.code: c for c in charges}
    for line in lines:
        charge = by_code[line['code']]
        # volume-based charges show their rate per cubic meter
        if charge.qty_basis == QtyBasis.CBM:
            line['calc'] = calc_compact(charge.sell_rate, charge.qty, charge.total_sell)
    return lines


def build_sea_lcl_view(ctx: ViewContext, scenario: Scenario) -> dict:
    """
    Groupage sea freight, no container blocks.

    Export leads with the ocean freight (rate per cubic meter); import leads
    with the delivery order.
    """
    charges = ctx.main_charges
    exworks_charges = [c for c in charges if c.group == ChargeGroup.EXWORKS]
    exworks = exworks_total(charges)
    is_export = ctx.pricing.direction == TradeDirection.EXPORT

    view = {'mode': ctx.pricing.template_code, 'currency': ctx.currency}
    if is_export:
        ocean = find_charge(charges, 'OCEAN_FREIGHT')
        lead = amount_of(ocean)
        view['oceanFreight'] = {
            'amount': lead,
            'calc': calc_compact(
                ocean.sell_rate if ocean else 0, ocean.qty if ocean else 0, lead,
            ),
        }
    else:
        lead = amount_of(find_charge(charges, 'DELIVERY_ORDER'))
        view['deliveryOrder'] = {'amount': lead}
    view['exworks'] = {'amount': exworks}
    ctx.summarize(view, lead + exworks)

    if not ctx.can_see_breakdown:
        return view

    lines = _exworks_lines(ctx, exworks_charges)
    if is_export:
        return ctx.with_breakdown(view, exworks={'amount': exworks, 'lines': lines})
    return ctx.with_breakdown(
        view, breakdown={'deliveryOrder': {'amount': lead}, 'exworksLines': lines},
    )
