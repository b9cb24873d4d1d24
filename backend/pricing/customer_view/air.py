from __future__ import annotations

from collections import OrderedDict

from ..scenarios import Scenario, ThcVariant
from ..services.totals import sum_totals
from ..services.utils import ZERO, q2
from ..types import ChargeGroup
from .helpers import (
    SEA2AIR_EXPORT_PREFIX,
    SEA2AIR_IMPORT_PREFIX,
    ViewContext,
    amount_of,
    find_charge,
    fmt,
)

THC_FIELDS = {
    ThcVariant.SINGLE: (('thc', 'THC'),),
    ThcVariant.IMPORT_EXPORT: (('thcImport', 'THC_IMPORT'), ('thcExport', 'THC_EXPORT')),
    ThcVariant.IN_OUT: (('thcIn', 'THC_IN'), ('thcOut', 'THC_OUT')),
}

DELIVERY_ORDER_CODES = ('DELIVERY_ORDER', 'DO')

# Clearance bundles of local import count towards the exworks aggregate
EXWORKS_GROUPS = (ChargeGroup.EXWORKS, ChargeGroup.CLEARANCE)


def per_kg_line(charge, currency: str) -> dict:
    if charge is None:
        return {'amount': q2(ZERO), 'calc': f"0 {currency}"}
    return {
        'amount': charge.total_sell,
        'calc': f"{fmt(charge.sell_rate)} {currency}/kg × {fmt(charge.qty)} kg = {fmt(charge.total_sell)}",
    }


def _clearance_breakdown(ctx: ViewContext, charges, prefix: str) -> dict:
    breakdown = OrderedDict()
    for c in sorted(charges, key=lambda c: (c.order, c.id)):
        if not c.code.startswith(prefix) or ctx.is_hidden(c.code) or c.total_sell == 0:
            continue
        breakdown[c.label] = breakdown.get(c.label, ZERO) + c.total_sell
    return {label: amount for label, amount in breakdown.items() if amount != 0}


def build_air_view(ctx: ViewContext, scenario: Scenario) -> dict:
    """Air and sea-to-air: per-kg freight and THC lines, then the exworks aggregate."""
    charges = ctx.main_charges
    view = {
        'mode': ctx.pricing.template_code,
        'currency': ctx.currency,
        'airFreight': per_kg_line(find_charge(charges, 'AIRFREIGHT'), ctx.currency),
    }
    for key, code in THC_FIELDS[scenario.thc_variant]:
        view[key] = per_kg_line(find_charge(charges, code), ctx.currency)

    delivery_order = next((c for c in charges if c.code in DELIVERY_ORDER_CODES), None)
    if delivery_order is not None:
        view['deliveryOrder'] = {'amount': amount_of(delivery_order)}

    exworks_charges = [c for c in charges if c.group in EXWORKS_GROUPS]
    view['exworks'] = {'amount': sum_totals(exworks_charges)}
    ctx.summarize(view, sum_totals(charges))

    if not ctx.can_see_breakdown:
        return view

    detail = {'exworksLines': ctx.detail_lines(exworks_charges)}
    if scenario.clearance_split:
        detail['importClearanceBreakdown'] = _clearance_breakdown(ctx, exworks_charges, SEA2AIR_IMPORT_PREFIX)
        detail['exportClearanceBreakdown'] = _clearance_breakdown(ctx, exworks_charges, SEA2AIR_EXPORT_PREFIX)
    return ctx.with_breakdown(view, **detail)
