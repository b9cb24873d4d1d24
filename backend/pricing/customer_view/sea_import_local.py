from __future__ import annotations

from ..scenarios import Scenario
from ..services.totals import code_total
from ..types import ChargeGroup
from .helpers import ViewContext, containers_of, exworks_total


def build_sea_import_local_view(ctx: ViewContext, scenario: Scenario) -> dict:
    """Full container import: one delivery order, THC summed over every block, then exworks."""
    charges = ctx.main_charges
    delivery_order = code_total(charges, 'DELIVERY_ORDER')
    thc = code_total(charges, 'THC')
    exworks = exworks_total(charges)

    view = {
        'mode': ctx.pricing.template_code,
        'currency': ctx.currency,
        'containers': containers_of(ctx.blocks),
        'deliveryOrder': {'amount': delivery_order},
        'thc': {'amount': thc},
        'exworks': {'amount': exworks},
    }
    ctx.summarize(view, delivery_order + thc + exworks)

    if not ctx.can_see_breakdown:
        return view

    thc_lines = [
        {'containerBlockId': c.block_id, 'code': c.code, 'amount': c.total_sell}
        for c in charges
        if c.code == 'THC' and c.total_sell != 0 and not ctx.is_hidden(c.code)
    ]
    exworks_lines = ctx.detail_lines(
        [c for c in charges if c.group == ChargeGroup.EXWORKS], with_block=True,
    )
    return ctx.with_breakdown(view, breakdown={
        'deliveryOrder': {'amount': delivery_order},
        'thcLines': thc_lines,
        'exworksLines': exworks_lines,
    })
