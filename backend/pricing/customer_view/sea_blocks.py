"""
Full container sea views, one summary per container block.

Local and freezone export show ocean freight and THC per block; transit
splits each block into its import side (delivery order, THC in) and its
export side (ocean freight, THC out).
"""
from __future__ import annotations

from ..scenarios import BlockTotalRule, Scenario
from ..services.totals import block_totals
from ..services.utils import ZERO, q2
from .helpers import ViewContext, containers_of, find_charge, rate_line


def _block_header(block) -> dict:
    return {
        'blockId': block.id,
        'containerType': block.container_type,
        'containerQty': block.container_qty,
        'isAddon': block.is_addon,
    }


def _freight_thc_summary(block_charges, totals) -> dict:
    return {
        'oceanFreight': rate_line(find_charge(block_charges, 'OCEAN_FREIGHT')),
        'thc': rate_line(find_charge(block_charges, 'THC')),
        'exworks': {'amount': totals['exworks']},
        'total': {'amount': totals['total']},
    }


def _transit_summary(block_charges, totals) -> dict:
    return {
        'import': {
            'deliveryOrder': rate_line(find_charge(block_charges, 'DELIVERY_ORDER')),
            'thcIn': rate_line(find_charge(block_charges, 'THC_IN')),
            'total': {'amount': totals['import']},
        },
        'export': {
            'oceanFreight': rate_line(find_charge(block_charges, 'OCEAN_FREIGHT')),
            'thcOut': rate_line(find_charge(block_charges, 'THC_OUT')),
            'total': {'amount': totals['export']},
        },
        'exworks': {'amount': totals['exworks']},
        'total': {'amount': totals['total']},
    }


def build_sea_blocks_view(ctx: ViewContext, scenario: Scenario) -> dict:
    summarize_block = _transit_summary if scenario.block_rule == BlockTotalRule.TRANSIT_SPLIT else _freight_thc_summary

    blocks = []
    for block in ctx.blocks:
        block_charges = [c for c in ctx.main_charges if c.block_id == block.id]
        totals = block_totals(block_charges, scenario.block_rule)
        summary = _block_header(block)
        summary.update(summarize_block(block_charges, totals))
        if ctx.can_see_breakdown:
            summary['lines'] = ctx.detail_lines(block_charges, with_group=True)
        blocks.append(summary)

    view = {
        'mode': ctx.pricing.template_code,
        'currency': ctx.currency,
        'containers': containers_of(ctx.blocks),
        'blocks': blocks,
    }
    ctx.summarize(view, q2(sum((b['total']['amount'] for b in blocks), ZERO)))

    if not ctx.can_see_breakdown:
        return view
    return ctx.with_breakdown(view)

