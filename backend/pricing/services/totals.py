"""
Ops totals.

Staff-facing totals for a quote's pricing: every charge row plus the
scenario's aggregates. Nothing is hidden here; the customer view projector
decides what a customer may see.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, Iterable, List

from ..models import QuotePricing
from ..scenarios import BlockTotalRule, scenario_for
from ..types import ChargeGroup
from .utils import ZERO, q2

logger = logging.getLogger(__name__)


def sum_totals(charges: Iterable) -> Decimal:
    return q2(sum((c.total_sell for c in charges), ZERO))


def code_total(charges: Iterable, *codes: str) -> Decimal:
    return sum_totals(c for c in charges if c.code in codes)


def group_total(charges: Iterable, *groups: str) -> Decimal:
    return sum_totals(c for c in charges if c.group in groups)


def transfer_ownership_total(charges: Iterable) -> Decimal:
    return group_total(charges, ChargeGroup.TRANSFER_OWNERSHIP)


def block_totals(block_charges: List, rule: BlockTotalRule) -> Dict[str, Decimal]:
    """
    Totals for one container block under the scenario's rule.

    FREIGHT_THC: ocean freight + THC + EXWORKS.
    TRANSIT_SPLIT: import (delivery order + THC in) and export (ocean freight
    + THC out) reported separately, plus EXWORKS.
    DO_THC: delivery order + THC + EXWORKS; only the primary block carries
    the delivery order.
    """
    exworks = group_total(block_charges, ChargeGroup.EXWORKS)

    if rule == BlockTotalRule.TRANSIT_SPLIT:
        import_total = code_total(block_charges, 'DELIVERY_ORDER') + code_total(block_charges, 'THC_IN')
        export_total = code_total(block_charges, 'OCEAN_FREIGHT') + code_total(block_charges, 'THC_OUT')
        return {
            'import': import_total,
            'export': export_total,
            'exworks': exworks,
            'total': import_total + export_total + exworks,
        }

    thc = code_total(block_charges, 'THC')
    if rule == BlockTotalRule.DO_THC:
        delivery_order = code_total(block_charges, 'DELIVERY_ORDER')
        return {
            'deliveryOrder': delivery_order,
            'thc': thc,
            'exworks': exworks,
            'total': delivery_order + thc + exworks,
        }

    ocean = code_total(block_charges, 'OCEAN_FREIGHT')
    return {
        'oceanFreight': ocean,
        'thc': thc,
        'exworks': exworks,
        'total': ocean + thc + exworks,
    }


def _row(charge) -> dict:
    return {
        'id': charge.id,
        'field': charge.label,
        'code': charge.code,
        'group': charge.group,
        'qtyBasis': charge.qty_basis,
        'blockId': charge.block_id,
        'buyRate': charge.buy_rate,
        'sellRate': charge.sell_rate,
        'qtyOrWeight': charge.qty,
        'totalSell': charge.total_sell,
        'margin': charge.margin,
    }


def _shipment_totals(charges: List) -> Dict[str, Decimal]:
    transfer_ownership = transfer_ownership_total(charges)
    total = sum_totals(c for c in charges if c.group != ChargeGroup.TRANSFER_OWNERSHIP)
    return {
        'airfreight': code_total(charges, 'AIRFREIGHT'),
        'thc': code_total(charges, 'THC'),
        'thcIn': code_total(charges, 'THC_IN'),
        'thcOut': code_total(charges, 'THC_OUT'),
        'thcImport': code_total(charges, 'THC_IMPORT'),
        'thcExport': code_total(charges, 'THC_EXPORT'),
        'deliveryOrder': code_total(charges, 'DELIVERY_ORDER', 'DO'),
        'oceanFreight': code_total(charges, 'OCEAN_FREIGHT'),
        'main': group_total(charges, ChargeGroup.MAIN),
        'exworks': group_total(charges, ChargeGroup.EXWORKS),
        'clearance': group_total(charges, ChargeGroup.CLEARANCE),
        'importClearance': group_total(charges, ChargeGroup.IMPORT_CLEARANCE),
        'exportClearance': group_total(charges, ChargeGroup.EXPORT_CLEARANCE),
        'transferOwnership': transfer_ownership,
        'total': total,
        'grandTotal': total + transfer_ownership,
    }


def compute_ops_totals(quote_id) -> dict:
    """
    Full internal breakdown of a quote's pricing.

    Container scenarios report totals per block and a grand total of the
    blocks plus transfer of ownership; every other scenario reports totals
    per charge family. A quote without pricing yields empty rows and zeros.
    """
    pricing = (
        QuotePricing.objects
        .filter(quote_id=quote_id)
        .prefetch_related('blocks', 'charges')
        .first()
    )
    if pricing is None:
        return {
            'templateCode': None,
            'currency': None,
            'rows': [],
            'blocks': [],
            'totals': _shipment_totals([]),
        }

    charges = sorted(pricing.charges.all(), key=lambda c: (c.order, c.id))
    result = {
        'templateCode': pricing.template_code,
        'mode': pricing.mode,
        'direction': pricing.direction,
        'currency': pricing.currency,
        'rows': [_row(c) for c in charges],
        'blocks': [],
    }

    scenario = scenario_for(pricing.template_code)
    if not scenario.uses_container_blocks:
        result['totals'] = _shipment_totals(charges)
        return result

    blocks = sorted(pricing.blocks.all(), key=lambda b: (b.order, b.id))
    for block in blocks:
        block_charges = [c for c in charges if c.block_id == block.id]
        result['blocks'].append({
            'blockId': block.id,
            'containerType': block.container_type,
            'containerQty': block.container_qty,
            'isAddon': block.is_addon,
            'totals': block_totals(block_charges, scenario.block_rule),
        })

    blocks_total = sum((b['totals']['total'] for b in result['blocks']), ZERO)
    transfer_ownership = transfer_ownership_total(charges)
    result['totals'] = {
        'blocks': q2(blocks_total),
        'transferOwnership': transfer_ownership,
        'grandTotal': q2(blocks_total + transfer_ownership),
    }
    logger.debug(f"Ops totals for quote {quote_id}: grand total {result['totals']['grandTotal']}")
    return result
