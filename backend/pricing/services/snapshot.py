from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from quotes.models import Quotation

from ..models import QuotePricing
from .errors import NotFound
from .lock_guard import get_quote
from .utils import ZERO, as_float, q2

logger = logging.getLogger(__name__)


def build_snapshot(pricing: QuotePricing, created_at=None) -> dict:
    """
    Immutable JSON capture of a pricing. PDF rendering reads this document,
    so the keys must stay as they are.
    """
    created_at = created_at or timezone.now()
    blocks = sorted(pricing.blocks.all(), key=lambda b: (b.order, b.id))
    charges = sorted(pricing.charges.all(), key=lambda c: (c.order, c.id))
    total_sell = q2(sum((c.total_sell for c in charges), ZERO))

    return {
        'mode': pricing.mode,
        'direction': pricing.direction,
        'templateCode': pricing.template_code,
        'currency': pricing.currency,
        'blocks': [
            {
                'id': b.id,
                'containerType': b.container_type,
                'containerQty': b.container_qty,
                'isAddon': b.is_addon,
                'order': b.order,
            }
            for b in blocks
        ],
        'charges': [
            {
                'code': c.code,
                'label': c.label,
                'group': c.group,
                'qtyBasis': c.qty_basis,
                'qty': as_float(c.qty),
                'buyRate': as_float(c.buy_rate),
                'sellRate': as_float(c.sell_rate),
                'totalSell': as_float(c.total_sell),
                'margin': as_float(c.margin),
                'blockId': c.block_id,
            }
            for c in charges
        ],
        'totals': {'totalSell': as_float(total_sell)},
        'createdAt': created_at.isoformat(),
    }


def take_snapshot(quote_id, user=None) -> Quotation:
    """
    Store a snapshot of the current pricing on the quote and bump its
    pricing version. Allowed while the pricing is locked.
    """
    quote = get_quote(quote_id)
    pricing = (
        QuotePricing.objects
        .filter(quote=quote)
        .prefetch_related('blocks', 'charges')
        .first()
    )
    if pricing is None:
        raise NotFound(f"Pricing has not been initialized for quote {quote_id}")

    now = timezone.now()
    snapshot = build_snapshot(pricing, created_at=now)

    with transaction.atomic():
        quote = Quotation.objects.select_for_update().get(pk=quote.pk)
        quote.pricing_snapshot = snapshot
        quote.pricing_version = quote.pricing_version + 1
        quote.priced_at = now
        quote.priced_by = user if user is not None and user.is_authenticated else None
        quote.total_price = q2(snapshot['totals']['totalSell'])
        quote.currency = pricing.currency
        if quote.status == 'DRAFT':
            quote.status = 'PRICED'
        quote.save()

    logger.info(
        f"Snapshot v{quote.pricing_version} of quote {quote.reference}: "
        f"{snapshot['totals']['totalSell']} {pricing.currency}"
    )
    return quote
