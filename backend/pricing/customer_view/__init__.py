"""
Customer view projector.

Turns a quote's pricing into what a customer is allowed to see. The view
shape is picked from the scenario table by template code; the per-line
breakdown is included only when the caller says the customer may see it.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..scenarios import ViewShape, scenario_for
from ..services.utils import ZERO, q2
from .air import build_air_view
from .helpers import ViewContext, hidden_set
from .sea_blocks import build_sea_blocks_view
from .sea_import_local import build_sea_import_local_view
from .sea_lcl import build_sea_lcl_view
from .transfer_ownership import transfer_ownership_info

logger = logging.getLogger(__name__)

VIEW_BUILDERS = {
    ViewShape.AIR: build_air_view,
    ViewShape.SEA_BLOCKS: build_sea_blocks_view,
    ViewShape.SEA_TRANSIT: build_sea_blocks_view,
    ViewShape.SEA_LCL: build_sea_lcl_view,
    ViewShape.SEA_IMPORT_LOCAL: build_sea_import_local_view,
}


def empty_view(currency: str) -> dict:
    zero = q2(ZERO)
    return {
        'mode': None,
        'currency': currency,
        'exworks': {'amount': zero},
        'total': {'amount': zero},
        'grandTotal': {'amount': zero},
        'exworksBreakdownIncluded': False,
    }


def project(
    pricing,
    can_see_breakdown: bool,
    hidden_codes: Optional[Iterable[str]] = (),
    currency_fallback: str = 'AED',
) -> dict:
    currency = (pricing.currency if pricing is not None else None) or currency_fallback
    if pricing is None:
        return empty_view(currency)

    scenario = scenario_for(pricing.template_code)
    hidden = hidden_set(hidden_codes)
    charges = sorted(pricing.charges.all(), key=lambda c: (c.order, c.id))
    blocks = sorted(pricing.blocks.all(), key=lambda b: (b.order, b.id))

    ctx = ViewContext(
        pricing=pricing,
        charges=charges,
        blocks=blocks,
        currency=currency,
        can_see_breakdown=bool(can_see_breakdown),
        hidden=hidden,
        too=transfer_ownership_info(charges, lambda code: str(code or '').strip() in hidden),
    )
    view = VIEW_BUILDERS[scenario.view](ctx, scenario)
    logger.debug(f"Projected {scenario.view.value} view for {pricing.template_code} (breakdown={ctx.can_see_breakdown})")
    return view


__all__ = ['project', 'empty_view', 'VIEW_BUILDERS']
