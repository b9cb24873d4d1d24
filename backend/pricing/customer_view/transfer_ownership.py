from __future__ import annotations

from ..services.totals import transfer_ownership_total
from ..types import ChargeGroup


def transfer_ownership_info(charges, is_hidden) -> dict:
    """
    Transfer of ownership total, its customer summary and its visible lines.

    The summary is None when the total is zero so views can leave it out.
    """
    too = sorted(
        (c for c in charges if c.group == ChargeGroup.TRANSFER_OWNERSHIP),
        key=lambda c: (c.order, c.id),
    )
    total = transfer_ownership_total(too)
    lines = [
        {'label': c.label, 'code': c.code, 'amount': c.total_sell}
        for c in too
        if c.total_sell != 0 and not is_hidden(c.code)
    ]
    return {
        'total': total,
        'summary': {'amount': total} if total != 0 else None,
        'lines': lines,
    }
