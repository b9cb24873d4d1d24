from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import FrozenSet, Iterable, List, Optional

from ..types import ChargeGroup
from ..services.totals import sum_totals
from ..services.utils import ZERO, q2

SEA2AIR_IMPORT_PREFIX = 'SEA2AIR_IMP_'
SEA2AIR_EXPORT_PREFIX = 'SEA2AIR_EXP_'


def fmt(value) -> str:
    return str(q2(value))


def calc_compact(rate, qty, amount) -> str:
    return f"{fmt(rate)}×{fmt(qty)}={fmt(amount)}"


def hidden_set(codes: Optional[Iterable[str]]) -> FrozenSet[str]:
    return frozenset(str(c).strip() for c in (codes or ()) if c and str(c).strip())


def find_charge(charges, code):
    return next((c for c in charges if c.code == code), None)


def amount_of(charge) -> Decimal:
    return charge.total_sell if charge is not None else q2(ZERO)


def rate_line(charge) -> dict:
    """Top-line charge shown with its rate and quantity."""
    rate = charge.sell_rate if charge is not None else ZERO
    qty = charge.qty if charge is not None else ZERO
    amount = amount_of(charge)
    return {
        'sellRate': rate,
        'qtyUsed': qty,
        'amount': amount,
        'calc': calc_compact(rate, qty, amount),
    }


@dataclass
class ViewContext:
    """Everything a view builder reads, resolved once per projection."""
    pricing: object
    charges: List
    blocks: List
    currency: str
    can_see_breakdown: bool
    hidden: FrozenSet[str] = frozenset()
    too: dict = field(default_factory=dict)

    @property
    def main_charges(self) -> List:
        return [c for c in self.charges if c.group != ChargeGroup.TRANSFER_OWNERSHIP]

    def is_hidden(self, code) -> bool:
        return str(code or '').strip() in self.hidden

    def detail_lines(self, charges, with_group: bool = False, with_block: bool = False) -> List[dict]:
        """Breakdown lines in display order, without hidden codes or zero totals."""
        lines = []
        for c in sorted(charges, key=lambda c: (c.order, c.id)):
            if c.total_sell == 0 or self.is_hidden(c.code):
                continue
            line = {'label': c.label, 'code': c.code, 'amount': c.total_sell}
            if with_group:
                line['group'] = c.group
            if with_block:
                line['blockId'] = c.block_id
            lines.append(line)
        return lines

    def summarize(self, view: dict, total: Decimal) -> dict:
        """Add transfer of ownership (when non-zero), the grand total and the breakdown flag."""
        if self.too['summary'] is not None:
            view['transferOwnership'] = self.too['summary']
        view['total'] = {'amount': total}
        view['grandTotal'] = {'amount': q2(total + self.too['total'])}
        view['exworksBreakdownIncluded'] = False
        return view

    def with_breakdown(self, view: dict, **detail) -> dict:
        view['exworksBreakdownIncluded'] = True
        if self.too['lines']:
            view['transferOwnershipBreakdown'] = self.too['lines']
        view.update(detail)
        return view


def exworks_total(charges) -> Decimal:
    return sum_totals(c for c in charges if c.group == ChargeGroup.EXWORKS)


def containers_of(blocks) -> List[dict]:
    return [
        {'containerType': b.container_type, 'containerQty': b.container_qty, 'isAddon': b.is_addon}
        for b in blocks
    ]
