"""
Scenario tables.

Every behaviour that differs between pricing templates is looked up here by
TemplateCode: which customer view shape is built, whether charges are grouped
into container blocks, which THC fields are shown, how a block total is
formed and which lines are left off add-on blocks.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional

from .types import ShipmentMode, TemplateCode, TradeDirection


class ViewShape(str, Enum):
    AIR = 'AIR'
    SEA_BLOCKS = 'SEA_BLOCKS'
    SEA_TRANSIT = 'SEA_TRANSIT'
    SEA_LCL = 'SEA_LCL'
    SEA_IMPORT_LOCAL = 'SEA_IMPORT_LOCAL'


class ThcVariant(str, Enum):
    SINGLE = 'SINGLE'
    IMPORT_EXPORT = 'IMPORT_EXPORT'
    IN_OUT = 'IN_OUT'


class BlockTotalRule(str, Enum):
    FREIGHT_THC = 'FREIGHT_THC'
    TRANSIT_SPLIT = 'TRANSIT_SPLIT'
    DO_THC = 'DO_THC'


@dataclass(frozen=True)
class Scenario:
    code: TemplateCode
    view: ViewShape
    thc_variant: ThcVariant = ThcVariant.SINGLE
    block_rule: Optional[BlockTotalRule] = None
    addon_block_excludes: FrozenSet[str] = frozenset()
    # import and export clearance charges are itemized separately for customers
    clearance_split: bool = False

    @property
    def uses_container_blocks(self) -> bool:
        return self.block_rule is not None


SCENARIOS: Dict[TemplateCode, Scenario] = {
    TemplateCode.AIR_EXPORT_LOCAL: Scenario(TemplateCode.AIR_EXPORT_LOCAL, ViewShape.AIR),
    TemplateCode.AIR_EXPORT_FREEZONE: Scenario(TemplateCode.AIR_EXPORT_FREEZONE, ViewShape.AIR),
    TemplateCode.AIR_EXPORT_TRANSIT: Scenario(
        TemplateCode.AIR_EXPORT_TRANSIT, ViewShape.AIR, thc_variant=ThcVariant.IN_OUT,
    ),
    TemplateCode.AIR_IMPORT_LOCAL_CLEARANCE: Scenario(TemplateCode.AIR_IMPORT_LOCAL_CLEARANCE, ViewShape.AIR),
    TemplateCode.AIR_IMPORT_REEXPORT: Scenario(
        TemplateCode.AIR_IMPORT_REEXPORT, ViewShape.AIR, thc_variant=ThcVariant.IMPORT_EXPORT,
    ),
    TemplateCode.SEA_TO_AIR: Scenario(
        TemplateCode.SEA_TO_AIR, ViewShape.AIR, thc_variant=ThcVariant.IMPORT_EXPORT, clearance_split=True,
    ),
    TemplateCode.SEA_EXPORT_LOCAL: Scenario(
        TemplateCode.SEA_EXPORT_LOCAL, ViewShape.SEA_BLOCKS, block_rule=BlockTotalRule.FREIGHT_THC,
    ),
    TemplateCode.SEA_EXPORT_FREEZONE: Scenario(
        TemplateCode.SEA_EXPORT_FREEZONE, ViewShape.SEA_BLOCKS, block_rule=BlockTotalRule.FREIGHT_THC,
    ),
    TemplateCode.SEA_EXPORT_TRANSIT: Scenario(
        TemplateCode.SEA_EXPORT_TRANSIT, ViewShape.SEA_TRANSIT, block_rule=BlockTotalRule.TRANSIT_SPLIT,
    ),
    TemplateCode.SEA_EXPORT_LCL: Scenario(TemplateCode.SEA_EXPORT_LCL, ViewShape.SEA_LCL),
    TemplateCode.SEA_IMPORT_LOCAL: Scenario(
        TemplateCode.SEA_IMPORT_LOCAL,
        ViewShape.SEA_IMPORT_LOCAL,
        block_rule=BlockTotalRule.DO_THC,
        # charged once per quote, not per container
        addon_block_excludes=frozenset({'DELIVERY_ORDER'}),
    ),
    TemplateCode.SEA_IMPORT_LCL: Scenario(TemplateCode.SEA_IMPORT_LCL, ViewShape.SEA_LCL),
    # Pricing created by attaching a transfer of ownership bundle before any
    # main template only carries that bundle.
    TemplateCode.AIR_EXPORT_TRANSFER_OWNERSHIP: Scenario(TemplateCode.AIR_EXPORT_TRANSFER_OWNERSHIP, ViewShape.AIR),
    TemplateCode.AIR_IMPORT_TRANSFER_OWNERSHIP: Scenario(TemplateCode.AIR_IMPORT_TRANSFER_OWNERSHIP, ViewShape.AIR),
    TemplateCode.SEA_EXPORT_TRANSFER_OWNERSHIP: Scenario(TemplateCode.SEA_EXPORT_TRANSFER_OWNERSHIP, ViewShape.AIR),
    TemplateCode.SEA_IMPORT_TRANSFER_OWNERSHIP: Scenario(TemplateCode.SEA_IMPORT_TRANSFER_OWNERSHIP, ViewShape.AIR),
}

TRANSFER_OWNERSHIP_TEMPLATES: Dict[tuple, TemplateCode] = {
    (ShipmentMode.AIR, TradeDirection.EXPORT): TemplateCode.AIR_EXPORT_TRANSFER_OWNERSHIP,
    (ShipmentMode.AIR, TradeDirection.IMPORT): TemplateCode.AIR_IMPORT_TRANSFER_OWNERSHIP,
    (ShipmentMode.SEA, TradeDirection.EXPORT): TemplateCode.SEA_EXPORT_TRANSFER_OWNERSHIP,
    (ShipmentMode.SEA, TradeDirection.IMPORT): TemplateCode.SEA_IMPORT_TRANSFER_OWNERSHIP,
}


def scenario_for(template_code) -> Scenario:
    """Scenario for a template code. Raises ValueError for codes outside the enum."""
    return SCENARIOS[TemplateCode(template_code)]


def transfer_ownership_template(mode, direction) -> TemplateCode:
    return TRANSFER_OWNERSHIP_TEMPLATES[(ShipmentMode(mode), TradeDirection(direction))]


def is_transfer_ownership_template(template_code) -> bool:
    return TemplateCode(template_code) in TRANSFER_OWNERSHIP_TEMPLATES.values()
