from __future__ import annotations

import logging
from decimal import InvalidOperation
from typing import List, Optional, Tuple

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Max
from django.utils import timezone

from ..dataclasses import QuoteWeightInput
from ..models import (
    PricingTemplate,
    PricingTemplateLine,
    QuotePricing,
    QuotePricingBlock,
    QuotePricingCharge,
)
from ..scenarios import (
    is_transfer_ownership_template,
    scenario_for,
    transfer_ownership_template,
)
from ..types import ChargeGroup, ContainerType, Currency, ShipmentMode, TemplateCode, TradeDirection
from .calculator import compute_charge
from .catalog import TemplateCatalog, default_catalog
from .errors import AlreadyExists, NotFound, ValidationError
from .lock_guard import assert_pricing_editable, get_quote
from .utils import ZERO, d, q4

logger = logging.getLogger(__name__)

PRIMARY_BLOCK_ORDER = 10
FIRST_ADDON_BLOCK_ORDER = 20
BLOCK_ORDER_STEP = 10

CHARGE_RESULT_FIELDS = ['buy_rate', 'sell_rate', 'qty', 'total_sell', 'margin', 'updated_at']


# ---- helpers ----

def _get_pricing(quote_id) -> QuotePricing:
    try:
        return QuotePricing.objects.get(quote_id=quote_id)
    except QuotePricing.DoesNotExist:
        raise NotFound(f"Pricing has not been initialized for quote {quote_id}")


def _parse_template_code(template_code) -> TemplateCode:
    try:
        return TemplateCode(template_code)
    except ValueError:
        raise ValidationError(f"Unknown template code: {template_code}")


def _normalize_currency(currency: Optional[str]) -> str:
    code = (currency or '').strip().upper()
    if code in Currency.values:
        return code
    return getattr(settings, 'PRICING_DEFAULT_CURRENCY', Currency.AED)


def _validate_container(container_type, container_qty) -> Tuple[str, int]:
    if container_type not in ContainerType.values:
        raise ValidationError(
            f"container_type must be one of {', '.join(ContainerType.values)} for container scenarios"
        )
    try:
        qty = int(container_qty)
    except (TypeError, ValueError):
        raise ValidationError("container_qty must be a positive whole number")
    if qty <= 0:
        raise ValidationError("container_qty must be a positive whole number")
    return container_type, qty


def _parse_rate(value, field: str):
    try:
        rate = d(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{field} must be a number")
    if not rate.is_finite():
        raise ValidationError(f"{field} must be a number")
    return rate


def _new_charge(pricing, line: PricingTemplateLine, block=None, label: Optional[str] = None) -> QuotePricingCharge:
    """Unsaved charge row for a template line, with zero rates."""
    return QuotePricingCharge(
        pricing=pricing,
        block=block,
        code=line.code,
        label=label or line.label,
        group=line.group,
        qty_basis=line.qty_basis,
        order=line.order,
        buy_rate=ZERO,
        sell_rate=ZERO,
        qty=1,
        total_sell=ZERO,
        margin=None if line.is_labelling else ZERO,
        is_labelling=line.is_labelling,
        is_discount=line.is_discount,
        can_be_negative=line.can_be_negative,
    )


def _has_transfer_ownership(pricing) -> bool:
    return pricing.charges.filter(group=ChargeGroup.TRANSFER_OWNERSHIP).exists()


def _template_line(pricing, code, catalog: TemplateCatalog) -> Optional[PricingTemplateLine]:
    """
    Definition of a charge code for this pricing: the pricing's own template
    first, then the transfer of ownership template for its mode and direction.
    """
    line = catalog.find_line(pricing.template_code, code)
    if line is not None:
        return line
    too_code = transfer_ownership_template(pricing.mode, pricing.direction)
    return catalog.find_line(too_code, code)


def _apply_computation(charge: QuotePricingCharge, physical: QuoteWeightInput, buy_rate, sell_rate) -> None:
    container_qty = charge.block.container_qty if charge.block_id else None
    result = compute_charge(
        charge.qty_basis,
        buy_rate,
        sell_rate,
        physical,
        container_qty=container_qty,
        stored_qty=charge.qty,
        is_labelling=charge.is_labelling,
        is_discount=charge.is_discount,
        can_be_negative=charge.can_be_negative,
    )
    charge.buy_rate = q4(buy_rate)
    charge.sell_rate = q4(sell_rate)
    charge.qty = result.billed_quantity
    charge.total_sell = result.total_sell
    charge.margin = result.margin


# ---- catalog reads ----

def list_templates(mode, catalog: TemplateCatalog = default_catalog) -> List[PricingTemplate]:
    """Main templates for a shipment mode, ordered by name. Transfer of ownership bundles are attached separately."""
    if mode not in ShipmentMode.values:
        raise ValidationError(f"Unknown shipment mode: {mode}")
    return [t for t in catalog.list_for_mode(mode) if not is_transfer_ownership_template(t.code)]


def list_addons(template_code, catalog: TemplateCatalog = default_catalog) -> List[PricingTemplateLine]:
    return catalog.addons(_parse_template_code(template_code))


def list_blocks(quote_id) -> List[QuotePricingBlock]:
    return list(_get_pricing(quote_id).blocks.order_by('order', 'id'))


# ---- mutations ----

def initialize_pricing(
    quote_id,
    template_code,
    currency: Optional[str] = None,
    container_type: Optional[str] = None,
    container_qty=None,
    user=None,
    catalog: TemplateCatalog = default_catalog,
) -> QuotePricing:
    """
    Create (or replace) a quote's pricing from a template.

    Any existing pricing, with its blocks and charges, is deleted and rebuilt
    in the same transaction. Container scenarios get a primary block carrying
    every default line; other scenarios attach the defaults with no block.

    Raises:
        PricingLocked: If the quote is locked and the user is not an admin
        ValidationError: On mode mismatch or bad container input
        NotFound: If the quote or template is missing
    """
    assert_pricing_editable(quote_id, user)
    quote = get_quote(quote_id)

    code = _parse_template_code(template_code)
    if is_transfer_ownership_template(code):
        raise ValidationError("Transfer of ownership templates are attached to an existing pricing, not initialized")

    template = catalog.get(code)
    if template.mode != quote.shipment_mode:
        raise ValidationError(
            f"Template {code} is for {template.mode} shipments but quote {quote.reference} is {quote.shipment_mode}"
        )

    scenario = scenario_for(code)
    if scenario.uses_container_blocks:
        container_type, container_qty = _validate_container(container_type, container_qty)

    lines = catalog.default_lines(code)
    currency = _normalize_currency(currency)

    with transaction.atomic():
        QuotePricing.objects.filter(quote=quote).delete()
        pricing = QuotePricing.objects.create(
            quote=quote,
            mode=template.mode,
            direction=template.direction,
            template_code=code,
            currency=currency,
        )
        block = None
        if scenario.uses_container_blocks:
            block = QuotePricingBlock.objects.create(
                pricing=pricing,
                container_type=container_type,
                container_qty=container_qty,
                is_addon=False,
                order=PRIMARY_BLOCK_ORDER,
            )
        QuotePricingCharge.objects.bulk_create([_new_charge(pricing, line, block) for line in lines])

    logger.info(f"Initialized pricing for quote {quote.reference} with {code} ({len(lines)} charges, {currency})")
    return pricing


def add_container_block(
    quote_id,
    container_type,
    container_qty,
    user=None,
    catalog: TemplateCatalog = default_catalog,
) -> QuotePricingBlock:
    """
    Add another container size to a full container sea pricing.

    The new block carries the template's default lines again, minus the
    scenario's per-quote charges.
    """
    assert_pricing_editable(quote_id, user)
    pricing = _get_pricing(quote_id)

    scenario = scenario_for(pricing.template_code)
    if not scenario.uses_container_blocks:
        raise ValidationError(f"Template {pricing.template_code} does not use container blocks")

    container_type, container_qty = _validate_container(container_type, container_qty)
    if pricing.blocks.filter(container_type=container_type).exists():
        raise ValidationError(f"A {container_type} block already exists for this quote")

    lines = [
        line for line in catalog.default_lines(pricing.template_code)
        if line.code not in scenario.addon_block_excludes
    ]

    try:
        with transaction.atomic():
            max_order = pricing.blocks.aggregate(max_order=Max('order'))['max_order']
            order = max_order + BLOCK_ORDER_STEP if max_order is not None else FIRST_ADDON_BLOCK_ORDER
            block = QuotePricingBlock.objects.create(
                pricing=pricing,
                container_type=container_type,
                container_qty=container_qty,
                is_addon=True,
                order=order,
            )
            QuotePricingCharge.objects.bulk_create([_new_charge(pricing, line, block) for line in lines])
    except IntegrityError:
        # a concurrent request added the same container type
        raise ValidationError(f"A {container_type} block already exists for this quote")

    logger.info(
        f"Added {container_type} x {container_qty} block to quote {quote_id} pricing ({len(lines)} charges)"
    )
    return block


def add_line(
    quote_id,
    line_code,
    block_id=None,
    user=None,
    catalog: TemplateCatalog = default_catalog,
) -> QuotePricingCharge:
    """
    Add an optional charge line.

    Only optional lines can be added. Each instance of a repeatable line
    is numbered in its label.
    """
    assert_pricing_editable(quote_id, user)
    pricing = _get_pricing(quote_id)

    line = catalog.find_line(pricing.template_code, line_code)
    if line is None:
        too_line = _template_line(pricing, line_code, catalog)
        if too_line is None:
            raise NotFound(f"Charge {line_code} is not defined for template {pricing.template_code}")
        if not _has_transfer_ownership(pricing):
            raise ValidationError("Attach the transfer of ownership charges before adding to them")
        line = too_line

    if not line.is_optional:
        raise ValidationError("This charge is mandatory and already included")

    block = None
    if line.group == ChargeGroup.TRANSFER_OWNERSHIP:
        if block_id:
            raise ValidationError("Transfer of ownership charges do not belong to a container block")
    elif scenario_for(pricing.template_code).uses_container_blocks:
        if not block_id:
            raise ValidationError("block_id is required for container scenarios")
        block = pricing.blocks.filter(pk=block_id).first()
        if block is None:
            raise ValidationError(f"Block {block_id} does not belong to this quote's pricing")
    elif block_id:
        raise ValidationError(f"Template {pricing.template_code} does not use container blocks")

    existing = pricing.charges.filter(code=line.code)
    if block is not None:
        existing = existing.filter(block=block)

    label = line.label
    if line.is_repeatable:
        label = f"{line.label} #{existing.count() + 1}"
    elif existing.exists():
        raise ValidationError("Charge already added")

    charge = _new_charge(pricing, line, block, label=label)
    charge.save()

    logger.info(f"Added charge {charge.code} to quote {quote_id} pricing")
    return charge


def remove_line(quote_id, charge_id, user=None, catalog: TemplateCatalog = default_catalog) -> None:
    assert_pricing_editable(quote_id, user)
    pricing = _get_pricing(quote_id)

    charge = pricing.charges.filter(pk=charge_id).first()
    if charge is None:
        raise NotFound(f"Charge {charge_id} not found on quote {quote_id}")

    line = _template_line(pricing, charge.code, catalog)
    if line is None or not line.is_optional:
        raise ValidationError("Mandatory charges cannot be removed")

    charge.delete()
    logger.info(f"Removed charge {charge.code} from quote {quote_id} pricing")


def attach_transfer_ownership(
    quote_id,
    direction: Optional[str] = None,
    user=None,
    catalog: TemplateCatalog = default_catalog,
) -> QuotePricing:
    """
    Attach the transfer of ownership bundle for the quote's mode and direction.

    Without an existing pricing the bundle initializes one on its own, using
    the supplied direction. The bundle can only be attached once.
    """
    assert_pricing_editable(quote_id, user)
    quote = get_quote(quote_id)
    pricing = QuotePricing.objects.filter(quote=quote).first()

    if pricing is not None:
        mode, direction = pricing.mode, pricing.direction
    else:
        mode, direction = quote.shipment_mode, (direction or '').strip().upper()
    if direction not in TradeDirection.values:
        raise ValidationError("direction must be EXPORT or IMPORT")

    code = transfer_ownership_template(mode, direction)
    lines = catalog.default_lines(code)

    with transaction.atomic():
        if pricing is None:
            template = catalog.get(code)
            pricing = QuotePricing.objects.create(
                quote=quote,
                mode=template.mode,
                direction=template.direction,
                template_code=code,
                currency=_normalize_currency(None),
            )
        elif _has_transfer_ownership(pricing):
            raise AlreadyExists("Transfer of ownership is already attached to this quote")
        QuotePricingCharge.objects.bulk_create([_new_charge(pricing, line) for line in lines])

    logger.info(f"Attached {code} to quote {quote.reference} ({len(lines)} charges)")
    return pricing


def update_charge(
    quote_id,
    charge_id,
    buy_rate=None,
    sell_rate=None,
    user=None,
) -> QuotePricingCharge:
    """
    Set a charge's rates and recompute it.

    The quote's weight, pieces and volume are read fresh on every call.
    Rates that are not supplied keep their stored value.
    """
    assert_pricing_editable(quote_id, user)
    quote = get_quote(quote_id)
    pricing = _get_pricing(quote.pk)

    charge = pricing.charges.select_related('block').filter(pk=charge_id).first()
    if charge is None:
        raise NotFound(f"Charge {charge_id} not found on quote {quote_id}")

    buy = _parse_rate(buy_rate, 'buy_rate') if buy_rate is not None else charge.buy_rate
    sell = _parse_rate(sell_rate, 'sell_rate') if sell_rate is not None else charge.sell_rate

    _apply_computation(charge, QuoteWeightInput.from_quote(quote), buy, sell)
    charge.save(update_fields=CHARGE_RESULT_FIELDS)

    logger.info(f"Updated {charge.code} on quote {quote.reference}: total {charge.total_sell}")
    return charge


def recalculate_pricing(quote_id, user=None) -> QuotePricing:
    """Recompute every charge with its stored rates, e.g. after the quote's weight changed."""
    assert_pricing_editable(quote_id, user)
    quote = get_quote(quote_id)
    pricing = _get_pricing(quote.pk)

    physical = QuoteWeightInput.from_quote(quote)
    now = timezone.now()
    charges = list(pricing.charges.select_related('block'))
    for charge in charges:
        _apply_computation(charge, physical, charge.buy_rate, charge.sell_rate)
        # bulk_update skips auto_now
        charge.updated_at = now

    with transaction.atomic():
        QuotePricingCharge.objects.bulk_update(charges, CHARGE_RESULT_FIELDS)

    logger.info(f"Recalculated {len(charges)} charges on quote {quote.reference}")
    return pricing
