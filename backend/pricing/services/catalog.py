"""
Template Catalog

This module loads and validates the pricing template catalog from its JSON
configuration, seeds it into the database with an idempotent upsert by code,
and exposes a read-only repository the pricing services query at quoting time.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from django.conf import settings
from django.db import transaction

from ..models import PricingTemplate, PricingTemplateLine
from ..types import ChargeGroup, QtyBasis, ShipmentMode, TemplateCode, TradeDirection
from .errors import ConfigurationError, NotFound

logger = logging.getLogger(__name__)

LINE_FLAGS = ('is_default', 'is_optional', 'is_labelling', 'is_discount', 'can_be_negative', 'is_repeatable')


def load_catalog_config(config_path: str = None) -> dict:
    """
    Load the template catalog from its JSON configuration file

    Args:
        config_path: Path to the catalog JSON file. If None, uses the
            PRICING_TEMPLATES_PATH setting or the bundled default.

    Returns:
        dict: Parsed catalog configuration

    Raises:
        ConfigurationError: If file cannot be loaded or parsed
    """
    if config_path is None:
        config_path = getattr(settings, 'PRICING_TEMPLATES_PATH', None)
    if config_path is None:
        config_path = Path(__file__).parent.parent / "config" / "pricing_templates.json"

    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigurationError(f"Pricing template configuration file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            catalog = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in pricing template file: {e}")
    except OSError as e:
        raise ConfigurationError(f"Error loading pricing template configuration: {e}")

    logger.info(f"Loaded pricing template catalog from {config_path}")
    return catalog


def validate_catalog_config(catalog: dict) -> List[str]:
    """
    Validate that the catalog is complete and consistent

    Args:
        catalog: Catalog configuration dictionary

    Returns:
        List[str]: List of validation errors (empty if valid)
    """
    errors = []

    templates = catalog.get('templates')
    if not isinstance(templates, list):
        return ["Missing required top-level key: templates"]

    seen_templates = set()
    for tpl in templates:
        code = tpl.get('code')
        if code not in TemplateCode.values:
            errors.append(f"Unknown template code: {code}")
            continue
        if code in seen_templates:
            errors.append(f"Duplicate template code: {code}")
        seen_templates.add(code)

        if not tpl.get('name'):
            errors.append(f"Template {code} has no name")
        if tpl.get('mode') not in ShipmentMode.values:
            errors.append(f"Template {code} has invalid mode: {tpl.get('mode')}")
        if tpl.get('direction') not in TradeDirection.values:
            errors.append(f"Template {code} has invalid direction: {tpl.get('direction')}")

        errors.extend(_validate_lines(code, tpl.get('lines') or []))

    if not errors:
        logger.info("Pricing template catalog validation passed")
    else:
        logger.warning(f"Pricing template catalog validation found {len(errors)} errors")

    return errors


def _validate_lines(template_code: str, lines: list) -> List[str]:
    errors = []
    seen = set()
    for line in lines:
        code = line.get('code')
        where = f"{template_code}:{code}"
        if not code:
            errors.append(f"Template {template_code} has a line without a code")
            continue
        if code in seen:
            errors.append(f"Duplicate line code {where}")
        seen.add(code)

        if not line.get('label'):
            errors.append(f"Line {where} has no label")
        if line.get('group') not in ChargeGroup.values:
            errors.append(f"Line {where} has invalid group: {line.get('group')}")
        if line.get('qty_basis') not in QtyBasis.values:
            errors.append(f"Line {where} has invalid quantity basis: {line.get('qty_basis')}")
        if not isinstance(line.get('order'), int):
            errors.append(f"Line {where} has no integer order")
        if line.get('is_default') and line.get('is_optional'):
            errors.append(f"Line {where} cannot be both default and optional")
    return errors


def seed_templates(catalog: Optional[dict] = None) -> Dict[str, int]:
    """
    Upsert every template and line in the catalog by code.

    Lines that are no longer listed for a template are removed. Running the
    seed twice leaves the database unchanged.

    Raises:
        ConfigurationError: If the catalog fails validation
    """
    if catalog is None:
        catalog = load_catalog_config()

    errors = validate_catalog_config(catalog)
    if errors:
        raise ConfigurationError("Invalid pricing template catalog: " + "; ".join(errors))

    stats = {'templates': 0, 'lines': 0, 'removed_lines': 0}

    with transaction.atomic():
        for tpl in catalog['templates']:
            template, _ = PricingTemplate.objects.update_or_create(
                code=tpl['code'],
                defaults={
                    'name': tpl['name'],
                    'mode': tpl['mode'],
                    'direction': tpl['direction'],
                },
            )
            stats['templates'] += 1

            codes = []
            for line in tpl.get('lines', []):
                defaults = {
                    'label': line['label'],
                    'group': line['group'],
                    'qty_basis': line['qty_basis'],
                    'order': line['order'],
                }
                defaults.update({flag: bool(line.get(flag, False)) for flag in LINE_FLAGS})
                if 'is_optional' not in line:
                    defaults['is_optional'] = not defaults['is_default']
                PricingTemplateLine.objects.update_or_create(
                    template=template, code=line['code'], defaults=defaults,
                )
                codes.append(line['code'])
                stats['lines'] += 1

            removed, _ = template.lines.exclude(code__in=codes).delete()
            stats['removed_lines'] += removed

    logger.info(
        f"Seeded pricing catalog: {stats['templates']} templates, {stats['lines']} lines, "
        f"{stats['removed_lines']} stale lines removed"
    )
    return stats


class TemplateCatalog:
    """
    Read-only access to the seeded template catalog.

    Every call reads the database; nothing is cached between requests.
    """

    def get(self, code) -> PricingTemplate:
        try:
            return PricingTemplate.objects.get(code=code)
        except PricingTemplate.DoesNotExist:
            raise NotFound(f"Pricing template not found: {code}")

    def list_for_mode(self, mode) -> List[PricingTemplate]:
        return list(PricingTemplate.objects.filter(mode=mode).order_by('name'))

    def lines(self, code) -> List[PricingTemplateLine]:
        return list(self.get(code).lines.order_by('order', 'id'))

    def default_lines(self, code) -> List[PricingTemplateLine]:
        return list(self.get(code).lines.filter(is_default=True).order_by('order', 'id'))

    def addons(self, code) -> List[PricingTemplateLine]:
        return list(
            self.get(code).lines.filter(is_optional=True, is_default=False).order_by('order', 'id')
        )

    def find_line(self, code, line_code) -> Optional[PricingTemplateLine]:
        return PricingTemplateLine.objects.filter(template__code=code, code=line_code).first()


default_catalog = TemplateCatalog()
