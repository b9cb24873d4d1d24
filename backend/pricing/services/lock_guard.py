"""
Pricing lock guard.

A quote's pricing is either unlocked or locked. Every mutating pricing
operation calls ``assert_pricing_editable`` first; administrators bypass
the gate, everyone else gets ``PricingLocked`` while the lock timestamp is
set. The timestamp is re-read from the database on every call.
"""
from __future__ import annotations

import logging

from django.utils import timezone

from accounts.models import UserRole
from quotes.models import Quotation

from .errors import NotFound, PermissionDenied, PricingLocked, ValidationError

logger = logging.getLogger(__name__)


def is_admin(user) -> bool:
    return bool(user is not None and getattr(user, 'role', None) == UserRole.ADMIN)


def get_quote(quote_id) -> Quotation:
    try:
        return Quotation.objects.get(pk=quote_id)
    except Quotation.DoesNotExist:
        raise NotFound(f"Quote not found: {quote_id}")


def assert_pricing_editable(quote_id, user=None) -> None:
    if is_admin(user):
        return

    locked_at = Quotation.objects.filter(pk=quote_id).values_list('pricing_locked_at', flat=True).first()
    if locked_at is None:
        if not Quotation.objects.filter(pk=quote_id).exists():
            raise NotFound(f"Quote not found: {quote_id}")
        return

    logger.warning(f"Rejected pricing change on locked quote {quote_id} (locked at {locked_at.isoformat()})")
    raise PricingLocked(locked_at)


def lock_pricing(quote_id, reason: str, user=None) -> Quotation:
    """
    Lock a quote's pricing. Locking an already locked quote keeps the
    original timestamp and owner.
    """
    reason = (reason or '').strip()
    if not reason:
        raise ValidationError("A lock reason is required")

    quote = get_quote(quote_id)
    if quote.pricing_locked_at is not None:
        return quote

    quote.pricing_locked_at = timezone.now()
    quote.pricing_locked_by = user if user is not None and user.is_authenticated else None
    quote.pricing_lock_reason = reason
    quote.save(update_fields=['pricing_locked_at', 'pricing_locked_by', 'pricing_lock_reason', 'updated_at'])

    logger.info(f"Locked pricing on quote {quote.reference}: {reason}")
    return quote


def unlock_pricing(quote_id, user=None) -> Quotation:
    if not is_admin(user):
        raise PermissionDenied("Only an admin can unlock pricing")

    quote = get_quote(quote_id)
    quote.pricing_locked_at = None
    quote.pricing_locked_by = None
    quote.pricing_lock_reason = None
    quote.save(update_fields=['pricing_locked_at', 'pricing_locked_by', 'pricing_lock_reason', 'updated_at'])

    logger.info(f"Unlocked pricing on quote {quote.reference} by {user.username}")
    return quote
