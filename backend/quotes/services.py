"""
Quotation lifecycle: who can see a quote, sending it, booking it, and the
customer's request to see the exworks breakdown.

Sending and booking lock the pricing implicitly.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from django.db import transaction
from django.utils import timezone

from accounts.models import UserRole
from pricing.services.errors import NotFound, PermissionDenied, ValidationError
from pricing.services.lock_guard import lock_pricing
from pricing.services.snapshot import take_snapshot

from .models import Quotation

logger = logging.getLogger(__name__)

SENT_LOCK_REASON = "Quotation sent to customer"
BOOKED_LOCK_REASON = "Booking confirmed"

SENDABLE_STATUSES = ('DRAFT', 'PRICED', 'SENT')
BOOKABLE_STATUSES = ('PRICED', 'SENT')


def is_customer(user) -> bool:
    return getattr(user, 'role', None) == UserRole.CUSTOMER


def visible_quotes(user):
    """Staff see every quote, customers only their own."""
    qs = Quotation.objects.all()
    if is_customer(user):
        qs = qs.filter(customer=user)
    return qs


def get_visible_quote(quote_id, user) -> Quotation:
    quote = visible_quotes(user).filter(pk=quote_id).first()
    if quote is None:
        raise NotFound(f"Quote not found: {quote_id}")
    return quote


def customer_can_see_breakdown(quote: Quotation) -> bool:
    return quote.exworks_breakdown_status == 'APPROVED' and bool(quote.show_exworks_breakdown)


def normalize_hidden_codes(codes: Iterable) -> List[str]:
    """Trimmed, de-duplicated charge codes in their original order."""
    seen = []
    for code in codes or []:
        code = str(code or '').strip()
        if code and code not in seen:
            seen.append(code)
    return seen


def send_quote(quote_id, user) -> Quotation:
    """
    Send a quote to its customer: snapshot the pricing, mark it SENT and
    lock the pricing.
    """
    quote = Quotation.objects.filter(pk=quote_id).first()
    if quote is None:
        raise NotFound(f"Quote not found: {quote_id}")
    if quote.status not in SENDABLE_STATUSES:
        raise ValidationError(f"A {quote.status} quote cannot be sent")

    with transaction.atomic():
        quote = take_snapshot(quote.pk, user)
        quote.status = 'SENT'
        quote.sent_at = timezone.now()
        quote.save(update_fields=['status', 'sent_at', 'updated_at'])
        quote = lock_pricing(quote.pk, SENT_LOCK_REASON, user)

    logger.info(f"Quote {quote.reference} sent to customer (pricing v{quote.pricing_version})")
    return quote


def confirm_booking(quote_id, user) -> Quotation:
    quote = get_visible_quote(quote_id, user)
    if quote.status == 'BOOKED':
        return quote
    if quote.status not in BOOKABLE_STATUSES:
        raise ValidationError(f"A {quote.status} quote cannot be booked")

    with transaction.atomic():
        quote.status = 'BOOKED'
        quote.booked_at = timezone.now()
        quote.save(update_fields=['status', 'booked_at', 'updated_at'])
        quote = lock_pricing(quote.pk, BOOKED_LOCK_REASON, user)

    logger.info(f"Booking confirmed for quote {quote.reference}")
    return quote


def request_breakdown(quote_id, user) -> Quotation:
    """Customer asks to see the itemized exworks charges."""
    quote = get_visible_quote(quote_id, user)
    if not is_customer(user):
        raise PermissionDenied("Only the customer can request a breakdown")
    if quote.exworks_breakdown_status == 'APPROVED':
        return quote

    quote.exworks_breakdown_status = 'REQUESTED'
    quote.show_exworks_breakdown = False
    quote.save(update_fields=['exworks_breakdown_status', 'show_exworks_breakdown', 'updated_at'])
    logger.info(f"Breakdown requested on quote {quote.reference}")
    return quote


def decide_breakdown(
    quote_id,
    user,
    approved: Optional[bool] = None,
    show: Optional[bool] = None,
    hidden_codes: Optional[Iterable] = None,
) -> Quotation:
    """
    Staff decision on a breakdown request.

    Approving shows the breakdown and rejecting hides it unless ``show`` says
    otherwise; ``hidden_codes`` replaces the list of codes left out of it.
    """
    if is_customer(user):
        raise PermissionDenied("Only staff can decide on a breakdown")
    quote = Quotation.objects.filter(pk=quote_id).first()
    if quote is None:
        raise NotFound(f"Quote not found: {quote_id}")

    fields = ['updated_at']
    if approved is not None:
        quote.exworks_breakdown_status = 'APPROVED' if approved else 'REJECTED'
        quote.show_exworks_breakdown = bool(approved)
        fields += ['exworks_breakdown_status', 'show_exworks_breakdown']
    if show is not None:
        quote.show_exworks_breakdown = bool(show)
        if 'show_exworks_breakdown' not in fields:
            fields.append('show_exworks_breakdown')
    if hidden_codes is not None:
        quote.hidden_breakdown_codes = normalize_hidden_codes(hidden_codes)
        fields.append('hidden_breakdown_codes')

    quote.save(update_fields=fields)
    logger.info(
        f"Breakdown on quote {quote.reference}: {quote.exworks_breakdown_status}, "
        f"visible={quote.show_exworks_breakdown}, hidden={quote.hidden_breakdown_codes}"
    )
    return quote
