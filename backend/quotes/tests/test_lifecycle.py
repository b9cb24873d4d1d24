"""
Quotation lifecycle: sending, booking and the exworks breakdown gate.
"""
from decimal import Decimal

import pytest

from pricing.services import pricing_service
from pricing.services.errors import NotFound, PermissionDenied, PricingLocked, ValidationError
from quotes import services
from quotes.models import Quotation

pytestmark = pytest.mark.django_db


@pytest.fixture
def priced_quote(make_quote, seeded_catalog, customer_user):
    quote = make_quote("AIR", customer=customer_user, weight_kg=Decimal("40"), pieces=5)
    pricing_service.initialize_pricing(quote.id, "AIR_EXPORT_LOCAL")
    return quote


class TestSend:

    def test_send_snapshots_and_locks(self, priced_quote, staff_user):
        quote = services.send_quote(priced_quote.id, staff_user)

        assert quote.status == "SENT"
        assert quote.sent_at is not None
        assert quote.pricing_version == 1
        assert quote.pricing_snapshot["templateCode"] == "AIR_EXPORT_LOCAL"
        assert quote.pricing_locked_at is not None
        assert quote.pricing_lock_reason == services.SENT_LOCK_REASON

        with pytest.raises(PricingLocked):
            pricing_service.add_line(quote.id, "SCREENING", user=staff_user)

    def test_resend_takes_new_snapshot(self, priced_quote, staff_user):
        first = services.send_quote(priced_quote.id, staff_user)
        again = services.send_quote(priced_quote.id, staff_user)

        assert again.pricing_version == 2
        assert again.pricing_locked_at == first.pricing_locked_at

    def test_booked_quote_cannot_be_sent(self, priced_quote, staff_user):
        services.send_quote(priced_quote.id, staff_user)
        services.confirm_booking(priced_quote.id, staff_user)
        with pytest.raises(ValidationError):
            services.send_quote(priced_quote.id, staff_user)

    def test_send_without_pricing(self, make_quote, staff_user):
        quote = make_quote()
        with pytest.raises(NotFound):
            services.send_quote(quote.id, staff_user)
        quote.refresh_from_db()
        assert quote.status == "DRAFT"


class TestBooking:

    def test_booking_locks_pricing(self, priced_quote, customer_user):
        Quotation.objects.filter(pk=priced_quote.pk).update(status="PRICED")
        quote = services.confirm_booking(priced_quote.id, customer_user)

        assert quote.status == "BOOKED"
        assert quote.booked_at is not None
        assert quote.pricing_lock_reason == services.BOOKED_LOCK_REASON

    def test_booking_keeps_sent_lock(self, priced_quote, staff_user):
        sent = services.send_quote(priced_quote.id, staff_user)
        booked = services.confirm_booking(priced_quote.id, staff_user)
        assert booked.pricing_locked_at == sent.pricing_locked_at
        assert booked.pricing_lock_reason == services.SENT_LOCK_REASON

    def test_booking_is_idempotent(self, priced_quote, staff_user):
        services.send_quote(priced_quote.id, staff_user)
        first = services.confirm_booking(priced_quote.id, staff_user)
        again = services.confirm_booking(priced_quote.id, staff_user)
        assert again.booked_at == first.booked_at

    def test_draft_cannot_be_booked(self, priced_quote, staff_user):
        with pytest.raises(ValidationError):
            services.confirm_booking(priced_quote.id, staff_user)

    def test_customer_books_only_own_quote(self, priced_quote, create_user):
        Quotation.objects.filter(pk=priced_quote.pk).update(status="SENT")
        stranger = create_user("globex", role="CUSTOMER")
        with pytest.raises(NotFound):
            services.confirm_booking(priced_quote.id, stranger)


class TestBreakdownGate:

    def test_request_then_approve(self, priced_quote, customer_user, staff_user):
        quote = services.request_breakdown(priced_quote.id, customer_user)
        assert quote.exworks_breakdown_status == "REQUESTED"
        assert not services.customer_can_see_breakdown(quote)

        quote = services.decide_breakdown(priced_quote.id, staff_user, approved=True)
        assert quote.exworks_breakdown_status == "APPROVED"
        assert quote.show_exworks_breakdown
        assert services.customer_can_see_breakdown(quote)

    def test_approved_but_hidden(self, priced_quote, staff_user):
        quote = services.decide_breakdown(priced_quote.id, staff_user, approved=True, show=False)
        assert quote.exworks_breakdown_status == "APPROVED"
        assert not services.customer_can_see_breakdown(quote)

    def test_reject(self, priced_quote, customer_user, staff_user):
        services.request_breakdown(priced_quote.id, customer_user)
        quote = services.decide_breakdown(priced_quote.id, staff_user, approved=False)
        assert quote.exworks_breakdown_status == "REJECTED"
        assert not quote.show_exworks_breakdown

    def test_request_after_approval_is_noop(self, priced_quote, customer_user, staff_user):
        services.decide_breakdown(priced_quote.id, staff_user, approved=True)
        quote = services.request_breakdown(priced_quote.id, customer_user)
        assert quote.exworks_breakdown_status == "APPROVED"
        assert quote.show_exworks_breakdown

    def test_hidden_codes_are_normalized(self, priced_quote, staff_user):
        quote = services.decide_breakdown(
            priced_quote.id, staff_user, hidden_codes=[" AWB", "AWB", "", "LABELLING "],
        )
        assert quote.hidden_breakdown_codes == ["AWB", "LABELLING"]
        assert quote.exworks_breakdown_status == "NONE"

    def test_roles(self, priced_quote, customer_user, staff_user):
        with pytest.raises(PermissionDenied):
            services.request_breakdown(priced_quote.id, staff_user)
        with pytest.raises(PermissionDenied):
            services.decide_breakdown(priced_quote.id, customer_user, approved=True)


class TestVisibility:

    def test_customers_see_only_their_quotes(self, make_quote, customer_user, create_user, staff_user):
        own = make_quote(customer=customer_user)
        other = make_quote(customer=create_user("globex", role="CUSTOMER"))

        assert list(services.visible_quotes(customer_user)) == [own]
        assert set(services.visible_quotes(staff_user)) == {own, other}
        with pytest.raises(NotFound):
            services.get_visible_quote(other.id, customer_user)
