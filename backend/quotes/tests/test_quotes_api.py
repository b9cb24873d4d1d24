from decimal import Decimal

import pytest

from pricing.models import QuotePricingCharge
from pricing.services import pricing_service
from pricing.services.lock_guard import lock_pricing
from quotes.models import Quotation

pytestmark = pytest.mark.django_db


def _payload(**extra):
    data = {"reference": "Q-API-1", "shipment_mode": "AIR", "weight_kg": "40.000"}
    data.update(extra)
    return data


class TestQuoteCrud:

    def test_staff_creates_quote_for_customer(self, api_client, staff_user, customer_user):
        resp = api_client(staff_user).post("/api/quotes/", _payload(customer=customer_user.id), format="json")
        assert resp.status_code == 201
        body = resp.json()
        assert body["customer"] == customer_user.id
        assert body["status"] == "DRAFT"
        assert body["is_pricing_locked"] is False

    def test_customer_quotes_for_themselves(self, api_client, customer_user, staff_user):
        resp = api_client(customer_user).post("/api/quotes/", _payload(customer=staff_user.id), format="json")
        assert resp.status_code == 201
        assert Quotation.objects.get(pk=resp.json()["id"]).customer == customer_user

    def test_lifecycle_fields_are_read_only(self, api_client, staff_user):
        resp = api_client(staff_user).post(
            "/api/quotes/", _payload(status="BOOKED", pricing_version=9), format="json",
        )
        assert resp.status_code == 201
        quote = Quotation.objects.get(pk=resp.json()["id"])
        assert quote.status == "DRAFT"
        assert quote.pricing_version == 0

    def test_packages_fill_physical_attributes(self, api_client, staff_user):
        packages = [
            {"qty": 2, "length": "100", "width": "50", "height": "40", "unit": "cm"},
            {"qty": 1, "length": "1", "width": "1", "height": "1", "unit": "m"},
        ]
        resp = api_client(staff_user).post("/api/quotes/", _payload(packages=packages), format="json")
        assert resp.status_code == 201

        quote = Quotation.objects.get(pk=resp.json()["id"])
        assert quote.pieces == 3
        assert quote.volume_cbm == Decimal("1.4")
        assert quote.chargeable_weight_kg == Decimal("233.33")
        assert quote.packages[0]["length"] == "100.00"

    def test_list_is_scoped_to_customer(self, api_client, make_quote, customer_user, create_user):
        own = make_quote(customer=customer_user)
        make_quote(customer=create_user("globex", role="CUSTOMER"))

        resp = api_client(customer_user).get("/api/quotes/")
        assert resp.status_code == 200
        body = resp.json()
        rows = body["results"] if isinstance(body, dict) else body
        assert [q["id"] for q in rows] == [own.id]

    def test_delete_not_allowed(self, api_client, staff_user, make_quote):
        quote = make_quote()
        assert api_client(staff_user).delete(f"/api/quotes/{quote.id}/").status_code == 405


class TestPhysicalChanges:

    @pytest.fixture
    def priced_quote(self, make_quote, seeded_catalog):
        quote = make_quote("AIR", weight_kg=Decimal("40"))
        pricing_service.initialize_pricing(quote.id, "AIR_EXPORT_LOCAL")
        thc = QuotePricingCharge.objects.get(pricing__quote=quote, code="THC")
        pricing_service.update_charge(quote.id, thc.id, sell_rate=2)
        return quote

    def test_weight_change_recalculates(self, api_client, staff_user, priced_quote):
        resp = api_client(staff_user).patch(f"/api/quotes/{priced_quote.id}/", {"weight_kg": "60"}, format="json")
        assert resp.status_code == 200
        thc = QuotePricingCharge.objects.get(pricing__quote=priced_quote, code="THC")
        assert thc.total_sell == Decimal("120.00")

    def test_notes_change_leaves_charges(self, api_client, staff_user, priced_quote):
        resp = api_client(staff_user).patch(f"/api/quotes/{priced_quote.id}/", {"notes": "fragile"}, format="json")
        assert resp.status_code == 200

    def test_mode_is_fixed_once_priced(self, api_client, staff_user, priced_quote):
        resp = api_client(staff_user).patch(f"/api/quotes/{priced_quote.id}/", {"shipment_mode": "SEA"}, format="json")
        assert resp.status_code == 400
        assert "shipment_mode" in resp.json()

        priced_quote.refresh_from_db()
        assert priced_quote.shipment_mode == "AIR"

    def test_mode_change_allowed_before_pricing(self, api_client, staff_user, make_quote):
        quote = make_quote("AIR")
        resp = api_client(staff_user).patch(f"/api/quotes/{quote.id}/", {"shipment_mode": "SEA"}, format="json")
        assert resp.status_code == 200
        assert resp.json()["shipment_mode"] == "SEA"

    def test_locked_quote_rejects_weight_change(self, api_client, staff_user, priced_quote):
        lock_pricing(priced_quote.id, "Sent", staff_user)

        resp = api_client(staff_user).patch(f"/api/quotes/{priced_quote.id}/", {"weight_kg": "60"}, format="json")
        assert resp.status_code == 409
        assert resp.json()["code"] == "PRICING_LOCKED"

        priced_quote.refresh_from_db()
        assert priced_quote.weight_kg == Decimal("40")


class TestLifecycleEndpoints:

    @pytest.fixture
    def priced_quote(self, make_quote, seeded_catalog, customer_user):
        quote = make_quote("AIR", customer=customer_user)
        pricing_service.initialize_pricing(quote.id, "AIR_EXPORT_LOCAL")
        return quote

    def test_send_and_book(self, api_client, staff_user, customer_user, priced_quote):
        resp = api_client(staff_user).post(f"/api/quotes/{priced_quote.id}/send/")
        assert resp.status_code == 200
        assert resp.json()["status"] == "SENT"
        assert resp.json()["is_pricing_locked"] is True

        resp = api_client(customer_user).post(f"/api/quotes/{priced_quote.id}/confirm-booking/")
        assert resp.status_code == 200
        assert resp.json()["status"] == "BOOKED"

    def test_customer_cannot_send(self, api_client, customer_user, priced_quote):
        assert api_client(customer_user).post(f"/api/quotes/{priced_quote.id}/send/").status_code == 403

    def test_breakdown_request_and_decision(self, api_client, staff_user, customer_user, priced_quote):
        resp = api_client(customer_user).post(f"/api/quotes/{priced_quote.id}/breakdown/request/")
        assert resp.status_code == 200
        assert resp.json()["exworks_breakdown_status"] == "REQUESTED"

        resp = api_client(staff_user).post(
            f"/api/quotes/{priced_quote.id}/breakdown/decision/",
            {"approved": True, "hidden_codes": ["AWB"]},
            format="json",
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["exworks_breakdown_status"] == "APPROVED"
        assert body["show_exworks_breakdown"] is True
        assert body["hidden_breakdown_codes"] == ["AWB"]

    def test_staff_cannot_request_breakdown(self, api_client, staff_user, priced_quote):
        resp = api_client(staff_user).post(f"/api/quotes/{priced_quote.id}/breakdown/request/")
        assert resp.status_code == 403

    def test_customer_cannot_decide(self, api_client, customer_user, priced_quote):
        resp = api_client(customer_user).post(
            f"/api/quotes/{priced_quote.id}/breakdown/decision/", {"approved": True}, format="json",
        )
        assert resp.status_code == 403
