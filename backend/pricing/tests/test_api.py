"""
Pricing endpoints: status codes, error payloads and role checks.
"""
from decimal import Decimal

import pytest

from ..models import QuotePricing, QuotePricingCharge

pytestmark = pytest.mark.django_db


def _url(quote, suffix=""):
    return f"/api/quotes/{quote.id}/pricing/{suffix}"


def _charge_id(quote, code):
    return QuotePricingCharge.objects.get(pricing__quote=quote, code=code).id


def _price_labelling(client, quote):
    # Labelling starts at zero like every charge; any edit applies the piece rule
    resp = client.patch(_url(quote, f"charges/{_charge_id(quote, 'LABELLING')}/"), {}, format="json")
    assert resp.status_code == 200
    assert resp.json()["total_sell"] == 36


@pytest.fixture
def staff(api_client, staff_user):
    return api_client(staff_user)


@pytest.fixture
def air_quote(make_quote, seeded_catalog, customer_user):
    return make_quote(
        "AIR", customer=customer_user,
        weight_kg=Decimal("40"), chargeable_weight_kg=Decimal("55"), pieces=10,
    )


@pytest.fixture
def priced_quote(staff, air_quote):
    resp = staff.post(_url(air_quote, "init/"), {"template_code": "AIR_EXPORT_LOCAL"}, format="json")
    assert resp.status_code == 201
    return air_quote


class TestCatalogEndpoints:

    def test_templates_for_quote_mode(self, staff, air_quote):
        resp = staff.get(_url(air_quote, "templates/"))
        assert resp.status_code == 200
        body = resp.json()
        assert body["mode"] == "AIR"
        assert {t["mode"] for t in body["templates"]} == {"AIR"}

    def test_addons(self, staff, seeded_catalog):
        resp = staff.get("/api/pricing/templates/AIR_EXPORT_LOCAL/addons/")
        assert resp.status_code == 200
        addons = resp.json()["addons"]
        assert "SCREENING" in [a["code"] for a in addons]
        assert all(a["is_optional"] for a in addons)

    def test_customers_cannot_browse_templates(self, api_client, customer_user, air_quote):
        resp = api_client(customer_user).get(_url(air_quote, "templates/"))
        assert resp.status_code == 403

    def test_anonymous_rejected(self, api_client, air_quote):
        resp = api_client().get(_url(air_quote, "templates/"))
        assert resp.status_code in (401, 403)


class TestPricingEndpoints:

    def test_init_returns_pricing(self, staff, air_quote):
        resp = staff.post(
            _url(air_quote, "init/"), {"template_code": "AIR_EXPORT_LOCAL", "currency": "usd"}, format="json",
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["template_code"] == "AIR_EXPORT_LOCAL"
        assert body["currency"] == "USD"
        assert body["blocks"] == []
        assert "AIRFREIGHT" in [c["code"] for c in body["charges"]]

    def test_init_mode_mismatch(self, staff, air_quote):
        resp = staff.post(
            _url(air_quote, "init/"),
            {"template_code": "SEA_EXPORT_LOCAL", "container_type": "C20", "container_qty": 1},
            format="json",
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == "VALIDATION_ERROR"

    def test_detail_before_init(self, staff, air_quote):
        resp = staff.get(_url(air_quote))
        assert resp.status_code == 404

    def test_update_charge(self, staff, priced_quote):
        resp = staff.patch(
            _url(priced_quote, f"charges/{_charge_id(priced_quote, 'AIRFREIGHT')}/"),
            {"buy_rate": "3", "sell_rate": "5"},
            format="json",
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["qty"] == 55
        assert body["total_sell"] == 275
        assert body["margin"] == 110

    def test_update_rejects_non_numbers(self, staff, priced_quote):
        resp = staff.patch(
            _url(priced_quote, f"charges/{_charge_id(priced_quote, 'AWB')}/"), {"sell_rate": "abc"}, format="json",
        )
        assert resp.status_code == 400

    def test_add_mandatory_charge(self, staff, priced_quote):
        resp = staff.post(_url(priced_quote, "charges/"), {"line_code": "AIRFREIGHT"}, format="json")
        assert resp.status_code == 400
        assert resp.json() == {"detail": "This charge is mandatory and already included", "code": "VALIDATION_ERROR"}

    def test_add_and_delete_optional_charge(self, staff, priced_quote):
        resp = staff.post(_url(priced_quote, "charges/"), {"line_code": "SCREENING"}, format="json")
        assert resp.status_code == 201
        charge_id = resp.json()["id"]

        resp = staff.delete(_url(priced_quote, f"charges/{charge_id}/"))
        assert resp.status_code == 204
        assert not QuotePricingCharge.objects.filter(pk=charge_id).exists()

    def test_delete_mandatory_charge(self, staff, priced_quote):
        resp = staff.delete(_url(priced_quote, f"charges/{_charge_id(priced_quote, 'AWB')}/"))
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Mandatory charges cannot be removed"

    def test_sea_addon_block(self, staff, make_quote, seeded_catalog):
        quote = make_quote("SEA")
        resp = staff.post(
            _url(quote, "init/"),
            {"template_code": "SEA_IMPORT_LOCAL", "container_type": "C20", "container_qty": 1},
            format="json",
        )
        assert resp.status_code == 201

        resp = staff.post(_url(quote, "sea-addon/"), {"container_type": "C40", "container_qty": 2}, format="json")
        assert resp.status_code == 201
        body = resp.json()
        assert body["is_addon"] is True
        assert body["order"] == 20
        assert "DELIVERY_ORDER" not in [c["code"] for c in body["charges"]]

        resp = staff.post(_url(quote, "sea-addon/"), {"container_type": "C40", "container_qty": 1}, format="json")
        assert resp.status_code == 400

        resp = staff.get(_url(quote, "blocks/"))
        assert [b["container_type"] for b in resp.json()] == ["C20", "C40"]

    def test_transfer_ownership(self, staff, priced_quote):
        resp = staff.post(_url(priced_quote, "add-transfer-ownership/"), {}, format="json")
        assert resp.status_code == 201
        groups = {c["group"] for c in resp.json()["charges"]}
        assert "TRANSFER_OWNERSHIP" in groups

        resp = staff.post(_url(priced_quote, "add-transfer-ownership/"), {}, format="json")
        assert resp.status_code == 409
        assert resp.json()["code"] == "ALREADY_EXISTS"

    def test_recalculate(self, staff, priced_quote):
        staff.patch(
            _url(priced_quote, f"charges/{_charge_id(priced_quote, 'THC')}/"), {"sell_rate": "1"}, format="json",
        )
        priced_quote.weight_kg = Decimal("90")
        priced_quote.save()

        resp = staff.post(_url(priced_quote, "recalculate/"))
        assert resp.status_code == 200
        thc = next(c for c in resp.json()["charges"] if c["code"] == "THC")
        assert thc["total_sell"] == 90


class TestLocking:

    def test_locked_pricing_rejects_changes(self, staff, priced_quote):
        resp = staff.post(_url(priced_quote, "lock/"), {"reason": "Sent"}, format="json")
        assert resp.status_code == 200
        locked_at = resp.json()["pricing_locked_at"]
        assert locked_at

        resp = staff.post(_url(priced_quote, "charges/"), {"line_code": "SCREENING"}, format="json")
        assert resp.status_code == 409
        body = resp.json()
        assert body["code"] == "PRICING_LOCKED"
        assert body["lockedAt"]

        resp = staff.post(_url(priced_quote, "init/"), {"template_code": "AIR_EXPORT_FREEZONE"}, format="json")
        assert resp.status_code == 409
        assert QuotePricing.objects.get(quote=priced_quote).template_code == "AIR_EXPORT_LOCAL"

    def test_lock_needs_reason(self, staff, priced_quote):
        resp = staff.post(_url(priced_quote, "lock/"), {"reason": ""}, format="json")
        assert resp.status_code == 400

    def test_only_admin_unlocks(self, staff, api_client, admin_user, priced_quote):
        staff.post(_url(priced_quote, "lock/"), {"reason": "Sent"}, format="json")

        resp = staff.post(_url(priced_quote, "unlock/"))
        assert resp.status_code == 403

        resp = api_client(admin_user).post(_url(priced_quote, "unlock/"))
        assert resp.status_code == 200
        assert resp.json()["pricing_locked_at"] is None

    def test_admin_edits_locked_pricing(self, staff, api_client, admin_user, priced_quote):
        staff.post(_url(priced_quote, "lock/"), {"reason": "Sent"}, format="json")
        resp = api_client(admin_user).post(_url(priced_quote, "charges/"), {"line_code": "SCREENING"}, format="json")
        assert resp.status_code == 201

    def test_snapshot_while_locked(self, staff, priced_quote):
        staff.post(_url(priced_quote, "lock/"), {"reason": "Sent"}, format="json")
        resp = staff.post(_url(priced_quote, "snapshot/"))
        assert resp.status_code == 201
        body = resp.json()
        assert body["pricing_version"] == 1
        assert body["status"] == "PRICED"
        assert body["pricing_snapshot"]["templateCode"] == "AIR_EXPORT_LOCAL"

    def test_snapshot_without_pricing(self, staff, air_quote):
        resp = staff.post(_url(air_quote, "snapshot/"))
        assert resp.status_code == 404


class TestReadViews:

    def test_ops_requires_pricing(self, staff, air_quote):
        assert staff.get(_url(air_quote, "ops/")).status_code == 404

    def test_ops_totals(self, staff, priced_quote):
        _price_labelling(staff, priced_quote)
        staff.patch(
            _url(priced_quote, f"charges/{_charge_id(priced_quote, 'AIRFREIGHT')}/"),
            {"buy_rate": "3", "sell_rate": "5"},
            format="json",
        )
        resp = staff.get(_url(priced_quote, "ops/"))
        assert resp.status_code == 200
        totals = resp.json()["totals"]
        assert totals["airfreight"] == 275
        assert totals["grandTotal"] == 311

    def test_ops_is_staff_only(self, api_client, customer_user, priced_quote):
        assert api_client(customer_user).get(_url(priced_quote, "ops/")).status_code == 403

    def test_customer_view_hides_breakdown_until_approved(self, api_client, customer_user, staff, priced_quote):
        _price_labelling(staff, priced_quote)
        staff.patch(
            _url(priced_quote, f"charges/{_charge_id(priced_quote, 'AWB')}/"), {"sell_rate": "50"}, format="json",
        )
        customer = api_client(customer_user)

        body = customer.get(_url(priced_quote, "customer-view/")).json()
        assert body["exworks_breakdown_status"] == "NONE"
        assert body["pricing"]["exworksBreakdownIncluded"] is False
        assert "exworksLines" not in body["pricing"]
        assert body["pricing"]["exworks"]["amount"] == 86

        priced_quote.exworks_breakdown_status = "APPROVED"
        priced_quote.show_exworks_breakdown = True
        priced_quote.save()

        body = customer.get(_url(priced_quote, "customer-view/")).json()
        assert body["pricing"]["exworksBreakdownIncluded"] is True
        assert [l["code"] for l in body["pricing"]["exworksLines"]] == ["AWB", "LABELLING"]

    def test_staff_preview(self, staff, priced_quote):
        body = staff.get(_url(priced_quote, "customer-view/")).json()
        assert body["pricing"]["exworksBreakdownIncluded"] is False

        body = staff.get(_url(priced_quote, "customer-view/") + "?preview=1").json()
        assert body["pricing"]["exworksBreakdownIncluded"] is True

    def test_customer_preview_flag_ignored(self, api_client, customer_user, priced_quote):
        body = api_client(customer_user).get(_url(priced_quote, "customer-view/") + "?preview=1").json()
        assert body["pricing"]["exworksBreakdownIncluded"] is False

    def test_other_customers_quote_is_hidden(self, api_client, create_user, priced_quote):
        stranger = create_user("globex", role="CUSTOMER")
        assert api_client(stranger).get(_url(priced_quote, "customer-view/")).status_code == 404

    def test_customer_view_without_pricing(self, api_client, customer_user, air_quote):
        body = api_client(customer_user).get(_url(air_quote, "customer-view/")).json()
        assert body["pricing"]["grandTotal"]["amount"] == 0
