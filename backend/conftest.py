from decimal import Decimal
from itertools import count

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from accounts.models import UserRole
from pricing.services.catalog import seed_templates
from quotes.models import Quotation

_refs = count(1)


@pytest.fixture
def create_user(db):
    def _create(username, role=UserRole.INTERNAL_STAFF, password="pass"):
        return get_user_model().objects.create_user(
            username=username, email=f"{username}@example.com", password=password, role=role,
        )
    return _create


@pytest.fixture
def admin_user(create_user):
    return create_user("admin", role=UserRole.ADMIN)


@pytest.fixture
def staff_user(create_user):
    return create_user("ops", role=UserRole.INTERNAL_STAFF)


@pytest.fixture
def customer_user(create_user):
    return create_user("acme", role=UserRole.CUSTOMER)


@pytest.fixture
def api_client():
    """Returns a client; call it with a user to authenticate."""
    def _client(user=None):
        client = APIClient()
        if user is not None:
            client.force_authenticate(user=user)
        return client
    return _client


@pytest.fixture
def seeded_catalog(db):
    seed_templates()


@pytest.fixture
def make_quote(db):
    def _make(shipment_mode="AIR", customer=None, **fields):
        fields.setdefault("weight_kg", Decimal("40"))
        return Quotation.objects.create(
            reference=f"Q-{next(_refs):05d}",
            shipment_mode=shipment_mode,
            customer=customer,
            **fields,
        )
    return _make
