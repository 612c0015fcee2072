from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from modules.products.models import Product
from modules.users.models import User


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def auth_client(api_client):
    """APIClient authenticated as a Django staff account."""
    account = get_user_model().objects.create_user(
        username="api-operator", password="operator-pass-123"
    )
    api_client.force_authenticate(user=account)
    return api_client


@pytest.fixture()
def make_user():
    """Factory for store users; ``email`` defaults to a unique address."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        fields = {
            "email": f"buyer{counter['n']}@example.com",
            "password_hash": "md5$salt$hash",
            "first_name": "Jane",
            "last_name": "Buyer",
            "is_active": True,
        }
        fields.update(overrides)
        return User.objects.create(**fields)

    return _make


@pytest.fixture()
def make_product():
    """Factory for products; defaults to stock 5 at 10.00."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        fields = {
            "sku": f"SKU-{counter['n']:04d}",
            "name": "Mechanical Keyboard",
            "description": "Tenkeyless, brown switches",
            "price": Decimal("10.00"),
            "stock_quantity": 5,
            "is_active": True,
        }
        fields.update(overrides)
        return Product.objects.create(**fields)

    return _make


@pytest.fixture()
def user(make_user):
    return make_user()


@pytest.fixture()
def product(make_product):
    return make_product()
