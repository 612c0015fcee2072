"""Integration tests for POST /api/v1/purchases/ and GET /api/v1/orders/{id}/."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import patch
from uuid import uuid4

import pytest
from django.db import OperationalError

from modules.orders.models import Order
from modules.products.repositories.django_repository import ProductDjangoRepository

pytestmark = pytest.mark.integration

URL = "/api/v1/purchases/"


def _payload(product, user, quantity=1):
    return {"product_id": str(product.id), "user_id": str(user.id), "quantity": quantity}


class TestPurchaseEndpoint:
    def test_requires_authentication(self, api_client, user, product):
        response = api_client.post(URL, _payload(product, user), format="json")
        assert response.status_code == 401
        assert response.json()["type"] == "not_authenticated"

    def test_purchase_returns_201(self, auth_client, user, product):
        response = auth_client.post(URL, _payload(product, user, 3), format="json")

        assert response.status_code == 201
        data = response.json()
        assert data["quantity"] == 3
        assert Decimal(data["unit_price"]) == Decimal("10.00")
        assert Decimal(data["total_price"]) == Decimal("30.00")
        assert data["status"] == "CONFIRMED"
        assert data["product_sku"] == product.sku
        product.refresh_from_db()
        assert product.stock_quantity == 2

    def test_insufficient_stock_returns_409(self, auth_client, user, product):
        response = auth_client.post(URL, _payload(product, user, 6), format="json")

        assert response.status_code == 409
        assert response.json() == {
            "type": "insufficient_stock",
            "errors": [
                {
                    "code": "insufficient_stock",
                    "detail": f"Product {product.sku}: requested 6, available 5.",
                }
            ],
        }

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_invalid_quantity_returns_400(self, auth_client, user, product, quantity):
        response = auth_client.post(
            URL, _payload(product, user, quantity), format="json"
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["code"] == "invalid_quantity"

    def test_malformed_payload_returns_400(self, auth_client):
        response = auth_client.post(
            URL, {"product_id": "x", "quantity": "many"}, format="json"
        )

        assert response.status_code == 400
        data = response.json()
        assert data["type"] == "invalid"
        fields = {error["field"] for error in data["errors"]}
        assert fields == {"product_id", "user_id", "quantity"}

    def test_unknown_product_returns_404(self, auth_client, user, product):
        payload = _payload(product, user)
        payload["product_id"] = str(uuid4())
        response = auth_client.post(URL, payload, format="json")
        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "product_not_found"

    def test_unknown_user_returns_404(self, auth_client, user, product):
        payload = _payload(product, user)
        payload["user_id"] = str(uuid4())
        response = auth_client.post(URL, payload, format="json")
        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "user_not_found"

    def test_inactive_user_returns_400(self, auth_client, make_user, product):
        inactive = make_user(is_active=False)
        response = auth_client.post(URL, _payload(product, inactive), format="json")
        assert response.status_code == 400
        assert response.json()["errors"][0]["code"] == "inactive_user"

    def test_inactive_product_returns_409(self, auth_client, user, make_product):
        product = make_product(is_active=False)
        response = auth_client.post(URL, _payload(product, user), format="json")
        assert response.status_code == 409
        assert response.json()["errors"][0]["code"] == "product_unavailable"

    def test_lock_timeout_returns_503_with_retry_after(
        self, auth_client, user, product, settings
    ):
        settings.PURCHASE_LOCK_TIMEOUT = 2.0
        with patch.object(
            ProductDjangoRepository,
            "get_for_update",
            side_effect=OperationalError("database is locked"),
        ):
            response = auth_client.post(URL, _payload(product, user), format="json")

        assert response.status_code == 503
        assert response["Retry-After"] == "2"
        assert response.json()["errors"][0]["code"] == "lock_timeout"
        assert not Order.objects.exists()

    def test_confirmation_is_enqueued_after_commit(
        self, auth_client, user, product, django_capture_on_commit_callbacks
    ):
        with patch("modules.orders.tasks.record_purchase_confirmation") as task:
            with django_capture_on_commit_callbacks(execute=True):
                response = auth_client.post(
                    URL, _payload(product, user, 2), format="json"
                )

        assert response.status_code == 201
        task.delay.assert_called_once()
        payload = task.delay.call_args.args[0]
        assert payload["aggregate_id"] == response.json()["id"]
        assert payload["quantity"] == 2

    def test_correlation_id_is_echoed(self, auth_client, user, product):
        response = auth_client.post(
            URL,
            _payload(product, user),
            format="json",
            HTTP_X_REQUEST_ID="purchase-cid-1",
        )
        assert response["X-Request-ID"] == "purchase-cid-1"


class TestOrderDetailEndpoint:
    def test_get_order(self, auth_client, user, product):
        created = auth_client.post(URL, _payload(product, user, 2), format="json")
        order_id = created.json()["id"]

        response = auth_client.get(f"/api/v1/orders/{order_id}/")

        assert response.status_code == 200
        assert response.json()["id"] == order_id
        assert response.json()["user_id"] == str(user.id)

    def test_unknown_order_returns_404(self, auth_client):
        response = auth_client.get(f"/api/v1/orders/{uuid4()}/")
        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "order_not_found"
