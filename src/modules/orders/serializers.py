"""Purchase DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business rules live in ``PurchaseService``; ``quantity`` is only
type-checked here so the service stays the single authority on it.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.models import Order


class PurchaseSerializer(serializers.Serializer):
    """Validates the purchase request payload."""

    product_id = serializers.UUIDField()
    user_id = serializers.UUIDField()
    quantity = serializers.IntegerField()


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders."""

    product_sku = serializers.CharField(source="product.sku", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "user_id",
            "product_id",
            "product_sku",
            "quantity",
            "unit_price",
            "total_price",
            "status",
            "created_at",
        ]
        read_only_fields = fields
