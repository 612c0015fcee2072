"""Django ORM implementation of the Order repository.

``create`` runs inside the purchase transaction opened by the service; it
never opens or commits a transaction of its own.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError

from modules.orders.constants import OrderStatus
from modules.orders.models import Order
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    def create(self, data: Dict[str, Any]) -> Order:
        order = Order(
            user_id=data["user_id"],
            product_id=data["product_id"],
            quantity=data["quantity"],
            unit_price=data["unit_price"],
            total_price=data["total_price"],
            status=data.get("status", OrderStatus.CONFIRMED),
            created_at=data["created_at"],
            updated_at=data["created_at"],
        )
        order.save(force_insert=True)
        logger.info(
            "order.inserted",
            order_id=str(order.id),
            product_id=str(order.product_id),
            quantity=order.quantity,
        )
        return order

    def save(self, entity: Order) -> Order:
        entity.save()
        return entity

    def get_by_id(self, id: str) -> Optional[Order]:
        """Returns ``None`` for non-existent or invalid IDs."""
        try:
            return (
                Order.objects.select_related("user", "product").filter(id=id).first()
            )
        except (ValueError, ValidationError):
            return None

