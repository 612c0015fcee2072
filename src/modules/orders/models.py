"""Order model.

Business rules implemented:
- One order records one purchase: a user buying ``quantity`` units of one
  product.
- ``unit_price`` is a snapshot of the product price at purchase time and
  ``total_price`` is ``unit_price * quantity``; neither ever changes when the
  product price is updated later.
- Orders are written once, in the same transaction as the stock decrement.
- User and Product FKs use PROTECT to preserve purchase history.
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import OrderStatus
from shared.domain.events import DomainEventMixin


class Order(DomainEventMixin, BaseModel):
    user = models.ForeignKey(
        "users.User",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    quantity = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    total_price = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.CONFIRMED,
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "-created_at"], name="orders_user_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="orders_quantity_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"Order {self.id} ({self.status}): {self.quantity} x {self.product_id}"
