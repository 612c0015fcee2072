"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  DTOs are
immutable (``frozen=True``).

- ``PurchaseDTO``: input for a purchase request.
- ``OrderOutputDTO``: output for a created order.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from modules.orders.models import Order


class PurchaseDTO(BaseModel):
    """Immutable purchase request.

    ``quantity`` is deliberately not range-checked here: the service rejects
    non-positive values with ``InvalidQuantity``.
    """

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    user_id: UUID
    quantity: int


class OrderOutputDTO(BaseModel):
    """Immutable DTO for order responses and event consumers."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    user_id: UUID
    product_id: UUID
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    status: str
    created_at: datetime

    @classmethod
    def from_entity(cls, order: Order) -> OrderOutputDTO:
        return cls(
            id=order.id,
            user_id=order.user_id,
            product_id=order.product_id,
            quantity=order.quantity,
            unit_price=order.unit_price,
            total_price=order.total_price,
            status=order.status,
            created_at=order.created_at,
        )
