"""Domain events for the Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from shared.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class PurchaseCompleted(DomainEvent):
    """Raised once a purchase has been committed."""

    product_id: UUID
    user_id: UUID
    quantity: int
    total_price: Decimal
