"""Order repository interface.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for orders (write-once records)."""

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Insert an order inside the caller's transaction.

        ``data`` must include ``user_id``, ``product_id``, ``quantity``,
        ``unit_price``, ``total_price`` and ``created_at``.
        """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with its user and product."""
