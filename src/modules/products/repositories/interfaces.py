"""Product repository interfaces.

Extends ``IRepository`` with the locked read and in-place stock update the
purchase transaction is built on.
"""

from __future__ import annotations

from abc import abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Category, Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Optional[Product]:
        """Retrieve a product by SKU (any soft-delete state)."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Product]:
        """Retrieve a live product with an exclusive row lock.

        Must be called inside ``locking_transaction()`` (or any
        ``transaction.atomic()``); the lock is held until that transaction
        commits or rolls back.  Returns ``None`` if the product does not
        exist.
        """

    @abstractmethod
    def update_stock(self, product: Product, now: datetime) -> Product:
        """Persist ``stock_quantity`` (and ``updated_at``) of a locked product."""


class ICategoryRepository(IRepository["Category"]):
    """Repository contract for categories."""

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Category]:
        """Retrieve a category by exact name (any soft-delete state)."""
