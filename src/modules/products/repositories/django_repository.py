"""Django ORM implementation of the Product and Category repositories.

Error handling follows the Null Object pattern: methods return ``None``
instead of raising for missing rows and malformed IDs; the Service Layer
decides how to translate a missing entity into a domain error.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import structlog
from django.core.exceptions import ValidationError

from modules.products.models import Category, Product
from modules.products.repositories.interfaces import (
    ICategoryRepository,
    IProductRepository,
)

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a live product by primary key.

        Returns ``None`` for non-existent, soft-deleted or invalid IDs.
        """
        try:
            return Product.objects.alive().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_sku(self, sku: str) -> Optional[Product]:
        return Product.objects.filter(sku=sku.strip().upper()).first()

    def get_for_update(self, id: str) -> Optional[Product]:
        """Retrieve a product with a row-level lock (SELECT FOR UPDATE)."""
        try:
            return Product.objects.alive().select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def update_stock(self, product: Product, now: datetime) -> Product:
        product.updated_at = now
        product.save(update_fields=["stock_quantity", "updated_at"])
        logger.info(
            "product.stock_updated",
            product_id=str(product.id),
            stock_quantity=product.stock_quantity,
        )
        return product

    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.save()
        logger.info("product.saved", product_id=str(entity.id), sku=entity.sku)
        return entity


class CategoryDjangoRepository(ICategoryRepository):
    """Concrete Category repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Category]:
        try:
            return Category.objects.alive().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_name(self, name: str) -> Optional[Category]:
        return Category.objects.filter(name=name.strip()).first()

    def save(self, entity: Category) -> Category:
        entity.save()
        logger.info("category.saved", category_id=str(entity.id), name=entity.name)
        return entity
