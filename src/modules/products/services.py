"""Product service layer (Use Cases).

Orchestrates catalog business logic, delegating persistence to the
injected repositories.

Business rules enforced here:
- SKU must be unique; category names must be unique.
- Field rules from ``validators.py`` pass before anything is written.
- Restocking takes the same row lock as a purchase, so a restock and a
  purchase of one product are serialized.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog
from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone

from modules.core.db import is_lock_timeout, locking_transaction
from modules.core.exceptions import EntityValidationError
from modules.orders.exceptions import (
    InvalidQuantity,
    LockTimeout,
    PersistenceFailure,
    ProductNotFound,
)
from modules.products.exceptions import (
    CategoryAlreadyExists,
    CategoryNotFound,
    ProductAlreadyExists,
)
from modules.products.models import Category, Product
from modules.products.validators import validate_category, validate_product

if TYPE_CHECKING:
    from modules.products.dtos import CreateCategoryDTO, CreateProductDTO
    from modules.products.repositories.interfaces import (
        ICategoryRepository,
        IProductRepository,
    )

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product and Category use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        repository: IProductRepository,
        category_repository: ICategoryRepository,
        lock_timeout: Optional[float] = None,
    ) -> None:
        self._repo = repository
        self._category_repo = category_repository
        self._lock_timeout = (
            lock_timeout if lock_timeout is not None else settings.PURCHASE_LOCK_TIMEOUT
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_category(self, dto: CreateCategoryDTO) -> Category:
        """Create a category, optionally nested under a parent.

        Raises:
            EntityValidationError: a field rule is broken.
            CategoryAlreadyExists: the name is taken.
            CategoryNotFound: the parent category does not exist.
        """
        parent = None
        if dto.parent_category_id is not None:
            parent = self._category_repo.get_by_id(str(dto.parent_category_id))
            if parent is None:
                raise CategoryNotFound(f"Category {dto.parent_category_id} not found.")

        category = Category(
            name=dto.name.strip(),
            description=dto.description,
            parent_category=parent,
        )
        violations = validate_category(category)
        if violations:
            raise EntityValidationError(violations)

        if self._category_repo.get_by_name(category.name):
            logger.warning("category.duplicate_name", name=category.name)
            raise CategoryAlreadyExists(f"Category '{category.name}' already exists.")

        category.touch()
        with transaction.atomic():
            category = self._category_repo.save(category)
        return category

    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a product after the validation pass and uniqueness rules.

        Raises:
            EntityValidationError: a field rule is broken.
            ProductAlreadyExists: the SKU is already taken.
            CategoryNotFound: the category does not exist.
        """
        log = logger.bind(sku=dto.sku)

        category = None
        if dto.category_id is not None:
            category = self._category_repo.get_by_id(str(dto.category_id))
            if category is None:
                raise CategoryNotFound(f"Category {dto.category_id} not found.")

        product = Product(
            sku=dto.sku,
            name=dto.name,
            description=dto.description,
            price=dto.price,
            stock_quantity=dto.stock_quantity,
            category=category,
        )
        violations = validate_product(product)
        if violations:
            log.warning("product.validation_failed", fields=[v.field for v in violations])
            raise EntityValidationError(violations)

        if self._repo.get_by_sku(dto.sku):
            log.warning("product.duplicate_sku")
            raise ProductAlreadyExists(f"SKU '{dto.sku}' already registered.")

        product.touch()
        with transaction.atomic():
            product = self._repo.save(product)
        log.info("product.registered", product_id=str(product.id))
        return product

    def restock(self, product_id: str, quantity: int) -> Product:
        """Add *quantity* units to a product's stock under the row lock.

        Raises:
            InvalidQuantity: quantity is not a positive integer.
            ProductNotFound: the product does not exist.
            LockTimeout: the product lock was not granted in time.
            PersistenceFailure: the store failed to write or commit.
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidQuantity(
                f"Restock quantity must be a positive integer, got {quantity!r}."
            )

        try:
            with locking_transaction(self._lock_timeout):
                product = self._repo.get_for_update(str(product_id))
                if product is None:
                    raise ProductNotFound(f"Product {product_id} not found.")
                product.stock_quantity += quantity
                self._repo.update_stock(product, now=timezone.now())
        except DatabaseError as exc:
            if is_lock_timeout(exc):
                logger.warning(
                    "product.restock_lock_timeout",
                    product_id=str(product_id),
                    lock_timeout=self._lock_timeout,
                )
                raise LockTimeout(
                    f"Product {product_id} is busy; lock not granted within "
                    f"{self._lock_timeout}s."
                ) from exc
            logger.error(
                "product.restock_failed", product_id=str(product_id), error=str(exc)
            )
            raise PersistenceFailure("Restock could not be persisted; nothing was changed.") from exc

        logger.info(
            "product.restocked",
            product_id=str(product.id),
            quantity=quantity,
            stock_quantity=product.stock_quantity,
        )
        return product

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_product(self, product_id: str) -> Product:
        """Raises ``ProductNotFound`` if the product does not exist."""
        product = self._repo.get_by_id(str(product_id))
        if not product:
            raise ProductNotFound(f"Product {product_id} not found.")
        return product
