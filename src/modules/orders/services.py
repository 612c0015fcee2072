"""Purchase service layer (Use Case).

``PurchaseService.purchase`` is the one operation in the system that
mutates shared inventory.  It runs as a single database transaction:

1. Reject a non-positive quantity before touching the database.
2. Check the purchaser exists and is active.
3. Lock the product row (SELECT FOR UPDATE) within ``lock_timeout``.
4. Validate the product is active and has enough stock.
5. Decrement stock and insert the order, both stamped with one ``now``.
6. Commit, then publish ``PurchaseCompleted``.

Concurrent purchases of one product queue on the row lock and each sees
the stock left by the previous one, so stock never goes negative and no
order is created against stock that is not there.  Every failure is raised
after ``transaction.atomic`` has rolled back.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional
from uuid import UUID

import structlog
from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone

from modules.core.db import is_lock_timeout, locking_transaction
from modules.orders.constants import PRICE_QUANTUM, OrderStatus, PurchaseStage
from modules.orders.events import PurchaseCompleted
from modules.orders.exceptions import (
    InactiveUser,
    InsufficientStock,
    InvalidQuantity,
    LockTimeout,
    OrderNotFound,
    PersistenceFailure,
    ProductNotFound,
    ProductUnavailable,
    PurchaseError,
    UserNotFound,
)
from shared.infrastructure.bus import event_bus

if TYPE_CHECKING:
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IProductRepository
    from modules.users.repositories.interfaces import IUserRepository
    from shared.domain.bus import IEventBus

logger = structlog.get_logger(__name__)


class _Attempt:
    """Tracks the stage a purchase attempt has reached, for logging."""

    def __init__(self, log: Any) -> None:
        self.stage = PurchaseStage.STARTED
        self._log = log

    def advance(self, stage: PurchaseStage) -> None:
        self.stage = stage
        self._log.debug("purchase.stage", stage=stage.value)


class PurchaseService:
    """Application service for the purchase use-case.

    Receives repositories via constructor injection (DIP).  ``lock_timeout``
    defaults to ``settings.PURCHASE_LOCK_TIMEOUT``.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
        user_repository: IUserRepository,
        lock_timeout: Optional[float] = None,
        bus: Optional[IEventBus] = None,
    ) -> None:
        self._order_repo = order_repository
        self._product_repo = product_repository
        self._user_repo = user_repository
        self._lock_timeout = (
            lock_timeout if lock_timeout is not None else settings.PURCHASE_LOCK_TIMEOUT
        )
        self._bus = bus or event_bus

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def purchase(self, product_id: UUID | str, user_id: UUID | str, quantity: int) -> Order:
        """Buy *quantity* units of a product for a user.

        Returns the created ``Order`` (status ``CONFIRMED``).

        Raises:
            InvalidQuantity: quantity is not a positive integer (no lock taken).
            UserNotFound: the purchaser does not exist.
            InactiveUser: the purchaser is deactivated.
            ProductNotFound: the product does not exist.
            ProductUnavailable: the product is deactivated.
            InsufficientStock: quantity exceeds the stock under the lock.
            LockTimeout: the product lock was not granted in time.
            PersistenceFailure: the store failed to write or commit.
        """
        log = logger.bind(
            product_id=str(product_id), user_id=str(user_id), quantity=quantity
        )
        attempt = _Attempt(log)

        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            log.warning("purchase.invalid_quantity", stage=PurchaseStage.FAILED.value)
            raise InvalidQuantity(f"Quantity must be a positive integer, got {quantity!r}.")

        user = self._user_repo.get_by_id(str(user_id))
        if user is None:
            log.warning("purchase.user_not_found", stage=PurchaseStage.FAILED.value)
            raise UserNotFound(f"User {user_id} not found.")
        if not user.is_active:
            log.warning("purchase.inactive_user", stage=PurchaseStage.FAILED.value)
            raise InactiveUser(f"User {user_id} is inactive.")

        try:
            with locking_transaction(self._lock_timeout):
                order = self._reserve_and_record(product_id, user.id, quantity, attempt)
                transaction.on_commit(lambda: self._publish_events(order), robust=True)
        except PurchaseError as exc:
            log.warning(
                f"purchase.{exc.code}",
                reached_stage=attempt.stage.value,
                stage=PurchaseStage.FAILED.value,
            )
            raise
        except DatabaseError as exc:
            if is_lock_timeout(exc):
                log.warning(
                    "purchase.lock_timeout",
                    reached_stage=attempt.stage.value,
                    stage=PurchaseStage.FAILED.value,
                    lock_timeout=self._lock_timeout,
                )
                raise LockTimeout(
                    f"Product {product_id} is busy; lock not granted within "
                    f"{self._lock_timeout}s."
                ) from exc
            log.error(
                "purchase.persistence_failure",
                reached_stage=attempt.stage.value,
                stage=PurchaseStage.FAILED.value,
                error=str(exc),
            )
            raise PersistenceFailure("Purchase could not be persisted; nothing was changed.") from exc

        attempt.advance(PurchaseStage.COMMITTED)
        log.info(
            "purchase.committed",
            order_id=str(order.id),
            total_price=str(order.total_price),
        )
        return order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Raises ``OrderNotFound`` if the order does not exist."""
        order = self._order_repo.get_by_id(str(order_id))
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _reserve_and_record(
        self,
        product_id: UUID | str,
        user_id: UUID,
        quantity: int,
        attempt: _Attempt,
    ) -> Order:
        """Lock, validate, decrement and insert; runs inside the transaction."""
        product = self._product_repo.get_for_update(str(product_id))
        if product is None:
            raise ProductNotFound(f"Product {product_id} not found.")
        attempt.advance(PurchaseStage.LOCK_ACQUIRED)

        if not product.is_active:
            raise ProductUnavailable(f"Product {product.sku} is not available.")
        if quantity > product.stock_quantity:
            raise InsufficientStock(
                f"Product {product.sku}: requested {quantity}, "
                f"available {product.stock_quantity}.",
                requested=quantity,
                available=product.stock_quantity,
            )
        attempt.advance(PurchaseStage.VALIDATED)

        unit_price = Decimal(product.price)
        total_price = (unit_price * quantity).quantize(Decimal(PRICE_QUANTUM))
        now = timezone.now()

        product.stock_quantity -= quantity
        self._product_repo.update_stock(product, now=now)
        attempt.advance(PurchaseStage.STOCK_UPDATED)

        order = self._order_repo.create(
            {
                "user_id": user_id,
                "product_id": product.id,
                "quantity": quantity,
                "unit_price": unit_price,
                "total_price": total_price,
                "status": OrderStatus.CONFIRMED,
                "created_at": now,
            }
        )
        order.add_domain_event(
            PurchaseCompleted(
                aggregate_id=order.id,
                product_id=product.id,
                user_id=user_id,
                quantity=quantity,
                total_price=total_price,
            )
        )
        attempt.advance(PurchaseStage.ORDER_CREATED)
        return order

    def _publish_events(self, order: Order) -> None:
        for event in order.domain_events:
            self._bus.publish(event)
        order.clear_domain_events()
