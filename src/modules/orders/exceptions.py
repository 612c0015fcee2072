"""Purchase domain exceptions.

Raised by ``PurchaseService`` when a purchase cannot complete.  Every one
of them is raised only after the transaction has been rolled back, so a
caller never observes partial state.  ``code`` is stable and is what the
API returns; ``retryable`` tells the caller whether the same request may
succeed later without changes.
"""

from __future__ import annotations

from modules.users.exceptions import UserNotFound as UnknownUser


class PurchaseError(Exception):
    code = "purchase_error"
    retryable = False


class ProductNotFound(PurchaseError):
    """No live product matches the identifier."""

    code = "product_not_found"


class ProductUnavailable(PurchaseError):
    """The product exists but is deactivated."""

    code = "product_unavailable"


class InsufficientStock(PurchaseError):
    """Requested quantity exceeds the stock seen under the lock."""

    code = "insufficient_stock"

    def __init__(self, message: str, *, requested: int, available: int) -> None:
        super().__init__(message)
        self.requested = requested
        self.available = available


class InvalidQuantity(PurchaseError):
    """Quantity is not a strictly positive integer."""

    code = "invalid_quantity"


class UserNotFound(PurchaseError, UnknownUser):
    """No live user matches the purchaser identifier."""

    code = "user_not_found"


class InactiveUser(PurchaseError):
    """The purchaser exists but is deactivated."""

    code = "inactive_user"


class LockTimeout(PurchaseError):
    """The product lock was not granted within the configured wait."""

    code = "lock_timeout"
    retryable = True


class PersistenceFailure(PurchaseError):
    """The store failed to write or commit; everything was rolled back."""

    code = "persistence_failure"
    retryable = True


class OrderNotFound(Exception):
    """The requested order does not exist."""
