"""Order domain constants."""

from django.db import models


class OrderStatus(models.TextChoices):
    CONFIRMED = "CONFIRMED", "Confirmed"


class PurchaseStage(models.TextChoices):
    """Progress of a single purchase attempt.

    ``STARTED → LOCK_ACQUIRED → VALIDATED → STOCK_UPDATED → ORDER_CREATED →
    COMMITTED`` on success; any earlier stage can end in ``FAILED``, which
    always means nothing was persisted.
    """

    STARTED = "STARTED", "Started"
    LOCK_ACQUIRED = "LOCK_ACQUIRED", "Lock acquired"
    VALIDATED = "VALIDATED", "Validated"
    STOCK_UPDATED = "STOCK_UPDATED", "Stock updated"
    ORDER_CREATED = "ORDER_CREATED", "Order created"
    COMMITTED = "COMMITTED", "Committed"
    FAILED = "FAILED", "Failed"


PRICE_QUANTUM = "0.01"
