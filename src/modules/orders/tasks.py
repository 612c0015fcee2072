"""Asynchronous tasks of the orders module."""

from __future__ import annotations

from typing import Any, Dict

import structlog
from celery import shared_task

logger = structlog.get_logger(__name__)


@shared_task(name="orders.record_purchase_confirmation")
def record_purchase_confirmation(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Record that a committed purchase was confirmed to the purchaser.

    ``payload`` is ``PurchaseCompleted.to_payload()``.  Delivery channels
    (email, webhooks) hang off this task; the purchase itself is already
    committed when it runs.
    """
    logger.info(
        "purchase.confirmed",
        order_id=payload["aggregate_id"],
        user_id=payload["user_id"],
        product_id=payload["product_id"],
        quantity=payload["quantity"],
        total_price=payload["total_price"],
    )
    return {"status": "confirmed", "order_id": payload["aggregate_id"]}
