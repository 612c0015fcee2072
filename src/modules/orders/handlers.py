"""Event handlers for Orders domain events."""

from __future__ import annotations

import structlog

from modules.orders.events import PurchaseCompleted
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class PurchaseCompletedHandler(IEventHandler[PurchaseCompleted]):
    """Hands a committed purchase to the task queue for confirmation."""

    def handle(self, event: PurchaseCompleted) -> None:
        from modules.orders.tasks import record_purchase_confirmation

        logger.info(
            "purchase.confirmation_enqueued",
            order_id=str(event.aggregate_id),
            event_id=str(event.event_id),
        )
        record_purchase_confirmation.delay(event.to_payload())


purchase_completed_handler = PurchaseCompletedHandler()
