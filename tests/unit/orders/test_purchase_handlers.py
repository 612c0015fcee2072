"""Unit tests for the purchase event handler and confirmation task."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import patch
from uuid import uuid4

import pytest

from modules.orders.events import PurchaseCompleted
from modules.orders.handlers import PurchaseCompletedHandler, purchase_completed_handler
from modules.orders.tasks import record_purchase_confirmation
from shared.infrastructure.bus import event_bus

pytestmark = pytest.mark.unit


def _event() -> PurchaseCompleted:
    return PurchaseCompleted(
        aggregate_id=uuid4(),
        product_id=uuid4(),
        user_id=uuid4(),
        quantity=3,
        total_price=Decimal("30.00"),
    )


def test_handler_is_subscribed_at_startup():
    assert purchase_completed_handler in event_bus.handlers_for(PurchaseCompleted)


def test_handler_enqueues_json_payload():
    event = _event()

    with patch("modules.orders.tasks.record_purchase_confirmation") as task:
        PurchaseCompletedHandler().handle(event)

    task.delay.assert_called_once()
    payload = task.delay.call_args.args[0]
    assert payload["event_name"] == "PurchaseCompleted"
    assert payload["aggregate_id"] == str(event.aggregate_id)
    assert payload["total_price"] == "30.00"
    assert payload["quantity"] == 3


def test_confirmation_task_returns_status():
    payload = _event().to_payload()

    result = record_purchase_confirmation.delay(payload)

    assert result.successful()
    assert result.result == {
        "status": "confirmed",
        "order_id": payload["aggregate_id"],
    }
