"""Process-local event bus.

Subscriptions are made once at start-up (``AppConfig.ready``); publishing
walks the handlers of the event's exact class in subscription order.  A
handler error is logged with the event identity and re-raised to the
publisher.
"""

from __future__ import annotations

from typing import Dict, List, Tuple, Type

import structlog

from shared.domain.bus import IEventBus, IEventHandler
from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


class InMemoryEventBus(IEventBus):
    def __init__(self) -> None:
        self._subscriptions: Dict[Type[DomainEvent], List[IEventHandler]] = {}

    def subscribe(self, event_class: Type[DomainEvent], handler: IEventHandler) -> None:
        handlers = self._subscriptions.setdefault(event_class, [])
        if handler in handlers:
            return
        handlers.append(handler)
        logger.debug(
            "event_bus.subscribed",
            event_name=event_class.__name__,
            handler=type(handler).__name__,
        )

    def handlers_for(self, event_class: Type[DomainEvent]) -> Tuple[IEventHandler, ...]:
        return tuple(self._subscriptions.get(event_class, ()))

    def publish(self, event: DomainEvent) -> None:
        for handler in self.handlers_for(type(event)):
            try:
                handler.handle(event)
            except Exception:
                logger.exception(
                    "event_bus.handler_failed",
                    event_name=event.event_name,
                    event_id=str(event.event_id),
                    handler=type(handler).__name__,
                )
                raise


event_bus = InMemoryEventBus()
