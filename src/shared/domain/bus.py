"""Event bus contracts.

Aggregates collect events while a unit of work runs; whoever commits the
unit of work publishes them through an ``IEventBus``.  Handlers run in the
publishing thread, after commit, and must not assume they can roll anything
back.
"""

from __future__ import annotations

from typing import Generic, Protocol, Type, TypeVar

from shared.domain.events import DomainEvent

E = TypeVar("E", bound=DomainEvent, contravariant=True)


class IEventHandler(Protocol, Generic[E]):
    def handle(self, event: E) -> None: ...


class IEventBus(Protocol):
    def publish(self, event: DomainEvent) -> None:
        """Deliver *event* to every handler subscribed to its exact type."""
        ...

    def subscribe(self, event_class: Type[E], handler: IEventHandler[E]) -> None:
        """Register *handler* once for *event_class*."""
        ...
