"""Base repository contract.

Services receive repositories through their constructors and only ever see
these interfaces; the Django implementations live next to each module's
models.  Look-ups follow the Null Object convention: a missing row or a
malformed id yields ``None``, and the service decides which domain error
that becomes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Return the live entity with this primary key, or ``None``."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Insert or update *entity* inside the caller's transaction."""
