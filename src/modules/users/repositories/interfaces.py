"""User repository interface."""

from __future__ import annotations

from abc import abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.users.models import Address, User


class IUserRepository(IRepository["User"]):
    """Repository contract for the User aggregate (User + Addresses)."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve a user by email (any soft-delete state)."""

    @abstractmethod
    def save_address(self, address: Address) -> Address:
        """Persist an address belonging to a user."""

    @abstractmethod
    def list_addresses(self, user_id: str) -> List[Address]:
        """Return the live addresses of a user, default first."""

    @abstractmethod
    def clear_default_address(
        self, user_id: str, address_type: str, now: datetime
    ) -> int:
        """Unset ``is_default`` on the user's addresses of *address_type*."""
