"""Django ORM implementation of the User repository.

Error handling follows the Null Object pattern: look-ups return ``None``
for missing rows and malformed IDs; the Service Layer decides how to
translate that into a domain error.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

import structlog
from django.core.exceptions import ValidationError

from modules.users.models import Address, User
from modules.users.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class UserDjangoRepository(IUserRepository):
    """Concrete User repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[User]:
        """Retrieve a live user by primary key.

        Returns ``None`` for non-existent, soft-deleted or invalid IDs.
        """
        try:
            return User.objects.alive().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_email(self, email: str) -> Optional[User]:
        return User.objects.filter(email=email.strip().lower()).first()

    def save(self, entity: User) -> User:
        is_new = entity._state.adding
        entity.save()
        logger.info("user.saved", user_id=str(entity.id), is_new=is_new)
        return entity

    def save_address(self, address: Address) -> Address:
        address.save()
        logger.info(
            "user.address_saved",
            user_id=str(address.user_id),
            address_id=str(address.id),
            address_type=address.address_type,
        )
        return address

    def list_addresses(self, user_id: str) -> List[Address]:
        return list(Address.objects.alive().filter(user_id=user_id))

    def clear_default_address(
        self, user_id: str, address_type: str, now: datetime
    ) -> int:
        return (
            Address.objects.alive()
            .filter(user_id=user_id, address_type=address_type, is_default=True)
            .update(is_default=False, updated_at=now)
        )
