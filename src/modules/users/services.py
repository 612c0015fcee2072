"""User service layer (Use Cases).

Business rules enforced here:
- Email must be unique.
- Field rules from ``validators.py`` pass before anything is written.
- Passwords are hashed with Django's configured hashers.
- A new default address replaces the previous default of the same type.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from django.contrib.auth.hashers import make_password
from django.db import transaction
from django.utils import timezone

from modules.core.exceptions import EntityValidationError
from modules.users.exceptions import UserAlreadyExists, UserNotFound
from modules.users.models import Address, User
from modules.users.validators import validate_address, validate_user

if TYPE_CHECKING:
    from modules.users.dtos import CreateAddressDTO, CreateUserDTO
    from modules.users.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class UserService:
    """Application service for User use-cases."""

    def __init__(self, repository: IUserRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_user(self, dto: CreateUserDTO) -> User:
        """Register a new user.

        Raises:
            EntityValidationError: a field rule is broken.
            UserAlreadyExists: the email is already registered.
        """
        user = User(
            email=dto.email,
            password_hash=make_password(dto.password) if dto.password else "",
            first_name=dto.first_name,
            last_name=dto.last_name,
            phone_number=dto.phone_number,
            role=dto.role,
        )
        violations = validate_user(user)
        if violations:
            logger.warning(
                "user.validation_failed", fields=[v.field for v in violations]
            )
            raise EntityValidationError(violations)

        if self._repo.get_by_email(dto.email):
            logger.warning("user.duplicate_email")
            raise UserAlreadyExists("Email already registered.")

        user.touch()
        with transaction.atomic():
            user = self._repo.save(user)
        logger.info("user.created", user_id=str(user.id))
        return user

    def add_address(self, user_id: str, dto: CreateAddressDTO) -> Address:
        """Attach an address to a user.

        Raises:
            UserNotFound: the user does not exist.
            EntityValidationError: a field rule is broken.
        """
        user = self.get_user(user_id)
        address = Address(
            user=user,
            address_type=dto.address_type,
            street_address=dto.street_address,
            city=dto.city,
            state=dto.state,
            postal_code=dto.postal_code,
            country=dto.country,
            is_default=dto.is_default,
        )
        violations = validate_address(address)
        if violations:
            raise EntityValidationError(violations)

        now = address.touch()
        with transaction.atomic():
            if address.is_default:
                self._repo.clear_default_address(
                    str(user.id), address.address_type, now
                )
            address = self._repo.save_address(address)
        return address

    def deactivate_user(self, user_id: str) -> User:
        """Mark a user inactive; inactive users cannot purchase."""
        user = self.get_user(user_id)
        if not user.is_active:
            return user
        user.is_active = False
        user.touch()
        with transaction.atomic():
            self._repo.save(user)
        logger.info("user.deactivated", user_id=str(user.id))
        return user

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_user(self, user_id: str) -> User:
        """Raises ``UserNotFound`` if the user does not exist."""
        user = self._repo.get_by_id(str(user_id))
        if not user:
            raise UserNotFound(f"User {user_id} not found.")
        return user
