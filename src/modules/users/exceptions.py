"""User domain exceptions.

Raised by the Service Layer when business rules are violated.
"""

from __future__ import annotations


class UserNotFound(Exception):
    """The requested user does not exist or has been soft-deleted."""


class UserAlreadyExists(Exception):
    """A user with the same email already exists."""
