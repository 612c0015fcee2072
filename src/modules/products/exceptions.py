"""Product domain exceptions.

Raised by the Service Layer when catalog rules are violated.  Purchase
errors live in ``modules.orders.exceptions``.
"""

from __future__ import annotations


class ProductAlreadyExists(Exception):
    """A product with the same SKU already exists."""


class CategoryAlreadyExists(Exception):
    """A category with the same name already exists."""


class CategoryNotFound(Exception):
    """The referenced category does not exist or has been soft-deleted."""
