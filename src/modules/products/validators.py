"""Validation passes for Product and Category.

Each function returns every violation found (empty list when valid) and
never raises.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List

from modules.core.validation import (
    Violation,
    check_decimal_min,
    check_non_negative_int,
    check_text,
)
from modules.products.models import Category, Product

MIN_PRICE = Decimal("0.01")


def validate_product(product: Product) -> List[Violation]:
    violations: List[Violation] = []
    violations += check_text(
        "name", product.name, label="Product name", min_length=3, max_length=200
    )
    violations += check_text(
        "description",
        product.description,
        label="Description",
        min_length=3,
        max_length=2000,
    )
    violations += check_decimal_min(
        "price",
        product.price,
        label="Price",
        minimum=MIN_PRICE,
        message="Price must be greater than 0",
    )
    violations += check_non_negative_int(
        "stock_quantity", product.stock_quantity, label="Stock quantity"
    )
    if product.sku is not None:
        violations += check_text("sku", product.sku, label="SKU", max_length=50)
    return violations


def validate_category(category: Category) -> List[Violation]:
    violations: List[Violation] = []
    violations += check_text(
        "name", category.name, label="Category name", min_length=3, max_length=100
    )
    violations += check_text(
        "description",
        category.description,
        label="Description",
        max_length=500,
    )
    if category.parent_category_id is not None and category.parent_category_id == category.id:
        violations.append(
            Violation("parent_category", "Category cannot be its own parent")
        )
    return violations
