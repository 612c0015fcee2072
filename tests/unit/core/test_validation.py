"""Unit tests for the shared field validation helpers."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.core.validation import (
    Violation,
    check_choice,
    check_decimal_min,
    check_email,
    check_non_negative_int,
    check_text,
)
from modules.users.models import UserRole

pytestmark = pytest.mark.unit


class TestCheckText:
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_is_rejected_when_required(self, value):
        assert check_text("name", value, label="Name", max_length=10) == [
            Violation("name", "Name cannot be blank")
        ]

    def test_blank_is_allowed_when_optional(self):
        assert check_text("name", "", label="Name", max_length=10, required=False) == []

    def test_range_message(self):
        result = check_text("name", "ab", label="Name", min_length=3, max_length=10)
        assert result[0].message == "Name must be between 3 and 10 characters"

    def test_max_message(self):
        result = check_text("name", "x" * 11, label="Name", max_length=10)
        assert result[0].message == "Name must be max 10 characters"

    def test_bounds_are_inclusive(self):
        assert check_text("name", "abc", label="Name", min_length=3, max_length=3) == []


class TestCheckEmail:
    def test_valid_email(self):
        assert check_email("email", "jane@example.com") == []

    def test_malformed_email(self):
        result = check_email("email", "not-an-email")
        assert result == [Violation("email", "Email must be a well-formed email address")]

    def test_blank_email(self):
        assert check_email("email", " ")[0].message == "Email cannot be blank"


class TestNumericChecks:
    def test_price_null(self):
        result = check_decimal_min(
            "price", None, label="Price", minimum=Decimal("0.01"), message="too low"
        )
        assert result[0].message == "Price cannot be null"

    @pytest.mark.parametrize("value", [Decimal("0"), Decimal("0.001"), "-1"])
    def test_price_below_minimum(self, value):
        result = check_decimal_min(
            "price",
            value,
            label="Price",
            minimum=Decimal("0.01"),
            message="Price must be greater than 0",
        )
        assert result[0].message == "Price must be greater than 0"

    def test_price_at_minimum(self):
        assert (
            check_decimal_min(
                "price", "0.01", label="Price", minimum=Decimal("0.01"), message="x"
            )
            == []
        )

    def test_negative_int(self):
        result = check_non_negative_int("stock", -1, label="Stock quantity")
        assert result[0].message == "Stock quantity cannot be negative"

    def test_bool_is_not_an_int(self):
        result = check_non_negative_int("stock", True, label="Stock quantity")
        assert result[0].message == "Stock quantity must be an integer"

    def test_zero_is_allowed(self):
        assert check_non_negative_int("stock", 0, label="Stock quantity") == []


def test_check_choice_lists_allowed_values():
    result = check_choice("role", "ROOT", label="Role", choices=UserRole)
    assert result[0].message == "Role must be one of: CUSTOMER, ADMIN"


def test_violation_as_dict():
    assert Violation("sku", "SKU cannot be blank").as_dict() == {
        "field": "sku",
        "message": "SKU cannot be blank",
    }
