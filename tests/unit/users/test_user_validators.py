"""Unit tests for User and Address validation passes."""

from __future__ import annotations

import pytest

from modules.users.models import Address, User
from modules.users.validators import validate_address, validate_user

pytestmark = pytest.mark.unit


def _user(**overrides) -> User:
    fields = {
        "email": "jane@example.com",
        "password_hash": "hash",
        "first_name": "Jane",
        "last_name": "Doe-Smith",
    }
    fields.update(overrides)
    return User(**fields)


def _messages(violations):
    return [v.message for v in violations]


class TestValidateUser:
    def test_valid_user(self):
        assert validate_user(_user()) == []

    def test_collects_every_violation(self):
        user = _user(email="bad", password_hash="", first_name="Jo", last_name="")
        messages = _messages(validate_user(user))

        assert messages == [
            "Email must be a well-formed email address",
            "Password cannot be blank",
            "First name must be between 3 and 100 characters",
            "Last name cannot be blank",
        ]

    def test_phone_number_length(self):
        messages = _messages(validate_user(_user(phone_number="1" * 21)))
        assert messages == ["Phone number must be less than 20 characters"]

    def test_unknown_role(self):
        violations = validate_user(_user(role="ROOT"))
        assert violations[0].field == "role"


class TestValidateAddress:
    def test_valid_address(self, user):
        address = Address(
            user=user,
            street_address="1 Main Street",
            city="Springfield",
            state="Oregon",
            postal_code="97477",
            country="USA",
        )
        assert validate_address(address) == []

    def test_address_without_user(self):
        address = Address(
            street_address="1 Main Street",
            city="Springfield",
            state="Oregon",
            postal_code="97477",
            country="USA",
        )
        assert _messages(validate_address(address)) == ["Address must belong to a user"]

    def test_postal_code_bounds(self, user):
        address = Address(
            user=user,
            street_address="1 Main Street",
            city="Springfield",
            state="Oregon",
            postal_code="12345678901",
            country="USA",
        )
        assert _messages(validate_address(address)) == [
            "PostalCode must be between 3 and 10 characters"
        ]
