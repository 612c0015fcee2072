"""Validation passes for User and Address.

Each function returns every violation found (empty list when valid) and
never raises.
"""

from __future__ import annotations

from typing import List

from modules.core.validation import Violation, check_choice, check_email, check_text
from modules.users.models import Address, AddressType, User, UserRole


def validate_user(user: User) -> List[Violation]:
    violations: List[Violation] = []
    violations += check_email("email", user.email)
    if not user.password_hash or not user.password_hash.strip():
        violations.append(Violation("password_hash", "Password cannot be blank"))
    violations += check_text(
        "first_name", user.first_name, label="First name", min_length=3, max_length=100
    )
    violations += check_text(
        "last_name", user.last_name, label="Last name", min_length=3, max_length=100
    )
    if user.phone_number and len(user.phone_number) > 20:
        violations.append(
            Violation("phone_number", "Phone number must be less than 20 characters")
        )
    violations += check_choice("role", user.role, label="Role", choices=UserRole)
    return violations


def validate_address(address: Address) -> List[Violation]:
    violations: List[Violation] = []
    if address.user_id is None:
        violations.append(Violation("user", "Address must belong to a user"))
    violations += check_choice(
        "address_type", address.address_type, label="Address type", choices=AddressType
    )
    violations += check_text(
        "street_address",
        address.street_address,
        label="Street address",
        min_length=3,
        max_length=200,
    )
    violations += check_text(
        "city", address.city, label="City", min_length=3, max_length=200
    )
    violations += check_text(
        "state", address.state, label="State", min_length=3, max_length=200
    )
    violations += check_text(
        "postal_code", address.postal_code, label="PostalCode", min_length=3, max_length=10
    )
    violations += check_text(
        "country", address.country, label="Country", min_length=3, max_length=100
    )
    return violations
