"""User DTOs for the Service Layer.

Immutable Pydantic v2 models.  Only shape and type are checked here; the
business field rules run in ``validators.py`` on the built entity.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from modules.users.models import AddressType, UserRole


class CreateUserDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: str
    password: str
    first_name: str
    last_name: str
    phone_number: str = ""
    role: UserRole = UserRole.CUSTOMER

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        return v.strip().lower()


class CreateAddressDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    address_type: AddressType = AddressType.SHIPPING
    street_address: str
    city: str
    state: str
    postal_code: str
    country: str
    is_default: bool = True
