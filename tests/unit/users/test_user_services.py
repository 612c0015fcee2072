"""Unit tests for UserService."""

from __future__ import annotations

from uuid import uuid4

import pytest
from django.contrib.auth.hashers import check_password

from modules.core.exceptions import EntityValidationError
from modules.users.dtos import CreateAddressDTO, CreateUserDTO
from modules.users.exceptions import UserAlreadyExists, UserNotFound
from modules.users.models import Address, AddressType, User
from modules.users.repositories.django_repository import UserDjangoRepository
from modules.users.services import UserService

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return UserService(repository=UserDjangoRepository())


def _dto(**overrides) -> CreateUserDTO:
    fields = {
        "email": "  Jane.Doe@Example.com ",
        "password": "correct-horse",
        "first_name": "Jane",
        "last_name": "Doe",
    }
    fields.update(overrides)
    return CreateUserDTO(**fields)


def _address_dto(**overrides) -> CreateAddressDTO:
    fields = {
        "street_address": "1 Main Street",
        "city": "Springfield",
        "state": "Oregon",
        "postal_code": "97477",
        "country": "USA",
    }
    fields.update(overrides)
    return CreateAddressDTO(**fields)


class TestCreateUser:
    def test_creates_user_with_hashed_password(self, service):
        user = service.create_user(_dto())

        stored = User.objects.get(id=user.id)
        assert stored.email == "jane.doe@example.com"
        assert stored.password_hash != "correct-horse"
        assert check_password("correct-horse", stored.password_hash)
        assert stored.is_active
        assert stored.created_at == stored.updated_at

    def test_duplicate_email(self, service):
        service.create_user(_dto())
        with pytest.raises(UserAlreadyExists):
            service.create_user(_dto(email="JANE.DOE@example.com"))

    def test_validation_failure_writes_nothing(self, service):
        with pytest.raises(EntityValidationError) as exc_info:
            service.create_user(_dto(email="nope", password=""))

        fields = [v.field for v in exc_info.value.violations]
        assert fields == ["email", "password_hash"]
        assert User.objects.count() == 0


class TestGetAndDeactivate:
    def test_get_user_not_found(self, service):
        with pytest.raises(UserNotFound):
            service.get_user(str(uuid4()))

    def test_get_user_invalid_id(self, service):
        with pytest.raises(UserNotFound):
            service.get_user("not-a-uuid")

    def test_deactivate(self, service, user):
        service.deactivate_user(str(user.id))
        user.refresh_from_db()
        assert user.is_active is False

    def test_soft_deleted_user_is_not_found(self, service, user):
        user.delete()
        with pytest.raises(UserNotFound):
            service.get_user(str(user.id))


class TestAddresses:
    def test_add_address(self, service, user):
        address = service.add_address(str(user.id), _address_dto())

        assert address.user_id == user.id
        assert address.is_default

    def test_new_default_replaces_previous_of_same_type(self, service, user):
        first = service.add_address(str(user.id), _address_dto())
        second = service.add_address(str(user.id), _address_dto(city="Shelbyville"))
        billing = service.add_address(
            str(user.id), _address_dto(address_type=AddressType.BILLING)
        )

        first.refresh_from_db()
        assert first.is_default is False
        assert Address.objects.get(id=second.id).is_default
        assert Address.objects.get(id=billing.id).is_default

    def test_invalid_address(self, service, user):
        with pytest.raises(EntityValidationError):
            service.add_address(str(user.id), _address_dto(country="US"))
        assert Address.objects.count() == 0

    def test_unknown_user(self, service):
        with pytest.raises(UserNotFound):
            service.add_address(str(uuid4()), _address_dto())


def test_list_addresses_puts_default_first(service, user):
    repo = UserDjangoRepository()
    service.add_address(str(user.id), _address_dto(is_default=False, city="Capital City"))
    default = service.add_address(str(user.id), _address_dto())
    removed = service.add_address(str(user.id), _address_dto(is_default=False))
    removed.delete()

    addresses = repo.list_addresses(str(user.id))

    assert [a.id for a in addresses][0] == default.id
    assert removed.id not in {a.id for a in addresses}
    assert len(addresses) == 2
