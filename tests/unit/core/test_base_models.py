"""Unit tests for BaseModel timestamps and soft delete."""

from __future__ import annotations

from datetime import timedelta

import pytest
from django.utils import timezone

from modules.users.models import User

pytestmark = pytest.mark.unit


def _unsaved_user() -> User:
    return User(
        email="stamp@example.com",
        password_hash="hash",
        first_name="Stamp",
        last_name="Tester",
    )


class TestTouch:
    def test_new_row_gets_both_timestamps(self):
        user = _unsaved_user()
        now = timezone.now() - timedelta(days=1)

        assert user.touch(now) == now
        assert user.created_at == now
        assert user.updated_at == now

    def test_saved_row_keeps_created_at(self, make_user):
        user = make_user()
        created = user.created_at
        later = created + timedelta(minutes=5)

        user.touch(later)

        assert user.created_at == created
        assert user.updated_at == later

    def test_update_fields_always_include_updated_at(self, make_user):
        user = make_user()
        later = user.updated_at + timedelta(minutes=5)
        user.first_name = "Renamed"
        user.updated_at = later

        user.save(update_fields=["first_name"])
        user.refresh_from_db()

        assert user.first_name == "Renamed"
        assert user.updated_at == later


class TestSoftDelete:
    def test_delete_hides_from_alive(self, make_user):
        user = make_user()

        assert user.delete() == (1, {"users.User": 1})
        assert user.is_deleted
        assert not User.objects.alive().filter(id=user.id).exists()
        assert User.objects.dead().filter(id=user.id).exists()

    def test_delete_twice_is_noop(self, make_user):
        user = make_user()
        user.delete()
        assert user.delete() == (0, {})

    def test_restore(self, make_user):
        user = make_user()
        user.delete()
        user.restore()
        user.refresh_from_db()
        assert not user.is_deleted

    def test_queryset_delete_is_soft(self, make_user):
        make_user()
        make_user()

        count, _ = User.objects.all().delete()

        assert count == 2
        assert User.objects.count() == 2
        assert User.objects.alive().count() == 0

    def test_hard_delete_removes_row(self, make_user):
        user = make_user()
        user.hard_delete()
        assert not User.objects.filter(id=user.id).exists()
