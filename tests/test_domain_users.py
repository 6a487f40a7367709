"""
Tests for the users domain layer.

Tests entities and the error envelope in isolation.
No external dependencies or IO required.
"""

from dataclasses import FrozenInstanceError

import pytest

from user_service.domain.users.entities import INITIAL_VERSION, User
from user_service.domain.users.errors import (
    UserNotFoundError,
    UserSystemError,
    UserValidationError,
)


class TestUserEntity:
    """Tests for the User entity."""

    def test_new_user_starts_at_initial_version(self) -> None:
        user = User(uuid="", name="Ann", email="ann@x.com", password="digest")
        assert user.version == INITIAL_VERSION

    def test_user_is_immutable(self) -> None:
        user = User(uuid="u1", name="Ann", email="ann@x.com", password="digest")
        with pytest.raises(FrozenInstanceError):
            user.name = "Bob"  # type: ignore[misc]


class TestErrorEnvelope:
    """Tests for the error envelope carried by domain errors."""

    def test_not_found_envelope(self) -> None:
        assert UserNotFoundError().to_dict() == {
            "code": "US-000404",
            "message": "not found",
            "developer_message": "not found",
        }

    def test_validation_envelope_keeps_message(self) -> None:
        envelope = UserValidationError("incorrect password").to_dict()
        assert envelope["code"] == "US-000400"
        assert envelope["message"] == "incorrect password"
        assert envelope["developer_message"] == "something wrong with user data"

    def test_system_error_hides_details_from_message(self) -> None:
        error = UserSystemError("failed to create user")
        assert error.code == "US-000418"
        assert error.message == "internal system error"
        assert error.developer_message == "failed to create user"
