"""
User service: business rules for the account lifecycle.

Input: CreateUserDTO / UpdateUserDTO / identifiers / credentials.
Output: identifiers and User entities.
Side effects: at most one storage write per call.
Failure cases: UserNotFoundError, UserValidationError, UserSystemError.

NotFound and Validation errors from storage pass through unchanged.
Anything else is wrapped in UserSystemError naming the operation, with
the original exception chained for diagnostics.
"""

import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Iterator

from user_service.application.users.dtos import CreateUserDTO, UpdateUserDTO, is_set
from user_service.domain.users.entities import User
from user_service.domain.users.errors import (
    UserDomainError,
    UserSystemError,
    UserValidationError,
)
from user_service.domain.users.ports import PasswordHasher, UserRepository

logger = logging.getLogger(__name__)


@contextmanager
def _wrap_failures(operation: str) -> Iterator[None]:
    """Re-raise taxonomy errors as-is, wrap everything else as a system error."""
    try:
        yield
    except UserDomainError:
        raise
    except Exception as exc:
        logger.error("%s: %s: %s", operation, type(exc).__name__, exc)
        raise UserSystemError(operation) from exc


def _require(**fields: str) -> None:
    for field_name, value in fields.items():
        if not value:
            label = field_name.replace("_", " ")
            raise UserValidationError(f"{label} must not be empty")


class UserService:
    """Stateless façade over the user repository.

    Safe to share across concurrent requests: it holds no mutable state
    and reloads users from storage before changing them.
    """

    def __init__(self, repository: UserRepository, hasher: PasswordHasher) -> None:
        """Initialize the service.

        Args:
            repository: Storage port for user records.
            hasher: Password codec used for digests and verification.
        """
        self._repository = repository
        self._hasher = hasher

    def create(self, dto: CreateUserDTO) -> str:
        """Create a user and return its identifier.

        Raises:
            UserValidationError: Empty field, unconfirmed password, or the
                e-mail is already registered.
            UserSystemError: Hashing or storage failure.
        """
        _require(
            name=dto.name,
            email=dto.email,
            password=dto.password,
            repeated_password=dto.repeated_password,
        )
        if dto.password != dto.repeated_password:
            raise UserValidationError("password does not match repeated password")

        with _wrap_failures("failed to create user"):
            user = User(
                uuid="",
                name=dto.name,
                email=dto.email,
                password=self._hasher.hash(dto.password),
            )
            user_uuid = self._repository.create(user)

        logger.info("Created user uuid=%s", user_uuid)
        return user_uuid

    def get_all(self) -> list[User]:
        """Return all users."""
        with _wrap_failures("failed to find all users"):
            return self._repository.find_all()

    def get_by_uuid(self, uuid: str) -> User:
        """Return a user by identifier.

        Raises:
            UserNotFoundError: No user has this identifier.
        """
        with _wrap_failures("failed to find user by uuid"):
            return self._repository.find_by_uuid(uuid)

    def get_by_email_and_password(self, email: str, password: str) -> User:
        """Return the user whose e-mail and password match.

        An unknown e-mail is NotFound while a wrong password is a
        Validation error; callers see different statuses for the two.

        Raises:
            UserNotFoundError: No user has this e-mail.
            UserValidationError: The password does not match.
        """
        with _wrap_failures("failed to find user by email"):
            user = self._repository.find_by_email(email)
            matches = self._hasher.verify(user.password, password)

        if not matches:
            raise UserValidationError("incorrect password")
        return user

    def update(self, dto: UpdateUserDTO) -> None:
        """Apply a partial update authorized by the current password.

        Fields left UNSET keep their stored value.

        Raises:
            UserNotFoundError: No user has this identifier.
            UserValidationError: Wrong current password, empty field,
                missing or mismatching password confirmation.
            UserSystemError: Storage failure, or the user changed or
                vanished between load and write.
        """
        _require(uuid=dto.uuid, password=dto.password)

        with _wrap_failures("failed to update user"):
            existing = self._repository.find_by_uuid(dto.uuid)
            matches = self._hasher.verify(existing.password, dto.password)
        if not matches:
            raise UserValidationError("incorrect password")

        changes: dict[str, str] = {}
        if is_set(dto.name):
            _require(name=dto.name)
            changes["name"] = dto.name
        if is_set(dto.email):
            _require(email=dto.email)
            changes["email"] = dto.email
        if is_set(dto.new_password):
            _require(new_password=dto.new_password)
            if not is_set(dto.repeated_new_password):
                raise UserValidationError("repeated password must be provided")
            if dto.new_password != dto.repeated_new_password:
                raise UserValidationError("passwords do not match")

        with _wrap_failures("failed to update user"):
            if is_set(dto.new_password):
                changes["password"] = self._hasher.hash(dto.new_password)
            updated = replace(existing, **changes)
            affected = self._repository.update(updated)

        if affected == 0:
            logger.error("Update of user uuid=%s affected no rows", dto.uuid)
            raise UserSystemError("failed to update user: no rows were updated")
        logger.info("Updated user uuid=%s fields=%s", dto.uuid, sorted(changes))

    def delete(self, uuid: str) -> None:
        """Delete a user.

        Raises:
            UserNotFoundError: No user has this identifier.
            UserSystemError: Storage failure, or the user changed or
                vanished between load and delete.
        """
        with _wrap_failures("failed to delete user"):
            existing = self._repository.find_by_uuid(uuid)
            affected = self._repository.delete(uuid, version=existing.version)

        if affected == 0:
            logger.error("Delete of user uuid=%s affected no rows", uuid)
            raise UserSystemError("failed to delete user: no rows were deleted")
        logger.info("Deleted user uuid=%s", uuid)
