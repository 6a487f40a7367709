"""
Adapter: in-memory user storage.

Implements the UserRepository port with a dict guarded by a lock.
Used by the "memory" storage backend and by tests.
"""

import threading
import uuid as uuid_lib
from dataclasses import replace
from typing import Optional

from user_service.domain.users.entities import INITIAL_VERSION, User
from user_service.domain.users.errors import UserNotFoundError, UserValidationError
from user_service.domain.users.ports import UserRepository

DUPLICATE_EMAIL_MESSAGE = "user with this email already exists"


class InMemoryUserRepository(UserRepository):
    """Thread-safe user storage kept in process memory."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._lock = threading.Lock()

    def _email_taken(self, email: str, exclude_uuid: str = "") -> bool:
        return any(
            u.email == email and u.uuid != exclude_uuid for u in self._users.values()
        )

    def create(self, user: User) -> str:
        with self._lock:
            if self._email_taken(user.email):
                raise UserValidationError(DUPLICATE_EMAIL_MESSAGE)
            new_uuid = str(uuid_lib.uuid4())
            self._users[new_uuid] = replace(
                user, uuid=new_uuid, version=INITIAL_VERSION
            )
        return new_uuid

    def find_all(self) -> list[User]:
        with self._lock:
            return list(self._users.values())

    def find_by_uuid(self, uuid: str) -> User:
        with self._lock:
            user = self._users.get(uuid)
        if user is None:
            raise UserNotFoundError()
        return user

    def find_by_email(self, email: str) -> User:
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return user
        raise UserNotFoundError()

    def update(self, user: User) -> int:
        with self._lock:
            stored = self._users.get(user.uuid)
            if stored is None or stored.version != user.version:
                return 0
            if self._email_taken(user.email, exclude_uuid=user.uuid):
                raise UserValidationError(DUPLICATE_EMAIL_MESSAGE)
            self._users[user.uuid] = replace(user, version=user.version + 1)
        return 1

    def delete(self, uuid: str, version: Optional[int] = None) -> int:
        with self._lock:
            stored = self._users.get(uuid)
            if stored is None:
                return 0
            if version is not None and stored.version != version:
                return 0
            del self._users[uuid]
        return 1
