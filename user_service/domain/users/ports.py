"""
Port interfaces (ABCs) for the users bounded context.

Ports define the contracts that the user service requires from the
outside world. Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from user_service.domain.users.entities import User


class UserRepository(ABC):
    """Port for persisting user accounts.

    Every lookup raises UserNotFoundError when no row matches, including
    when the identifier is not a well-formed UUID. A duplicate e-mail is
    reported as UserValidationError. Anything else is left to propagate.
    """

    @abstractmethod
    def create(self, user: User) -> str:
        """Persist a new user and return its assigned identifier."""
        raise NotImplementedError

    @abstractmethod
    def find_all(self) -> list[User]:
        """Return every stored user. Order is not significant."""
        raise NotImplementedError

    @abstractmethod
    def find_by_uuid(self, uuid: str) -> User:
        """Return the user with the given identifier."""
        raise NotImplementedError

    @abstractmethod
    def find_by_email(self, email: str) -> User:
        """Return the user registered with the given e-mail."""
        raise NotImplementedError

    @abstractmethod
    def update(self, user: User) -> int:
        """Overwrite name, email and password of a stored user.

        The write only applies while the stored version still equals
        ``user.version``; the version is bumped on success.

        Returns:
            Number of rows affected (0 or 1).
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, uuid: str, version: Optional[int] = None) -> int:
        """Delete a user, optionally only if its version still matches.

        Returns:
            Number of rows affected (0 or 1).
        """
        raise NotImplementedError


class PasswordHasher(ABC):
    """Port for the one-way password codec."""

    @abstractmethod
    def hash(self, plaintext: str) -> str:
        """Return a digest for the plaintext.

        Raises:
            PasswordHashingError: If the underlying primitive fails.
        """
        raise NotImplementedError

    @abstractmethod
    def verify(self, digest: str, plaintext: str) -> bool:
        """Return True if the plaintext matches the digest.

        A malformed digest is reported as False, same as a mismatch.
        """
        raise NotImplementedError
