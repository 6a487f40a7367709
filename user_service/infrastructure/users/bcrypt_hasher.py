"""
Adapter: bcrypt password codec.

Implements the PasswordHasher port.
"""

import logging

import bcrypt

from user_service.domain.users.errors import PasswordHashingError
from user_service.domain.users.ports import PasswordHasher

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12
# bcrypt only reads the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72


class BcryptPasswordHasher(PasswordHasher):
    """Hashes passwords with bcrypt at a configurable work factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self._rounds = rounds

    def hash(self, plaintext: str) -> str:
        """Hash a password using bcrypt.

        Args:
            plaintext: Plain text password.

        Returns:
            Hashed password string.

        Raises:
            PasswordHashingError: If the password is longer than 72 bytes
                or bcrypt rejects the input.
        """
        encoded = plaintext.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise PasswordHashingError(
                f"password cannot be longer than {MAX_PASSWORD_BYTES} bytes"
            )
        try:
            salt = bcrypt.gensalt(rounds=self._rounds)
            hashed = bcrypt.hashpw(encoded, salt)
        except ValueError as exc:
            raise PasswordHashingError(f"failed to hash password: {exc}") from exc
        return hashed.decode("utf-8")

    def verify(self, digest: str, plaintext: str) -> bool:
        """Verify a password against its hash.

        Returns:
            True if password matches, False on mismatch, malformed digest
            or a password too long to have been hashed.
        """
        encoded = plaintext.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, digest.encode("utf-8"))
        except ValueError:
            logger.warning("Password verification against a malformed digest")
            return False
