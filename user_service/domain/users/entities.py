"""
Domain entities for the users bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass

INITIAL_VERSION = 1


@dataclass(frozen=True)
class User:
    """A user account.

    Attributes:
        uuid: Opaque identifier assigned by storage on creation. Empty
            until the user has been persisted.
        name: Display name. Never empty.
        email: Unique e-mail address. Never empty.
        password: Digest produced by a PasswordHasher. Never plaintext.
        version: Optimistic-concurrency token, bumped on every update.
    """

    uuid: str
    name: str
    email: str
    password: str
    version: int = INITIAL_VERSION
