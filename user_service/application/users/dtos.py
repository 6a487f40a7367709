"""
Data Transfer Objects for the users application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.

Optional update fields use the UNSET sentinel rather than None so that
"not supplied" cannot be confused with any real value.
"""

from dataclasses import dataclass
from typing import Final, TypeVar, Union

T = TypeVar("T")


class Unset:
    """Marker type for an update field the caller did not supply."""

    _instance = None

    def __new__(cls) -> "Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = Unset()

Maybe = Union[T, Unset]


def is_set(value: object) -> bool:
    """Return True if an optional update field carries a value."""
    return value is not UNSET


@dataclass(frozen=True)
class CreateUserDTO:
    """Input DTO for creating a user.

    Attributes:
        name: Display name.
        email: E-mail address, must be unique.
        password: Plaintext password.
        repeated_password: Confirmation, must equal ``password``.
    """

    name: str
    email: str
    password: str
    repeated_password: str


@dataclass(frozen=True)
class UpdateUserDTO:
    """Input DTO for a partial update.

    Attributes:
        uuid: Identifier of the user to update.
        password: Current password, authorizes the change.
        name: New display name, or UNSET to keep the stored one.
        email: New e-mail, or UNSET to keep the stored one.
        new_password: New password, or UNSET to keep the stored digest.
        repeated_new_password: Confirmation of ``new_password``.
    """

    uuid: str
    password: str
    name: Maybe[str] = UNSET
    email: Maybe[str] = UNSET
    new_password: Maybe[str] = UNSET
    repeated_new_password: Maybe[str] = UNSET
