"""
Domain-specific errors for the users bounded context.

These form the error envelope that crosses every transport boundary:
a stable code, a user-facing message and an internal developer message.
They are mapped to HTTP and gRPC statuses at the interface layer.
No framework imports allowed.
"""

NOT_FOUND_CODE = "US-000404"
BAD_REQUEST_CODE = "US-000400"
SYSTEM_ERROR_CODE = "US-000418"


class UserDomainError(Exception):
    """Base error for all user domain errors."""

    code = "US-000000"

    def __init__(self, message: str, developer_message: str = "") -> None:
        self.message = message
        self.developer_message = developer_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        """Serialize the error envelope."""
        return {
            "code": self.code,
            "message": self.message,
            "developer_message": self.developer_message,
        }


class UserNotFoundError(UserDomainError):
    """Raised when no stored user matches the lookup."""

    code = NOT_FOUND_CODE

    def __init__(self) -> None:
        super().__init__("not found", "not found")


class UserValidationError(UserDomainError):
    """Raised when the caller supplied invalid, unconfirmed or conflicting data.

    Credential mismatches are reported with this error too.
    """

    code = BAD_REQUEST_CODE

    def __init__(self, message: str) -> None:
        super().__init__(message, "something wrong with user data")


class UserSystemError(UserDomainError):
    """Raised when storage or hashing fails, or a write lost a race.

    The developer message names the failed operation; the underlying
    cause is chained on the exception and only ever logged.
    """

    code = SYSTEM_ERROR_CODE

    def __init__(self, developer_message: str) -> None:
        super().__init__("internal system error", developer_message)


class PasswordHashingError(Exception):
    """Raised by a PasswordHasher when the hashing primitive fails."""
