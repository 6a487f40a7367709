"""
Error taxonomy bridge shared by every transport.

One table maps each error kind to its HTTP status and gRPC status code.
Anything that is not a recognized domain error is an internal error.
"""

from dataclasses import dataclass
from enum import Enum

import grpc

from user_service.domain.users.errors import (
    UserDomainError,
    UserNotFoundError,
    UserSystemError,
    UserValidationError,
)

HTTP_400 = 400
HTTP_404 = 404
# Deliberately non-standard: flags logic/system failures apart from plain 500s.
HTTP_418 = 418


class ErrorKind(Enum):
    """Transport-agnostic error classification."""

    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    INTERNAL = "internal"


@dataclass(frozen=True)
class TransportStatus:
    """Status used by each transport for one error kind."""

    http_status: int
    grpc_code: grpc.StatusCode


ERROR_TABLE: dict[ErrorKind, TransportStatus] = {
    ErrorKind.NOT_FOUND: TransportStatus(HTTP_404, grpc.StatusCode.NOT_FOUND),
    ErrorKind.VALIDATION: TransportStatus(HTTP_400, grpc.StatusCode.INVALID_ARGUMENT),
    ErrorKind.INTERNAL: TransportStatus(HTTP_418, grpc.StatusCode.INTERNAL),
}


def classify(exc: BaseException) -> ErrorKind:
    """Return the taxonomy kind of an exception."""
    if isinstance(exc, UserNotFoundError):
        return ErrorKind.NOT_FOUND
    if isinstance(exc, UserValidationError):
        return ErrorKind.VALIDATION
    return ErrorKind.INTERNAL


def to_envelope(exc: BaseException) -> UserDomainError:
    """Return the envelope to send to the caller for an exception.

    Unrecognized exceptions become a generic system error; their text
    is never forwarded.
    """
    if isinstance(exc, UserDomainError):
        return exc
    return UserSystemError("unexpected error")


def status_for(exc: BaseException) -> TransportStatus:
    """Return the transport statuses for an exception."""
    return ERROR_TABLE[classify(exc)]
