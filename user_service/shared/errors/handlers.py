"""
Centralized error handlers for FastAPI.

Maps domain errors to HTTP responses through the shared taxonomy.
No stack traces or internal details are exposed to clients.
All error responses carry the error envelope.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from user_service.domain.users.errors import UserDomainError, UserValidationError
from user_service.shared.errors.taxonomy import status_for, to_envelope

logger = logging.getLogger(__name__)


def _error_response(exc: BaseException) -> JSONResponse:
    """Build a JSON error response from the shared taxonomy."""
    envelope = to_envelope(exc)
    return JSONResponse(
        status_code=status_for(exc).http_status, content=envelope.to_dict()
    )


def _describe_validation(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Malformed payloads and missing parameters are validation errors."""
        message = _describe_validation(exc)
        logger.warning("Rejected request: %s", message)
        return _error_response(UserValidationError(message))

    @app.exception_handler(UserDomainError)
    async def handle_user_domain(
        _request: Request, exc: UserDomainError
    ) -> JSONResponse:
        """Handle every error of the user taxonomy."""
        if exc.__cause__ is not None:
            logger.error(
                "%s (cause: %s)", exc.developer_message, type(exc.__cause__).__name__
            )
        else:
            logger.warning("%s: %s", type(exc).__name__, exc.message)
        return _error_response(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(exc)
