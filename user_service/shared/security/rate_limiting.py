"""
Rate limiting configuration and setup.

Uses slowapi to enforce per-endpoint rate limits.
Credential lookups get a tighter limit to slow down password guessing.
"""

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

CREDENTIALS_RATE_LIMIT = "10/minute"

limiter = Limiter(key_func=get_remote_address)


def rate_limiting_disabled(request: Request) -> bool:
    """Exempt the request when its application turned rate limiting off."""
    return not request.app.state.settings.rate_limit_enabled


async def rate_limit_exceeded_handler(
    _request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Handle rate limit exceeded errors with a clean JSON response.

    Args:
        _request: The incoming HTTP request.
        exc: The rate limit exceeded exception.

    Returns:
        A 429 JSON response with a clear error message.
    """
    return JSONResponse(
        status_code=429,
        content={
            "code": "US-000429",
            "message": "rate limit exceeded",
            "developer_message": str(exc.detail),
        },
    )
