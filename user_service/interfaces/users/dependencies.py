"""
Dependency injection for the users REST API.

The user service is built once by create_app() and stored on the
application state; routes receive that shared instance.
"""

from fastapi import Request

from user_service.application.users.service import UserService


def get_user_service(request: Request) -> UserService:
    """Return the UserService wired at application startup."""
    return request.app.state.user_service
