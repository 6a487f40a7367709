"""
Pydantic schemas for the users REST API.

These schemas define the wire contract. Missing or mistyped fields are
rejected here; emptiness and password confirmation are business rules
checked by the user service.
"""

from typing import Optional

from pydantic import BaseModel, Field

from user_service.domain.users.entities import User


class CreateUserRequest(BaseModel):
    """Request schema for creating a user."""

    name: str
    email: str
    password: str
    repeated_password: str


class UpdateUserRequest(BaseModel):
    """Request schema for a partial update.

    Attributes:
        password: Current password, authorizes the change.
        name: New display name. Omitted or null keeps the stored one.
        email: New e-mail. Omitted or null keeps the stored one.
        new_password: New password. Requires repeated_new_password.
        repeated_new_password: Confirmation of new_password.
    """

    password: str
    name: Optional[str] = None
    email: Optional[str] = None
    new_password: Optional[str] = None
    repeated_new_password: Optional[str] = None


class UserResponse(BaseModel):
    """A user as returned by the API. ``password`` is the stored digest."""

    uuid: str
    name: str
    email: str
    password: str

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            uuid=user.uuid, name=user.name, email=user.email, password=user.password
        )


class ErrorResponse(BaseModel):
    """Error envelope returned by all error handlers."""

    code: str = Field(..., examples=["US-000404"])
    message: str
    developer_message: str = ""


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
