"""
FastAPI router for the users bounded context.

All routes delegate to the user service. No business logic here.
Error mapping is handled by centralized error handlers.
"""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, Query, Request, Response, status

from user_service.application.users.dtos import UNSET, CreateUserDTO, UpdateUserDTO
from user_service.application.users.service import UserService
from user_service.domain.users.errors import UserValidationError
from user_service.interfaces.users.dependencies import get_user_service
from user_service.interfaces.users.schemas import (
    CreateUserRequest,
    ErrorResponse,
    UpdateUserRequest,
    UserResponse,
)
from user_service.shared.security.rate_limiting import (
    CREDENTIALS_RATE_LIMIT,
    limiter,
    rate_limiting_disabled,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation error"},
    418: {"model": ErrorResponse, "description": "Internal system error"},
}
NOT_FOUND_RESPONSE = {404: {"model": ErrorResponse, "description": "User not found"}}


def _or_unset(value: Optional[str]):
    return UNSET if value is None else value


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    responses=ERROR_RESPONSES,
    summary="Create user",
)
def create_user(
    request: Request,
    body: CreateUserRequest,
    service: UserService = Depends(get_user_service),
) -> Response:
    """Create a user and point the Location header at it."""
    logger.info("Create user")
    user_uuid = service.create(
        CreateUserDTO(
            name=body.name,
            email=body.email,
            password=body.password,
            repeated_password=body.repeated_password,
        )
    )
    location = request.app.url_path_for("get_user_by_uuid", uuid=user_uuid)
    return Response(
        status_code=status.HTTP_201_CREATED, headers={"Location": str(location)}
    )


@router.get(
    "",
    response_model=Union[list[UserResponse], UserResponse],
    responses={**ERROR_RESPONSES, **NOT_FOUND_RESPONSE},
    summary="List users or look one up by credentials",
    description=(
        "Without query parameters, returns every user. With `email` and "
        "`password`, returns the matching user."
    ),
)
@limiter.limit(CREDENTIALS_RATE_LIMIT, exempt_when=rate_limiting_disabled)
def list_users(
    request: Request,
    email: Optional[str] = Query(default=None),
    password: Optional[str] = Query(default=None),
    service: UserService = Depends(get_user_service),
) -> Union[list[UserResponse], UserResponse]:
    """List all users, or find one by e-mail and password."""
    if email is None and password is None:
        logger.info("Get all users")
        return [UserResponse.from_entity(u) for u in service.get_all()]

    logger.info("Get user by email and password")
    if not email:
        raise UserValidationError("email must not be empty")
    if not password:
        raise UserValidationError("password must not be empty")
    user = service.get_by_email_and_password(email, password)
    return UserResponse.from_entity(user)


@router.get(
    "/{uuid}",
    response_model=UserResponse,
    responses={**ERROR_RESPONSES, **NOT_FOUND_RESPONSE},
    summary="Get user by uuid",
)
def get_user_by_uuid(
    uuid: str,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Return one user."""
    logger.info("Get user by uuid")
    return UserResponse.from_entity(service.get_by_uuid(uuid))


@router.patch(
    "/{uuid}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**ERROR_RESPONSES, **NOT_FOUND_RESPONSE},
    summary="Partially update user",
)
def update_user(
    uuid: str,
    body: UpdateUserRequest,
    service: UserService = Depends(get_user_service),
) -> Response:
    """Apply the supplied fields; omitted fields stay unchanged."""
    logger.info("Partially update user")
    service.update(
        UpdateUserDTO(
            uuid=uuid,
            password=body.password,
            name=_or_unset(body.name),
            email=_or_unset(body.email),
            new_password=_or_unset(body.new_password),
            repeated_new_password=_or_unset(body.repeated_new_password),
        )
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{uuid}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**ERROR_RESPONSES, **NOT_FOUND_RESPONSE},
    summary="Delete user",
)
def delete_user(
    uuid: str,
    service: UserService = Depends(get_user_service),
) -> Response:
    """Delete one user."""
    logger.info("Delete user")
    service.delete(uuid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
