"""
gRPC servicer for the users bounded context.

All methods delegate to the user service. No business logic here.
Requests and responses are UTF-8 JSON documents.
"""

import logging
from typing import Optional, TypeVar

import grpc
from pydantic import BaseModel, ValidationError

from user_service.application.users.dtos import UNSET, CreateUserDTO, UpdateUserDTO
from user_service.application.users.service import UserService
from user_service.domain.users.entities import User
from user_service.domain.users.errors import UserValidationError
from user_service.interfaces.rpc.errors import abort_with_error
from user_service.interfaces.rpc.messages import (
    CreateRequest,
    CreateResponse,
    DeleteRequest,
    EmptyResponse,
    GetByEmailAndPasswordRequest,
    GetByUUIDRequest,
    RpcUser,
    UpdateRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "user_service.v1.UserService"

M = TypeVar("M", bound=BaseModel)


def _decode(model: type[M], payload: bytes, context: grpc.ServicerContext) -> M:
    try:
        return model.model_validate_json(payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        message = f"{field}: {first['msg']}" if field else first["msg"]
        abort_with_error(context, UserValidationError(message))


def _encode(message: BaseModel) -> bytes:
    return message.model_dump_json().encode("utf-8")


def _user_response(user: User) -> bytes:
    return _encode(
        UserResponse(
            user=RpcUser(
                uuid=user.uuid, name=user.name, email=user.email, password=user.password
            )
        )
    )


def _or_unset(value: Optional[str]):
    return UNSET if value is None else value


class UserRpcServicer:
    """Unary handlers for ``user_service.v1.UserService``."""

    def __init__(self, service: UserService) -> None:
        self._service = service

    def Create(self, request: bytes, context: grpc.ServicerContext) -> bytes:
        logger.debug("Create user")
        message = _decode(CreateRequest, request, context)
        try:
            user_uuid = self._service.create(
                CreateUserDTO(
                    name=message.name,
                    email=message.email,
                    password=message.password,
                    repeated_password=message.repeated_password,
                )
            )
        except Exception as exc:
            abort_with_error(context, exc)
        return _encode(CreateResponse(uuid=user_uuid))

    def GetByUUID(self, request: bytes, context: grpc.ServicerContext) -> bytes:
        logger.debug("Get user by uuid")
        message = _decode(GetByUUIDRequest, request, context)
        try:
            user = self._service.get_by_uuid(message.uuid)
        except Exception as exc:
            abort_with_error(context, exc)
        return _user_response(user)

    def GetByEmailAndPassword(
        self, request: bytes, context: grpc.ServicerContext
    ) -> bytes:
        logger.debug("Get user by email and password")
        message = _decode(GetByEmailAndPasswordRequest, request, context)
        try:
            user = self._service.get_by_email_and_password(
                message.email, message.password
            )
        except Exception as exc:
            abort_with_error(context, exc)
        return _user_response(user)

    def Update(self, request: bytes, context: grpc.ServicerContext) -> bytes:
        logger.debug("Partially update user")
        message = _decode(UpdateRequest, request, context)
        try:
            self._service.update(
                UpdateUserDTO(
                    uuid=message.uuid,
                    password=message.password,
                    name=_or_unset(message.name),
                    email=_or_unset(message.email),
                    new_password=_or_unset(message.new_password),
                    repeated_new_password=_or_unset(message.repeated_new_password),
                )
            )
        except Exception as exc:
            abort_with_error(context, exc)
        return _encode(EmptyResponse())

    def Delete(self, request: bytes, context: grpc.ServicerContext) -> bytes:
        logger.debug("Delete user")
        message = _decode(DeleteRequest, request, context)
        try:
            self._service.delete(message.uuid)
        except Exception as exc:
            abort_with_error(context, exc)
        return _encode(EmptyResponse())


def build_generic_handler(servicer: UserRpcServicer) -> grpc.GenericRpcHandler:
    """Register every servicer method under the service name."""
    methods = ("Create", "GetByUUID", "GetByEmailAndPassword", "Update", "Delete")
    return grpc.method_handlers_generic_handler(
        SERVICE_NAME,
        {
            name: grpc.unary_unary_rpc_method_handler(getattr(servicer, name))
            for name in methods
        },
    )
