"""
Pydantic models for gRPC request and response messages.

Each message mirrors a DTO. Identifiers and credentials used for lookups
must be non-empty; emptiness of create/update fields is checked by the
user service.
"""

from typing import Optional

from pydantic import BaseModel, Field


class RpcUser(BaseModel):
    uuid: str
    name: str
    email: str
    password: str


class CreateRequest(BaseModel):
    name: str
    email: str
    password: str
    repeated_password: str


class CreateResponse(BaseModel):
    uuid: str


class GetByUUIDRequest(BaseModel):
    uuid: str = Field(..., min_length=1)


class GetByEmailAndPasswordRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    user: RpcUser


class UpdateRequest(BaseModel):
    uuid: str = Field(..., min_length=1)
    password: str
    name: Optional[str] = None
    email: Optional[str] = None
    new_password: Optional[str] = None
    repeated_new_password: Optional[str] = None


class DeleteRequest(BaseModel):
    uuid: str = Field(..., min_length=1)


class EmptyResponse(BaseModel):
    pass
