"""
Shared fixtures for the users service tests.

The process-wide settings are pointed at in-memory storage before the
application package is imported, so importing ``user_service.main``
never needs a database.
"""

import os

os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("GRPC_ENABLED", "false")

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from user_service.application.users.dtos import CreateUserDTO  # noqa: E402
from user_service.application.users.service import UserService  # noqa: E402
from user_service.core.config import Settings  # noqa: E402
from user_service.infrastructure.users.bcrypt_hasher import (  # noqa: E402
    BcryptPasswordHasher,
)
from user_service.infrastructure.users.memory_repository import (  # noqa: E402
    InMemoryUserRepository,
)
from user_service.main import create_app  # noqa: E402

# Lowest bcrypt work factor keeps the suite fast.
TEST_HASH_ROUNDS = 4


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=TEST_HASH_ROUNDS)


@pytest.fixture
def repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def service(
    repository: InMemoryUserRepository, hasher: BcryptPasswordHasher
) -> UserService:
    return UserService(repository, hasher)


@pytest.fixture
def ann_dto() -> CreateUserDTO:
    return CreateUserDTO(
        name="Ann", email="ann@x.com", password="p1", repeated_password="p1"
    )


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        storage_backend="memory",
        grpc_enabled=False,
        rate_limit_enabled=False,
        password_hash_rounds=TEST_HASH_ROUNDS,
    )


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
