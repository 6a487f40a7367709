"""
Tests for the SQL user repository.

Runs the adapter against an in-memory SQLite engine; the statements are
the same ones issued against PostgreSQL.
"""

import uuid as uuid_lib
from dataclasses import replace
from typing import Iterator
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

from user_service.domain.users.entities import User
from user_service.domain.users.errors import UserNotFoundError, UserValidationError
from user_service.infrastructure.database import ensure_users_table, wait_for_database
from user_service.infrastructure.users.sql_repository import SqlUserRepository


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    ensure_users_table(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_repository(engine: Engine) -> SqlUserRepository:
    return SqlUserRepository(engine)


def _user(email: str = "ann@x.com", name: str = "Ann") -> User:
    return User(uuid="", name=name, email=email, password="$2b$04$digest")


class TestSqlUserRepository:
    """Tests for the SQL adapter."""

    def test_create_assigns_uuid(self, sql_repository: SqlUserRepository) -> None:
        new_uuid = sql_repository.create(_user())
        assert str(uuid_lib.UUID(new_uuid)) == new_uuid

        stored = sql_repository.find_by_uuid(new_uuid)
        assert stored.email == "ann@x.com"
        assert stored.version == 1

    def test_duplicate_email_rejected(self, sql_repository: SqlUserRepository) -> None:
        sql_repository.create(_user())
        with pytest.raises(UserValidationError, match="already exists"):
            sql_repository.create(_user(name="Other"))

    def test_find_all(self, sql_repository: SqlUserRepository) -> None:
        sql_repository.create(_user("a@x.com"))
        sql_repository.create(_user("b@x.com"))
        emails = sorted(u.email for u in sql_repository.find_all())
        assert emails == ["a@x.com", "b@x.com"]

    def test_find_by_email(self, sql_repository: SqlUserRepository) -> None:
        new_uuid = sql_repository.create(_user())
        assert sql_repository.find_by_email("ann@x.com").uuid == new_uuid
        with pytest.raises(UserNotFoundError):
            sql_repository.find_by_email("nobody@x.com")

    def test_unknown_uuid_not_found(self, sql_repository: SqlUserRepository) -> None:
        with pytest.raises(UserNotFoundError):
            sql_repository.find_by_uuid(str(uuid_lib.uuid4()))

    def test_malformed_uuid_not_found(self, sql_repository: SqlUserRepository) -> None:
        with pytest.raises(UserNotFoundError):
            sql_repository.find_by_uuid("not-a-uuid")
        with pytest.raises(UserNotFoundError):
            sql_repository.delete("not-a-uuid")

    def test_update_bumps_version(self, sql_repository: SqlUserRepository) -> None:
        new_uuid = sql_repository.create(_user())
        stored = sql_repository.find_by_uuid(new_uuid)

        assert sql_repository.update(replace(stored, name="Bob")) == 1

        updated = sql_repository.find_by_uuid(new_uuid)
        assert updated.name == "Bob"
        assert updated.version == stored.version + 1

    def test_update_with_stale_version_affects_nothing(
        self, sql_repository: SqlUserRepository
    ) -> None:
        new_uuid = sql_repository.create(_user())
        stale = sql_repository.find_by_uuid(new_uuid)
        sql_repository.update(replace(stale, name="Bob"))

        assert sql_repository.update(replace(stale, name="Carol")) == 0
        assert sql_repository.find_by_uuid(new_uuid).name == "Bob"

    def test_update_to_taken_email_rejected(
        self, sql_repository: SqlUserRepository
    ) -> None:
        sql_repository.create(_user("a@x.com"))
        other = sql_repository.find_by_uuid(sql_repository.create(_user("b@x.com")))
        with pytest.raises(UserValidationError):
            sql_repository.update(replace(other, email="a@x.com"))

    def test_delete(self, sql_repository: SqlUserRepository) -> None:
        new_uuid = sql_repository.create(_user())
        assert sql_repository.delete(new_uuid, version=1) == 1
        assert sql_repository.delete(new_uuid) == 0

    def test_delete_with_stale_version_affects_nothing(
        self, sql_repository: SqlUserRepository
    ) -> None:
        new_uuid = sql_repository.create(_user())
        assert sql_repository.delete(new_uuid, version=7) == 0
        assert sql_repository.find_by_uuid(new_uuid).uuid == new_uuid


class TestWaitForDatabase:
    """Tests for the startup connection retry."""

    def test_succeeds_on_reachable_database(self, engine: Engine) -> None:
        wait_for_database(engine, attempts=1, delay_seconds=0)

    def test_retries_until_connected(self) -> None:
        failing = MagicMock()
        failing.connect.side_effect = [
            OperationalError("SELECT 1", {}, Exception("refused")),
            MagicMock(),
        ]
        wait_for_database(failing, attempts=3, delay_seconds=0)
        assert failing.connect.call_count == 2

    def test_gives_up_after_attempts(self) -> None:
        failing = MagicMock()
        failing.connect.side_effect = OperationalError(
            "SELECT 1", {}, Exception("refused")
        )
        with pytest.raises(OperationalError):
            wait_for_database(failing, attempts=2, delay_seconds=0)
        assert failing.connect.call_count == 2
