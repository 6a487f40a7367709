"""
Adapter: SQL user storage.

Implements the UserRepository port on a SQLAlchemy engine.
PostgreSQL in production; the statements stay portable so the same
adapter runs on SQLite.
"""

import logging
import uuid as uuid_lib
from typing import Any, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from user_service.domain.users.entities import INITIAL_VERSION, User
from user_service.domain.users.errors import UserNotFoundError, UserValidationError
from user_service.domain.users.ports import UserRepository

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
DUPLICATE_EMAIL_MESSAGE = "user with this email already exists"


def _to_user(row: Mapping[str, Any]) -> User:
    return User(
        uuid=str(row["id"]),
        name=row["name"],
        email=row["email"],
        password=row["password"],
        version=row["version"],
    )


def _normalize_uuid(value: str) -> str:
    """Return the canonical form of a UUID string.

    A malformed identifier can never match a row, so it is reported as
    not found instead of reaching the database.
    """
    try:
        return str(uuid_lib.UUID(value))
    except (ValueError, TypeError, AttributeError):
        raise UserNotFoundError() from None


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    if getattr(orig, "pgcode", None) == UNIQUE_VIOLATION:
        return True
    return "UNIQUE" in str(orig).upper()


class SqlUserRepository(UserRepository):
    """Persists users to the ``users`` table.

    Implements the UserRepository port defined in the domain layer.
    Each method checks out a connection for one statement only.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def create(self, user: User) -> str:
        """Insert a user with a freshly generated identifier.

        Raises:
            UserValidationError: The e-mail is already registered.
        """
        query = text(
            """
            INSERT INTO users (id, name, email, password, version)
            VALUES (:id, :name, :email, :password, :version)
            """
        )
        new_uuid = str(uuid_lib.uuid4())
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    query,
                    {
                        "id": new_uuid,
                        "name": user.name,
                        "email": user.email,
                        "password": user.password,
                        "version": INITIAL_VERSION,
                    },
                )
        except IntegrityError as exc:
            if _is_unique_violation(exc):
                logger.warning("Rejected duplicate email on create")
                raise UserValidationError(DUPLICATE_EMAIL_MESSAGE) from exc
            raise

        logger.debug("Inserted user id=%s.", new_uuid)
        return new_uuid

    def find_all(self) -> list[User]:
        query = text("SELECT id, name, email, password, version FROM users")
        with self._engine.connect() as conn:
            rows = conn.execute(query).mappings().all()
        return [_to_user(row) for row in rows]

    def find_by_uuid(self, uuid: str) -> User:
        query = text(
            """
            SELECT id, name, email, password, version
            FROM users
            WHERE id = :id
            """
        )
        with self._engine.connect() as conn:
            row = conn.execute(query, {"id": _normalize_uuid(uuid)}).mappings().first()
        if row is None:
            raise UserNotFoundError()
        return _to_user(row)

    def find_by_email(self, email: str) -> User:
        query = text(
            """
            SELECT id, name, email, password, version
            FROM users
            WHERE email = :email
            """
        )
        with self._engine.connect() as conn:
            row = conn.execute(query, {"email": email}).mappings().first()
        if row is None:
            raise UserNotFoundError()
        return _to_user(row)

    def update(self, user: User) -> int:
        """Overwrite a user if its stored version still matches.

        Raises:
            UserValidationError: The new e-mail belongs to another user.
        """
        query = text(
            """
            UPDATE users
            SET name = :name, email = :email, password = :password,
                version = version + 1
            WHERE id = :id AND version = :version
            """
        )
        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    query,
                    {
                        "id": _normalize_uuid(user.uuid),
                        "name": user.name,
                        "email": user.email,
                        "password": user.password,
                        "version": user.version,
                    },
                )
        except IntegrityError as exc:
            if _is_unique_violation(exc):
                logger.warning("Rejected duplicate email on update id=%s", user.uuid)
                raise UserValidationError(DUPLICATE_EMAIL_MESSAGE) from exc
            raise
        return result.rowcount

    def delete(self, uuid: str, version: Optional[int] = None) -> int:
        params: dict[str, Any] = {"id": _normalize_uuid(uuid)}
        if version is None:
            query = text("DELETE FROM users WHERE id = :id")
        else:
            query = text("DELETE FROM users WHERE id = :id AND version = :version")
            params["version"] = version
        with self._engine.begin() as conn:
            result = conn.execute(query, params)
        return result.rowcount
