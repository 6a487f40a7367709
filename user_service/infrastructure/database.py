"""
Database engine construction and startup checks.

Builds the SQLAlchemy engine from settings, waits for the database to
accept connections, and creates the users table when it is missing.
Connection retries happen here, at startup only; requests never retry.
"""

import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from tenacity import Retrying, before_sleep_log, stop_after_attempt, wait_fixed

from user_service.core.config import Settings

logger = logging.getLogger(__name__)

USERS_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS users (
    id VARCHAR(36) PRIMARY KEY,
    name TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE,
    password TEXT NOT NULL,
    version INTEGER NOT NULL DEFAULT 1
)
"""


def build_engine(settings: Settings) -> Engine:
    """Build a pooled SQLAlchemy engine for the users database.

    Every statement is bounded by ``query_timeout_seconds`` through the
    PostgreSQL ``statement_timeout`` option.
    """
    timeout_ms = int(settings.query_timeout_seconds * 1000)
    return create_engine(
        settings.get_postgres_dsn(),
        pool_pre_ping=True,
        hide_parameters=True,
        pool_size=settings.pool_size,
        pool_timeout=settings.pool_timeout_seconds,
        connect_args={"options": f"-c statement_timeout={timeout_ms}"},
    )


def wait_for_database(engine: Engine, attempts: int, delay_seconds: float) -> None:
    """Block until the database answers a trivial query.

    Raises:
        sqlalchemy.exc.OperationalError: If every attempt failed.
    """
    retrying = Retrying(
        stop=stop_after_attempt(attempts),
        wait=wait_fixed(delay_seconds),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    for attempt in retrying:
        with attempt:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
    logger.info("Database connection established.")


def ensure_users_table(engine: Engine) -> None:
    """Create the users table if it does not exist yet."""
    with engine.begin() as conn:
        conn.execute(text(USERS_TABLE_DDL))
