"""
Application configuration.

Loads settings from environment variables and .env file.
A single Settings instance is built at process start and handed to
create_app(), which passes the relevant values to each component.
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode (exposes /docs). Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        http_host: Bind address for the HTTP server.
        http_port: Bind port for the HTTP server.
        grpc_enabled: Start the gRPC server alongside the HTTP API.
        grpc_host: Bind address for the gRPC server.
        grpc_port: Bind port for the gRPC server.
        storage_backend: "postgres" for production, "memory" for local runs.
        query_timeout_seconds: Upper bound for a single storage statement.
        password_hash_rounds: bcrypt work factor (4-31).
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "Users Service"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    http_host: str = "0.0.0.0"
    http_port: int = 8080
    cors_allowed_origins: list[str] = Field(default_factory=lambda: ["*"])
    cors_allowed_methods: list[str] = Field(
        default_factory=lambda: ["GET", "POST", "PATCH", "DELETE"]
    )

    grpc_enabled: bool = True
    grpc_host: str = "0.0.0.0"
    grpc_port: int = 50051
    grpc_max_workers: int = 10
    grpc_shutdown_grace_seconds: float = 5.0

    rate_limit_enabled: bool = True

    storage_backend: Literal["postgres", "memory"] = "postgres"
    postgres_dsn: Optional[str] = None
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "users"
    pool_size: int = 10
    pool_timeout_seconds: float = 5.0
    query_timeout_seconds: float = 5.0
    connection_attempts: int = 5
    connection_retry_delay_seconds: float = 5.0

    password_hash_rounds: int = Field(default=12, ge=4, le=31)

    def get_postgres_dsn(self) -> str:
        """Return the effective DSN for the users database.

        Priority:
        1. Explicit `POSTGRES_DSN`.
        2. Build DSN from postgres_* values. Credentials are omitted when
           both user and password are empty.
        """
        if self.postgres_dsn:
            return self.postgres_dsn
        if not self.postgres_user and not self.postgres_password:
            return (
                f"postgresql://{self.postgres_host}:{self.postgres_port}/"
                f"{self.postgres_db}"
            )
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}@"
            f"{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


settings = Settings()
