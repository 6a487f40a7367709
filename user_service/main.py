"""
Application entry point.

Creates the FastAPI application and wires together:
- Storage adapter and password codec
- The user service shared by both transports
- Routers and the gRPC server
- Error handlers (centralized domain-to-transport mapping)
- Security middleware (headers, CORS, rate limiting)
- Logging configuration

No business logic belongs here.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from sqlalchemy.engine import Engine

from user_service.application.users.service import UserService
from user_service.core.config import Settings, settings
from user_service.domain.users.ports import UserRepository
from user_service.infrastructure.database import (
    build_engine,
    ensure_users_table,
    wait_for_database,
)
from user_service.infrastructure.users.bcrypt_hasher import BcryptPasswordHasher
from user_service.infrastructure.users.memory_repository import InMemoryUserRepository
from user_service.infrastructure.users.sql_repository import SqlUserRepository
from user_service.interfaces.health import router as health_router
from user_service.interfaces.rpc.server import RpcServer
from user_service.interfaces.users.router import router as users_router
from user_service.shared.errors.handlers import register_error_handlers
from user_service.shared.logging import configure_logging
from user_service.shared.security.headers import SecurityHeadersMiddleware
from user_service.shared.security.rate_limiting import (
    limiter,
    rate_limit_exceeded_handler,
)

logger = logging.getLogger(__name__)


def _build_storage(app_settings: Settings) -> tuple[UserRepository, Optional[Engine]]:
    """Build the repository selected by ``storage_backend``."""
    if app_settings.storage_backend == "memory":
        logger.warning("Using in-memory storage; data is lost on restart.")
        return InMemoryUserRepository(), None
    engine = build_engine(app_settings)
    return SqlUserRepository(engine), engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: prepare storage, start/stop the gRPC server."""
    app_settings: Settings = app.state.settings
    engine: Optional[Engine] = app.state.engine

    if engine is not None:
        logger.info("Storage initializing")
        await asyncio.to_thread(
            wait_for_database,
            engine,
            attempts=app_settings.connection_attempts,
            delay_seconds=app_settings.connection_retry_delay_seconds,
        )
        await asyncio.to_thread(ensure_users_table, engine)

    rpc_server: Optional[RpcServer] = None
    if app_settings.grpc_enabled:
        rpc_server = RpcServer(
            app.state.user_service,
            host=app_settings.grpc_host,
            port=app_settings.grpc_port,
            max_workers=app_settings.grpc_max_workers,
        )
        rpc_server.start()

    yield

    # Shutdown
    if rpc_server is not None:
        await asyncio.to_thread(
            rpc_server.stop, app_settings.grpc_shutdown_grace_seconds
        )
    if engine is not None:
        engine.dispose()
    logger.info("Shutdown complete")


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the composition root of the application: the settings
    object is read here and passed on to each component.

    Args:
        app_settings: Settings to use. Defaults to the process settings.

    Returns:
        A fully configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    configure_logging(level=app_settings.log_level)

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.version,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        lifespan=lifespan,
    )

    repository, engine = _build_storage(app_settings)
    hasher = BcryptPasswordHasher(rounds=app_settings.password_hash_rounds)
    app.state.settings = app_settings
    app.state.engine = engine
    app.state.user_service = UserService(repository, hasher)

    # --- Rate Limiting ---
    # Each request is checked against its own app's rate_limit_enabled.
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_allowed_origins,
        allow_methods=app_settings.cors_allowed_methods,
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["Location"],
    )

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router)
    app.include_router(users_router)

    return app


app = create_app()
