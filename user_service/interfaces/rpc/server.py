"""
gRPC server construction and lifecycle.

The server runs on its own thread pool next to the HTTP server and is
started and stopped by the application lifespan.
"""

import logging
from concurrent import futures

import grpc

from user_service.application.users.service import UserService
from user_service.interfaces.rpc.servicer import UserRpcServicer, build_generic_handler

logger = logging.getLogger(__name__)


class RpcServer:
    """Owns a grpc.Server exposing the user service."""

    def __init__(
        self,
        service: UserService,
        host: str,
        port: int,
        max_workers: int = 10,
    ) -> None:
        self._server = grpc.server(futures.ThreadPoolExecutor(max_workers=max_workers))
        self._server.add_generic_rpc_handlers(
            (build_generic_handler(UserRpcServicer(service)),)
        )
        self.port = self._server.add_insecure_port(f"{host}:{port}")
        self._host = host

    def start(self) -> None:
        self._server.start()
        logger.info("gRPC server listening on %s:%d", self._host, self.port)

    def stop(self, grace_seconds: float) -> None:
        """Stop accepting RPCs and wait for in-flight ones to finish."""
        self._server.stop(grace_seconds).wait()
        logger.info("gRPC server stopped")
