"""
gRPC error mapping.

Translates exceptions into gRPC statuses through the shared taxonomy.
"""

import logging
from typing import NoReturn

import grpc

from user_service.shared.errors.taxonomy import ErrorKind, classify, status_for, to_envelope

logger = logging.getLogger(__name__)


def abort_with_error(context: grpc.ServicerContext, exc: BaseException) -> NoReturn:
    """Abort the RPC with the status matching ``exc``.

    The details carry the envelope message; internals are only logged.
    """
    kind = classify(exc)
    envelope = to_envelope(exc)
    if kind is ErrorKind.INTERNAL:
        logger.error(
            "RPC failed: %s (%s)", envelope.developer_message, type(exc).__name__
        )
    else:
        logger.warning("RPC rejected: %s", envelope.message)
    context.abort(status_for(exc).grpc_code, envelope.message)
    raise AssertionError("context.abort() must raise")
