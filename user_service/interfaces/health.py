"""
Health check router.

Provides liveness endpoints for probes and load balancers.
No business logic.
"""

from fastapi import APIRouter, Request, Response, status

from user_service.interfaces.users.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status and version.",
)
def health_check(request: Request) -> HealthResponse:
    """Return current application health status."""
    return HealthResponse(status="ok", version=request.app.version)


@router.get(
    "/heartbeat",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Heartbeat",
)
def heartbeat() -> Response:
    """Answer with an empty 204 while the server is up."""
    return Response(status_code=status.HTTP_204_NO_CONTENT)
