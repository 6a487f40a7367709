"""Run the HTTP API (and the gRPC server, via the lifespan) with uvicorn."""

import uvicorn

from user_service.core.config import settings
from user_service.main import app


def main() -> None:
    uvicorn.run(app, host=settings.http_host, port=settings.http_port)


if __name__ == "__main__":
    main()
