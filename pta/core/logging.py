"""Logging setup and request logging middleware."""

import logging
import sys
import time
import uuid
from collections.abc import Callable
from pathlib import Path

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from pta.core.config import settings


def setup_logging() -> logging.Logger:
    """Configure application logging."""
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_FILE:
        Path(settings.LOG_FILE).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.LOG_FILE))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )

    # Noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logger = logging.getLogger("pta")
    logger.setLevel(log_level)
    return logger


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with its duration and tag the response with a request id."""

    def __init__(self, app):
        super().__init__(app)
        self.logger = logging.getLogger("pta.request")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.perf_counter()

        session = getattr(request.state, "session", None)
        user_id = session.user_id if session else None
        self.logger.info(
            "Request started: %s %s [user_id: %s] [request_id: %s]",
            request.method,
            request.url.path,
            user_id,
            request_id,
        )

        response = await call_next(request)

        duration = time.perf_counter() - start_time
        self.logger.info(
            "Request completed: %s %s [status: %s] [duration: %.3fs] [request_id: %s]",
            request.method,
            request.url.path,
            response.status_code,
            duration,
            request_id,
        )
        response.headers["X-Request-ID"] = request_id
        return response
