"""Request/response logging middleware for FastAPI."""

import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from backend.core.logging_config import get_logger

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with its status and duration.

    The request ID is taken from the incoming X-Request-ID header when the
    client sends one, otherwise generated, and echoed on the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())[:8]
        logger = get_logger(__name__, request_id=request_id)
        route = f"{request.method} {request.url.path}"

        start_time = time.perf_counter()
        logger.debug(
            f"Request started: {route}",
            extra={
                "extra_data": {
                    "query_params": dict(request.query_params),
                    "client_host": request.client.host if request.client else None,
                }
            },
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"Request failed: {route}",
                extra={"extra_data": {"duration_ms": round(duration_ms, 2), "error": str(e)}},
                exc_info=True,
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        log = logger.warning if response.status_code >= 400 else logger.info
        log(
            f"Request completed: {route} -> {response.status_code}",
            extra={
                "extra_data": {
                    "status_code": response.status_code,
                    "duration_ms": round(duration_ms, 2),
                }
            },
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
