"""
Todos API: Request Logging Middleware
======================================

What:  Assigns each request its id, logs it on arrival and logs its outcome
       on completion.
How:   On arrival: take X-Request-ID or generate one, then log method, path
       and any query parameters. On completion: status code and duration, at
       a level chosen by status class, and echo the id in X-Request-ID.
       Request bodies are logged by the `read_body` dependency, once parsed.
Who:   Applied to every request via Starlette middleware.

Example output:
    2024-01-15T12:00:00 [INFO] [a1b2c3d4] todos_api.access: POST /todos
    2024-01-15T12:00:00 [INFO] [a1b2c3d4] todos_api.access: Request body: {"title": "x"}
    2024-01-15T12:00:00 [INFO] [a1b2c3d4] todos_api.services.todo_store: Created todo 6 for user 1: 'x'
    2024-01-15T12:00:00 [INFO] [a1b2c3d4] todos_api.access: POST /todos 201 1.3ms from 127.0.0.1

The mock server exists to show a developer what their client is sending, so
unlike a production API it does log payloads.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from todos_api.middleware.request_id import assign_request_id

logger = logging.getLogger("todos_api.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, query, status and duration for each request.

    Level by status:
        5xx → ERROR
        4xx → WARNING
        2xx/3xx → INFO
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        rid = assign_request_id(request.headers.get("X-Request-ID"))

        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path

        logger.info("%s %s", method, path)
        if request.query_params:
            logger.info("Query params: %s", dict(request.query_params))

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms from %s",
            method,
            path,
            status,
            duration_ms,
            client_ip,
            extra={
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        response.headers["X-Request-ID"] = rid
        return response
