"""
Todos API: Request ID Log Tagging
==================================

What:  Tags every log record emitted while handling a request with that
       request's id.
How:   RequestLoggingMiddleware assigns the id and stores it in
       `request_id_var`; `RequestIDLogFilter`, installed on the root handler
       by setup_logging(), copies it onto each record as `request_id`.
Who:   The access log, the TodoStore mutation log and the error handlers all
       pick the id up through the `%(request_id)s` format field, without
       passing it around.

Example:
    2024-01-15T12:00:00 [INFO] [a1b2c3d4] todos_api.services.todo_store: Created todo 6 ...

Records logged outside a request (startup banner, shutdown) carry "-".
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Optional

# Coroutine-local id of the request currently being handled
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def assign_request_id(supplied: Optional[str] = None) -> str:
    """
    Make `supplied` (an inbound X-Request-ID) or a fresh 8-char id current.

    Returns the id so the caller can echo it in the response.
    """
    rid = supplied or uuid.uuid4().hex[:8]
    request_id_var.set(rid)
    return rid


class RequestIDLogFilter(logging.Filter):
    """Adds `record.request_id`; never drops a record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("") or "-"
        return True
