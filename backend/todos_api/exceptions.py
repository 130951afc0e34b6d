"""
Todos API: Custom Exception Hierarchy
======================================

What:  Application-specific exceptions for the two recoverable failure modes.
How:   Each exception carries a message and optional context dict. Global
       exception handlers (registered in main.py) catch these and return the
       structured JSON error bodies clients of the mock API expect.
Who:   Raised by the TodoStore and the request-body dependency.
When:  During request processing, never at import or startup.

Exception Hierarchy:
    TodosApiError (base)
    ├── ValidationError   → 400 Bad Request  {error, received_body}
    └── NotFoundError     → 404 Not Found    {error, id[, available_ids]}

Anything else that escapes a handler is an internal error and is turned into
a 500 response by the catch-all handler in main.py.
"""

from typing import Any, Dict, List, Optional


class TodosApiError(Exception):
    """
    Base exception for all Todos API errors.

    Attributes:
        message:  Client-facing error description (returned as `error`)
        context:  Additional debug info (logged, not returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TodosApiError):
    """
    Raised when the request body cannot be turned into a valid todo change.

    When:    Missing or blank title on create, a title that is not a string,
             a userId that is not an integer, or a body that is not a JSON
             object.
    HTTP:    400 Bad Request

    `received_body` is echoed back to the client. When the raiser does not
    know the body (the store only sees individual fields), the handler falls
    back to the body parsed for the current request.

    Example response:
        {
            "error": "Title is required",
            "received_body": {"completed": true}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        received_body: Any = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field
        self.received_body = received_body


class NotFoundError(TodosApiError):
    """
    Raised when no stored todo matches the requested id.

    HTTP:    404 Not Found

    `todo_id` is None when the path segment could not be parsed as an
    integer; it is reported to the client as `null`. `available_ids` is only
    populated by plain lookups (GET /todos/{id}).
    """

    def __init__(
        self,
        todo_id: Optional[int] = None,
        available_ids: Optional[List[int]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["todo_id"] = todo_id
        super().__init__(message="Todo not found", context=ctx)
        self.todo_id = todo_id
        self.available_ids = available_ids
