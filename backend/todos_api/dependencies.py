"""
Todos API: Request Dependencies
================================

What:  FastAPI dependencies shared by the todo routes.
How:   `get_store` hands each handler the application's TodoStore;
       `read_body` turns the raw request body into a dict, the way a browser
       or curl client is likely to send it.
Who:   Injected with Depends() in routes/todos.py.

Body handling:
    application/json                   → parsed; must be a JSON object
    application/x-www-form-urlencoded  → form fields as strings
    anything else / empty              → {}

The parsed body is kept on request.state.body so the ValidationError handler
can echo it back as `received_body`.
"""

import json
import logging
from typing import Any, Dict

from fastapi import Request

from todos_api.exceptions import ValidationError
from todos_api.services.todo_store import TodoStore

logger = logging.getLogger("todos_api.access")


def _reject_constant(name: str) -> Any:
    """NaN and Infinity are accepted by the json module but are not JSON."""
    raise ValueError(f"Invalid JSON constant: {name}")


def get_store(request: Request) -> TodoStore:
    """The store owned by the running application."""
    return request.app.state.store


async def read_body(request: Request) -> Dict[str, Any]:
    """
    Parse the request body into a dict.

    Raises:
        ValidationError: body is declared JSON but is malformed or not an object
    """
    content_type = request.headers.get("content-type", "").lower()
    body: Any = {}

    if "application/x-www-form-urlencoded" in content_type:
        form = await request.form()
        body = dict(form)
    elif "json" in content_type:
        raw = await request.body()
        if raw.strip():
            try:
                body = json.loads(raw, parse_constant=_reject_constant)
            except ValueError:
                raise ValidationError(
                    "Request body is not valid JSON",
                    received_body=raw.decode("utf-8", errors="replace"),
                )

    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object", received_body=body)

    request.state.body = body
    if body:
        logger.info("Request body: %s", json.dumps(body, indent=2, default=str))
    return body
