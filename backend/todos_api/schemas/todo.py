"""
Todos API: Pydantic Request/Response Schemas
=============================================

What:  Pydantic models defining the JSON envelopes the API returns.
How:   FastAPI uses these as `response_model`s to serialize responses (by
       alias, so `user_id` goes out as `userId`) and to generate the
       OpenAPI documentation at /docs.
Who:   Route handlers build them; exception handlers in main.py build the
       error envelopes directly but the error models document them.

Every envelope that carries a `timestamp` fills it at construction time, so
the value reflects when the response was produced.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from todos_api.models.todo import Todo


def utc_timestamp() -> str:
    """Current UTC time as ISO 8601 with milliseconds, e.g. 2024-01-15T12:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ══════════════════════════════════════════════════════════════════════════
# Response Models: What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class TodoResponse(BaseModel):
    """
    Envelope for create and toggle.

    Returned by POST /todos (201) and POST /todos/{id}/toggle (200).
    """
    message: str = Field(description="Human-readable outcome")
    todo: Todo = Field(description="The record after the operation")
    timestamp: str = Field(default_factory=utc_timestamp, description="UTC ISO 8601")


class UpdatedFields(BaseModel):
    """Which body fields PUT applied, as a flag per field."""

    model_config = ConfigDict(populate_by_name=True)

    title: bool
    completed: bool
    user_id: bool = Field(alias="userId")


class TodoReplaceResponse(BaseModel):
    """Returned by PUT /todos/{id}."""
    message: str = Field(default="Todo updated successfully")
    updated_todo: Todo
    updated_fields: UpdatedFields
    timestamp: str = Field(default_factory=utc_timestamp)


class TodoPatchResponse(BaseModel):
    """
    Returned by PATCH /todos/{id}.

    Unlike PUT, `updated_fields` lists only the names that were applied, in
    the order title, completed, userId.
    """
    message: str = Field(default="Todo partially updated")
    todo: Todo
    updated_fields: List[str]
    timestamp: str = Field(default_factory=utc_timestamp)


class TodoDeleteResponse(BaseModel):
    """Returned by DELETE /todos/{id}."""
    message: str = Field(default="Todo deleted successfully")
    deleted_todo: Todo
    remaining_todos: int = Field(description="Store size after the removal")
    timestamp: str = Field(default_factory=utc_timestamp)


class TodoCompleteResponse(BaseModel):
    """Returned by POST /todos/{id}/complete."""
    message: str
    todo: Todo
    action: str = Field(description="'completed' or 'uncompleted'")
    timestamp: str = Field(default_factory=utc_timestamp)


class StatusResponse(BaseModel):
    """
    Diagnostics for GET /status.

    `endpoints` maps each supported route to a short description; it is the
    same directory the 404 fallback lists.
    """
    status: str = Field(default="online")
    uptime: float = Field(description="Seconds since the process started")
    timestamp: str = Field(default_factory=utc_timestamp)
    current_todos_count: int
    endpoints: Dict[str, str]


class RootResponse(BaseModel):
    """Service banner for GET /."""
    message: str = Field(default="Todos API Server")
    timestamp: str = Field(default_factory=utc_timestamp)
    total_todos: int
    endpoints: List[str]


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models: documented in OpenAPI, built by exception handlers
# ══════════════════════════════════════════════════════════════════════════


class NotFoundResponse(BaseModel):
    """404 for an unknown todo id. `available_ids` only appears on GET /todos/{id}."""
    error: str = Field(default="Todo not found")
    id: Optional[int] = Field(default=None, description="Requested id, null if unparsable")
    available_ids: Optional[List[int]] = None


class ValidationErrorResponse(BaseModel):
    """400 for a body the store rejected."""
    error: str
    received_body: Any = None


class EndpointNotFoundResponse(BaseModel):
    """404 for a route the server does not serve."""
    error: str = Field(default="Endpoint not found")
    requested_url: str
    method: str
    available_endpoints: List[str]


class ServerErrorResponse(BaseModel):
    """500 for any failure not covered above."""
    error: str = Field(default="Internal Server Error")
    message: str
    timestamp: str = Field(default_factory=utc_timestamp)
