"""
Todos API: Status and Root Routes
==================================

What:  GET /status (diagnostics) and GET / (service banner).
How:   Both are derived from the store size, the process start time and the
       static endpoint directory below; neither mutates anything.
Who:   Developers poking the mock server by hand, and readiness probes.

The endpoint directory is also what the 404 fallback in main.py lists, so it
is the single description of the API surface.
"""

import logging
import time
from typing import Dict, List

from fastapi import APIRouter, Depends

from todos_api.dependencies import get_store
from todos_api.schemas.todo import RootResponse, StatusResponse
from todos_api.services.todo_store import TodoStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Status"])

# Track when the service started for uptime reporting
_start_time = time.monotonic()

ENDPOINTS: Dict[str, str] = {
    "GET /todos": "List all todos (query: limit, userId)",
    "POST /todos": "Create new todo (body: title, completed, userId)",
    "GET /todos/:id": "Get specific todo",
    "PUT /todos/:id": "Full update todo (body: title, completed, userId)",
    "PATCH /todos/:id": "Partial update todo (body: any field)",
    "DELETE /todos/:id": "Delete todo",
    "POST /todos/:id/toggle": "Toggle todo completion",
    "POST /todos/:id/complete": "Set todo completed status (body: completed)",
    "GET /status": "This status endpoint",
}

AVAILABLE_ENDPOINTS: List[str] = list(ENDPOINTS)


def uptime_seconds() -> float:
    return time.monotonic() - _start_time


@router.get(
    "/status",
    response_model=StatusResponse,
    summary="Service status",
    description="Record count, uptime and the directory of supported endpoints.",
)
async def status(store: TodoStore = Depends(get_store)) -> StatusResponse:
    return StatusResponse(
        uptime=uptime_seconds(),
        current_todos_count=store.count,
        endpoints=dict(ENDPOINTS),
    )


@router.get("/", response_model=RootResponse, summary="Service banner")
async def root(store: TodoStore = Depends(get_store)) -> RootResponse:
    return RootResponse(total_todos=store.count, endpoints=list(AVAILABLE_ENDPOINTS))
