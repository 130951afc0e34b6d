"""
Todos API: Todo Route Handlers
===============================

What:  The /todos resource: list, read, create, replace, patch, delete,
       toggle and complete.
How:   Each handler parses its path/query values, reads the body through the
       `read_body` dependency, calls exactly one TodoStore operation and wraps
       the result in a response envelope.
Who:   Called by front-ends and test suites that need a throwaway todo API.

Error responses are never built here. TodoStore raises NotFoundError or
ValidationError and the handlers registered in main.py format them.

Path ids are declared as strings and parsed with `parse_int`, so /todos/abc
is a 404 for id null rather than FastAPI's 422.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from todos_api.coercion import parse_int
from todos_api.dependencies import get_store, read_body
from todos_api.models.todo import Todo
from todos_api.schemas.todo import (
    NotFoundResponse,
    TodoCompleteResponse,
    TodoDeleteResponse,
    TodoPatchResponse,
    TodoReplaceResponse,
    TodoResponse,
    UpdatedFields,
    ValidationErrorResponse,
)
from todos_api.services.todo_store import TodoStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Todos"])

NOT_FOUND = {404: {"description": "Todo not found", "model": NotFoundResponse}}
BAD_BODY = {400: {"description": "Invalid request body", "model": ValidationErrorResponse}}


@router.get(
    "/todos",
    response_model=List[Todo],
    summary="List todos",
    description="All todos in insertion order, optionally filtered by userId and truncated to limit.",
)
async def list_todos(
    limit: Optional[str] = Query(default=None, description="Maximum number of todos to return"),
    user_id: Optional[str] = Query(default=None, alias="userId", description="Only todos owned by this user"),
    store: TodoStore = Depends(get_store),
) -> List[Todo]:
    return store.list_todos(user_id=parse_int(user_id), limit=parse_int(limit))


@router.get(
    "/todos/{todo_id}",
    response_model=Todo,
    responses=NOT_FOUND,
    summary="Get a single todo",
)
async def get_todo(todo_id: str, store: TodoStore = Depends(get_store)) -> Todo:
    """
    Look up one todo.

    The 404 body for this route also carries `available_ids`, the ids
    currently in the store, so a client can see what it could have asked for.
    """
    return store.get(parse_int(todo_id))


@router.post(
    "/todos",
    status_code=201,
    response_model=TodoResponse,
    responses=BAD_BODY,
    summary="Create a todo",
    description="Body: title (required), completed (default false), userId (default 1).",
)
async def create_todo(
    body: Dict[str, Any] = Depends(read_body),
    store: TodoStore = Depends(get_store),
) -> TodoResponse:
    todo = store.create(
        title=body.get("title"),
        completed=body.get("completed", False),
        user_id=body.get("userId", 1),
    )
    return TodoResponse(message="Todo created successfully", todo=todo)


@router.put(
    "/todos/{todo_id}",
    response_model=TodoReplaceResponse,
    responses={**NOT_FOUND, **BAD_BODY},
    summary="Update a todo",
    description=(
        "Applies whichever of title, completed and userId the body contains. "
        "Fields that are absent are left as they are."
    ),
)
async def replace_todo(
    todo_id: str,
    body: Dict[str, Any] = Depends(read_body),
    store: TodoStore = Depends(get_store),
) -> TodoReplaceResponse:
    todo, applied = store.replace(parse_int(todo_id), body)
    return TodoReplaceResponse(
        updated_todo=todo,
        updated_fields=UpdatedFields(
            title="title" in applied,
            completed="completed" in applied,
            user_id="userId" in applied,
        ),
    )


@router.patch(
    "/todos/{todo_id}",
    response_model=TodoPatchResponse,
    responses={**NOT_FOUND, **BAD_BODY},
    summary="Partially update a todo",
)
async def patch_todo(
    todo_id: str,
    body: Dict[str, Any] = Depends(read_body),
    store: TodoStore = Depends(get_store),
) -> TodoPatchResponse:
    todo, applied = store.update(parse_int(todo_id), body)
    return TodoPatchResponse(todo=todo, updated_fields=applied)


@router.delete(
    "/todos/{todo_id}",
    response_model=TodoDeleteResponse,
    responses=NOT_FOUND,
    summary="Delete a todo",
)
async def delete_todo(todo_id: str, store: TodoStore = Depends(get_store)) -> TodoDeleteResponse:
    todo = store.delete(parse_int(todo_id))
    return TodoDeleteResponse(deleted_todo=todo, remaining_todos=store.count)


@router.post(
    "/todos/{todo_id}/toggle",
    response_model=TodoResponse,
    responses=NOT_FOUND,
    summary="Flip a todo's completed flag",
)
async def toggle_todo(todo_id: str, store: TodoStore = Depends(get_store)) -> TodoResponse:
    todo = store.toggle(parse_int(todo_id))
    message = "Todo completed" if todo.completed else "Todo uncompleted"
    return TodoResponse(message=message, todo=todo)


@router.post(
    "/todos/{todo_id}/complete",
    response_model=TodoCompleteResponse,
    responses=NOT_FOUND,
    summary="Set a todo's completed flag",
    description="Body: completed (default true).",
)
async def complete_todo(
    todo_id: str,
    body: Dict[str, Any] = Depends(read_body),
    store: TodoStore = Depends(get_store),
) -> TodoCompleteResponse:
    todo = store.set_completed(parse_int(todo_id), body.get("completed", True))
    state = "completed" if todo.completed else "incomplete"
    return TodoCompleteResponse(
        message=f"Todo marked as {state}",
        todo=todo,
        action="completed" if todo.completed else "uncompleted",
    )
