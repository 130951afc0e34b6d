"""
Todos API: Todo Store (In-Memory Resource Store)
=================================================

What:  The ordered collection of todo records and every operation on it.
How:   A plain list of Todo models, mutated in place. Ids come from a
       high-water mark so a deleted id is never handed out again.
Who:   One instance per application (app.state.store), injected into route
       handlers through `todos_api.dependencies.get_store`.
When:  Created at application assembly; lives until the process exits.

Operation summary:
    list_todos(user_id, limit)      → records in insertion order
    get(id)                         → record         | NotFoundError(+ids)
    create(title, completed, uid)   → record         | ValidationError
    replace(id, fields)             → (record, names) | NotFoundError
    update(id, fields)              → same as replace
    delete(id)                      → removed record | NotFoundError
    toggle(id)                      → record         | NotFoundError
    set_completed(id, completed)    → record         | NotFoundError

All operations are synchronous and finish without awaiting anything, so a
single event loop never interleaves two of them.

Field coercion (see todos_api.coercion):
    title      must be a string; stored trimmed
    completed  truthiness → bool
    userId     parse_int; unparsable → ValidationError
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from todos_api.coercion import parse_int, to_bool
from todos_api.exceptions import NotFoundError, ValidationError
from todos_api.models.todo import Todo, seed_todos

logger = logging.getLogger(__name__)

# Body keys that update/replace understand, in the order they are reported
UPDATABLE_FIELDS = ("title", "completed", "userId")


class TodoStore:
    """
    In-memory store of todo records.

    Records are kept in insertion order. Lookups are linear scans, which is
    fine for the handful of records a mock server holds.
    """

    def __init__(self, todos: Optional[Iterable[Todo]] = None):
        self._seed = list(todos) if todos is not None else None
        self._todos: List[Todo] = []
        self._last_id = 0
        self.reset()

    # ── Introspection ─────────────────────────────────────────────────────

    @property
    def count(self) -> int:
        return len(self._todos)

    def ids(self) -> List[int]:
        return [todo.id for todo in self._todos]

    def reset(self) -> None:
        """Restore the initial records (the seed data unless others were given)."""
        source = self._seed if self._seed is not None else seed_todos()
        self._todos = [todo.model_copy() for todo in source]
        self._last_id = max(self.ids(), default=0)

    # ── Reads ─────────────────────────────────────────────────────────────

    def list_todos(
        self,
        user_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Todo]:
        """
        Records in insertion order, optionally filtered and truncated.

        A user_id or limit of None or 0 means "no filter" / "no limit".
        A negative limit drops that many records from the end.
        """
        todos = self._todos
        if user_id:
            todos = [todo for todo in todos if todo.user_id == user_id]
        return list(todos[: limit or len(todos)])

    def get(self, todo_id: Optional[int]) -> Todo:
        todo = self._find(todo_id)
        if todo is None:
            raise NotFoundError(todo_id=todo_id, available_ids=self.ids())
        return todo

    # ── Mutations ─────────────────────────────────────────────────────────

    def create(self, title: Any, completed: Any = False, user_id: Any = 1) -> Todo:
        """
        Append a new record and return it.

        Raises:
            ValidationError: title missing, blank, or not a string;
                             user_id not parseable as an integer
        """
        if not title:
            raise ValidationError("Title is required", field="title")
        clean_title = self._clean_title(title)
        if not clean_title:
            raise ValidationError("Title is required", field="title")

        todo = Todo(
            user_id=self._clean_user_id(user_id),
            id=self._next_id(),
            title=clean_title,
            completed=to_bool(completed),
        )
        self._todos.append(todo)
        self._last_id = todo.id
        logger.info("Created todo %d for user %d: %r", todo.id, todo.user_id, todo.title)
        return todo

    def replace(self, todo_id: Optional[int], fields: Mapping[str, Any]) -> Tuple[Todo, List[str]]:
        """
        Apply the supplied fields to a record.

        Only keys present in `fields` are touched, so a PUT carrying a single
        field leaves the other two unchanged. All values are validated before
        the record is modified.

        Returns:
            The updated record and the names of the fields that were applied.
        """
        todo = self._require(todo_id)
        changes = self._coerce_fields(fields)
        for name, value in changes.items():
            setattr(todo, "user_id" if name == "userId" else name, value)

        applied = list(changes)
        logger.info("Updated todo %d: %s", todo.id, ", ".join(applied) or "no fields")
        return todo, applied

    def update(self, todo_id: Optional[int], fields: Mapping[str, Any]) -> Tuple[Todo, List[str]]:
        """Partial update; identical to replace()."""
        return self.replace(todo_id, fields)

    def delete(self, todo_id: Optional[int]) -> Todo:
        todo = self._require(todo_id)
        self._todos.remove(todo)
        logger.info("Deleted todo %d (%d remaining)", todo.id, len(self._todos))
        return todo

    def toggle(self, todo_id: Optional[int]) -> Todo:
        todo = self._require(todo_id)
        todo.completed = not todo.completed
        logger.info("Toggled todo %d to completed=%s", todo.id, todo.completed)
        return todo

    def set_completed(self, todo_id: Optional[int], completed: Any = True) -> Todo:
        todo = self._require(todo_id)
        todo.completed = to_bool(completed)
        logger.info("Set todo %d completed=%s", todo.id, todo.completed)
        return todo

    # ── Internals ─────────────────────────────────────────────────────────

    def _find(self, todo_id: Optional[int]) -> Optional[Todo]:
        if todo_id is None:
            return None
        return next((todo for todo in self._todos if todo.id == todo_id), None)

    def _require(self, todo_id: Optional[int]) -> Todo:
        """Like get(), but the NotFoundError omits the id directory."""
        todo = self._find(todo_id)
        if todo is None:
            raise NotFoundError(todo_id=todo_id)
        return todo

    def _next_id(self) -> int:
        return max(max(self.ids(), default=0), self._last_id) + 1

    def _coerce_fields(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        changes: Dict[str, Any] = {}
        for name in UPDATABLE_FIELDS:
            if name not in fields:
                continue
            value = fields[name]
            if name == "title":
                changes[name] = self._clean_title(value)
            elif name == "completed":
                changes[name] = to_bool(value)
            else:
                changes[name] = self._clean_user_id(value)
        return changes

    @staticmethod
    def _clean_title(value: Any) -> str:
        if not isinstance(value, str):
            raise ValidationError("Title must be a string", field="title")
        return value.strip()

    @staticmethod
    def _clean_user_id(value: Any) -> int:
        user_id = parse_int(value)
        if user_id is None:
            raise ValidationError("userId must be an integer", field="userId")
        return user_id
