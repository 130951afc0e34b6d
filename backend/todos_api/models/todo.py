"""
Todos API: Todo Record Model
=============================

What:  The single entity the server stores, plus the seed data it starts with.
How:   A mutable Pydantic model. The store mutates instances in place, and the
       same instances are serialized straight into responses.

Wire format (camelCase, field order preserved):
    {"userId": 1, "id": 1, "title": "delectus aut autem", "completed": false}
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Todo(BaseModel):
    """
    A todo record.

    Invariants (enforced by TodoStore, not by the model):
        - id is unique within a store and never reused
        - title is trimmed, and non-empty when the record is created
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId", description="Owning user")
    id: int = Field(description="Store-assigned identifier")
    title: str = Field(description="What needs doing")
    completed: bool = Field(default=False, description="Whether it is done")


def seed_todos() -> List[Todo]:
    """Fresh copies of the records every new store starts with."""
    return [
        Todo(user_id=1, id=1, title="delectus aut autem", completed=False),
        Todo(user_id=1, id=2, title="quis ut nam facilis", completed=True),
        Todo(user_id=1, id=3, title="fugiat veniam minus", completed=False),
        Todo(user_id=1, id=4, title="et porro tempora", completed=True),
        Todo(user_id=2, id=5, title="laboriosam mollitia", completed=False),
    ]
