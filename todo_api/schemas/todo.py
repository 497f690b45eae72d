"""Todo schemas.

Request bodies are deliberately loose: the service layer trims, coerces and
bounds-checks every field, so values like ``"true"`` for ``completed`` or
``"3"`` for ``priority`` must reach it untouched.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from todo_api.schemas.category import CategoryResponse


class TodoCreate(BaseModel):
    """Create a new todo."""

    title: str | None = None
    description: str | None = None
    priority: int | str | None = None


class TodoUpdate(BaseModel):
    """Partially update a todo. Only fields present in the body are applied."""

    title: str | None = None
    description: str | None = None
    completed: bool | int | str | None = None
    priority: int | str | None = None


class TodoCreated(BaseModel):
    """Id of a newly created todo."""

    id: int


class BatchRequest(BaseModel):
    """Ids for a batch operation."""

    ids: list[Any]


class TodoResponse(BaseModel):
    """Todo response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    completed: bool
    priority: int
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None
    categories: list[CategoryResponse] = Field(default_factory=list)


class TodoListResponse(BaseModel):
    """Unpaginated list of todos."""

    data: list[TodoResponse]
