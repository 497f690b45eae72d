"""Todo API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from todo_api.api.dependencies import get_todo_service
from todo_api.schemas.pagination import PagedResult
from todo_api.schemas.todo import (
    BatchRequest,
    TodoCreate,
    TodoCreated,
    TodoListResponse,
    TodoResponse,
    TodoUpdate,
)
from todo_api.services.todo_service import TodoService

router = APIRouter(prefix="/api/todos", tags=["todos"])

# Query values stay as text; TodoService does the coercion and range checks.


@router.get("", response_model=PagedResult[TodoResponse])
def get_todos(
    service: Annotated[TodoService, Depends(get_todo_service)],
    completed: str | None = Query(default=None, description="true/false/1/0"),
    priority: str | None = Query(default=None, description="1 (low) to 3 (high)"),
    category_id: str | None = Query(default=None, alias="categoryId"),
    page: str | None = Query(default=None, description="Enables pagination (default 1)"),
    limit: str | None = Query(default=None, description="Page size, 1 to 100 (default 10)"),
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: str | None = Query(default=None, alias="sortOrder"),
):
    """Get active todos, optionally filtered, sorted and paginated."""
    return service.list_todos(
        completed=completed,
        priority=priority,
        category_id=category_id,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.get("/deleted", response_model=PagedResult[TodoResponse])
def get_deleted_todos(
    service: Annotated[TodoService, Depends(get_todo_service)],
    page: str | None = None,
    limit: str | None = None,
):
    """Get soft-deleted todos, newest first."""
    return service.list_deleted_todos(page=page, limit=limit)


@router.get("/search", response_model=TodoListResponse)
def search_todos(
    service: Annotated[TodoService, Depends(get_todo_service)],
    q: str = Query(default="", description="Substring of title or description"),
):
    """Search active todos by title or description."""
    return TodoListResponse(data=service.search_todos(q))


@router.post("", response_model=TodoCreated, status_code=status.HTTP_201_CREATED)
def create_todo(
    todo_data: TodoCreate,
    service: Annotated[TodoService, Depends(get_todo_service)],
):
    """Create a new todo."""
    todo_id = service.create_todo(
        title=todo_data.title,
        description=todo_data.description,
        priority=todo_data.priority,
    )
    return TodoCreated(id=todo_id)


@router.delete("/batch", response_model=TodoListResponse)
def batch_delete_todos(
    batch: BatchRequest,
    service: Annotated[TodoService, Depends(get_todo_service)],
):
    """Permanently delete several todos. Fails without changes if any id is missing."""
    return TodoListResponse(data=service.batch_delete_todos(batch.ids))


@router.delete("/batch/soft", response_model=TodoListResponse)
def batch_soft_delete_todos(
    batch: BatchRequest,
    service: Annotated[TodoService, Depends(get_todo_service)],
):
    """Soft delete several todos. Fails without changes if any id is missing."""
    return TodoListResponse(data=service.batch_soft_delete_todos(batch.ids))


@router.put("/batch/soft/restore", response_model=TodoListResponse)
def batch_restore_todos(
    batch: BatchRequest,
    service: Annotated[TodoService, Depends(get_todo_service)],
):
    """Restore several soft-deleted todos. Fails without changes if any id is missing."""
    return TodoListResponse(data=service.batch_restore_todos(batch.ids))


@router.get("/{todo_id}", response_model=TodoResponse)
def get_todo(
    todo_id: int,
    service: Annotated[TodoService, Depends(get_todo_service)],
):
    """Get an active todo."""
    return service.get_todo(todo_id)


@router.put("/{todo_id}", response_model=TodoResponse)
def update_todo(
    todo_id: int,
    todo_data: TodoUpdate,
    service: Annotated[TodoService, Depends(get_todo_service)],
):
    """Update the fields present in the body."""
    return service.update_todo(todo_id, todo_data.model_dump(exclude_unset=True))


@router.delete("/{todo_id}", response_model=TodoResponse)
def delete_todo(
    todo_id: int,
    service: Annotated[TodoService, Depends(get_todo_service)],
):
    """Permanently delete a todo and return it."""
    return service.delete_todo(todo_id)


@router.post("/{todo_id}/categories/{category_id}", response_model=TodoResponse)
def add_category_to_todo(
    todo_id: int,
    category_id: int,
    service: Annotated[TodoService, Depends(get_todo_service)],
):
    """Tag a todo with a category."""
    return service.add_category_to_todo(todo_id, category_id)


@router.delete("/{todo_id}/categories/{category_id}", response_model=TodoResponse)
def remove_category_from_todo(
    todo_id: int,
    category_id: int,
    service: Annotated[TodoService, Depends(get_todo_service)],
):
    """Remove a category from a todo."""
    return service.remove_category_from_todo(todo_id, category_id)
