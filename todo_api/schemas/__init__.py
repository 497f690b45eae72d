"""Pydantic schemas for API requests and responses."""

from todo_api.schemas.category import CategoryCreate, CategoryDeleteResponse, CategoryResponse
from todo_api.schemas.pagination import PageInfo, PagedResult
from todo_api.schemas.todo import (
    BatchRequest,
    TodoCreate,
    TodoCreated,
    TodoListResponse,
    TodoResponse,
    TodoUpdate,
)

__all__ = [
    "CategoryCreate",
    "CategoryResponse",
    "CategoryDeleteResponse",
    "PageInfo",
    "PagedResult",
    "TodoCreate",
    "TodoUpdate",
    "TodoCreated",
    "TodoResponse",
    "TodoListResponse",
    "BatchRequest",
]
