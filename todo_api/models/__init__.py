"""SQLAlchemy models."""

from todo_api.models.category import Category
from todo_api.models.todo import Todo
from todo_api.models.todo_category import TodoCategory

__all__ = [
    "Todo",
    "Category",
    "TodoCategory",
]
