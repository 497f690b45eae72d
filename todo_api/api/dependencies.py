"""FastAPI dependencies for services."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from todo_api.database import get_db
from todo_api.services.category_service import CategoryService
from todo_api.services.todo_service import TodoService


def get_todo_service(
    db: Annotated[Session, Depends(get_db)],
) -> TodoService:
    """Get todo service with dependencies."""
    return TodoService(db)


def get_category_service(
    db: Annotated[Session, Depends(get_db)],
) -> CategoryService:
    """Get category service with dependencies."""
    return CategoryService(db)
