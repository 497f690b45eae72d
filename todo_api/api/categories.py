"""Category API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from todo_api.api.dependencies import get_category_service
from todo_api.schemas.category import CategoryCreate, CategoryDeleteResponse, CategoryResponse
from todo_api.services.category_service import CategoryService

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
def get_categories(
    service: Annotated[CategoryService, Depends(get_category_service)],
):
    """Get all categories sorted by name."""
    return service.list_categories()


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_data: CategoryCreate,
    service: Annotated[CategoryService, Depends(get_category_service)],
):
    """Create a new category."""
    return service.create_category(category_data.name, category_data.color)


@router.delete("/{category_id}", response_model=CategoryDeleteResponse)
def delete_category(
    category_id: int,
    service: Annotated[CategoryService, Depends(get_category_service)],
):
    """Delete a category. Todos keep existing; only their links are removed."""
    return CategoryDeleteResponse(data=service.delete_category(category_id))
