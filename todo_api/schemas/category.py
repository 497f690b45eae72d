"""Category schemas."""

from pydantic import BaseModel, ConfigDict


class CategoryCreate(BaseModel):
    """Create a new category."""

    name: str
    color: str


class CategoryResponse(BaseModel):
    """Category response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    color: str


class CategoryDeleteResponse(BaseModel):
    """Whether a category row was removed."""

    data: bool
