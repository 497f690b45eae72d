"""Pagination schemas."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PageInfo(BaseModel):
    """Position of one page within a filtered result set."""

    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")


class PagedResult(BaseModel, Generic[T]):
    """Result of a listing; pagination is None when no page was requested."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[T] = Field(alias="data")
    pagination: PageInfo | None = None
