"""Todo model."""

from sqlalchemy import Boolean, Column, Integer, String, false, text
from sqlalchemy.orm import relationship

from todo_api.database import Base
from todo_api.models.mixins import SoftDeleteMixin, TimestampMixin


class Todo(Base, TimestampMixin, SoftDeleteMixin):
    """A task with optional soft deletion and any number of categories."""

    __tablename__ = "todos"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=False, default="", server_default="")
    completed = Column(Boolean, nullable=False, default=False, server_default=false(), index=True)
    priority = Column(Integer, nullable=False, default=2, server_default=text("2"), index=True)

    # Loaded with one IN query per batch of todos; links are written through TodoCategory
    categories = relationship(
        "Category",
        secondary="todos_categories",
        order_by="Category.name",
        lazy="selectin",
        viewonly=True,
    )
