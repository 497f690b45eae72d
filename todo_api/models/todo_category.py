"""Todo-category link model."""

from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint

from todo_api.database import Base


class TodoCategory(Base):
    """Many-to-many link between todos and categories."""

    __tablename__ = "todos_categories"
    __table_args__ = (UniqueConstraint("todo_id", "category_id", name="uq_todo_category"),)

    id = Column(Integer, primary_key=True, index=True)
    todo_id = Column(Integer, ForeignKey("todos.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True
    )
