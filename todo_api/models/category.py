"""Category model."""

from sqlalchemy import Column, Integer, String

from todo_api.database import Base


class Category(Base):
    """Category model for tagging todos."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    color = Column(String(50), nullable=False)
