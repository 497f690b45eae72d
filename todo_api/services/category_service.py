"""Category service."""

import logging
from typing import Any

from sqlalchemy.orm import Session

from todo_api.database import transaction
from todo_api.exceptions import ValidationError
from todo_api.models.category import Category
from todo_api.schemas.category import CategoryResponse
from todo_api.services.validation import is_storable_id, parse_positive_int

logger = logging.getLogger(__name__)


class CategoryService:
    """Service for category-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_categories(self) -> list[CategoryResponse]:
        """Get all categories sorted by name."""
        categories = self.db.query(Category).order_by(Category.name.asc(), Category.id.asc()).all()
        return [CategoryResponse.model_validate(category) for category in categories]

    def create_category(self, name: Any, color: Any) -> CategoryResponse:
        """Create a category from a trimmed, non-empty name and color."""
        if not isinstance(name, str) or not isinstance(color, str):
            raise ValidationError("Name and color must be non-empty strings")
        normalized_name = name.strip()
        normalized_color = color.strip()
        if not normalized_name or not normalized_color:
            raise ValidationError("Name and color must be non-empty strings")

        category = Category(name=normalized_name, color=normalized_color)
        with transaction(self.db):
            self.db.add(category)
            self.db.flush()
            response = CategoryResponse.model_validate(category)

        logger.info(f"Category created: id={response.id} name={response.name!r}")
        return response

    def delete_category(self, category_id: Any) -> bool:
        """Delete a category; its todo links go with it. Returns False if it did not exist."""
        normalized_id = parse_positive_int(category_id)
        if not is_storable_id(normalized_id):
            return False

        with transaction(self.db):
            deleted = (
                self.db.query(Category)
                .filter(Category.id == normalized_id)
                .delete(synchronize_session=False)
            )

        if deleted:
            logger.info(f"Category deleted: id={normalized_id}")
        return deleted > 0
