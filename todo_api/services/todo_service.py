"""Todo service: filtering, single-row CRUD, batch operations and categories."""

import logging
import math
from collections.abc import Callable
from typing import Any

from sqlalchemy import false, func, or_
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Query, Session

from todo_api.database import transaction
from todo_api.exceptions import NotFoundError, ValidationError
from todo_api.models.category import Category
from todo_api.models.todo import Todo
from todo_api.models.todo_category import TodoCategory
from todo_api.schemas.pagination import PageInfo, PagedResult
from todo_api.schemas.todo import TodoResponse
from todo_api.services.validation import (
    is_blank,
    is_storable_id,
    normalize_description,
    normalize_ids,
    normalize_pagination,
    normalize_sort,
    normalize_title,
    parse_bool,
    parse_positive_int,
    parse_priority,
)

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "title": Todo.title,
    "created_at": Todo.created_at,
    "priority": Todo.priority,
    "completed": Todo.completed,
}

# Dialects with INSERT ... ON CONFLICT DO NOTHING
UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the query matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class TodoService:
    """Service for todo-related operations."""

    def __init__(self, db: Session):
        self.db = db

    # Listing

    def list_todos(
        self,
        completed: Any = None,
        priority: Any = None,
        category_id: Any = None,
        page: Any = None,
        limit: Any = None,
        sort_by: Any = None,
        sort_order: Any = None,
    ) -> PagedResult[TodoResponse]:
        """List active todos matching every supplied filter.

        When category_id is given the link table is inner-joined, so only todos
        tagged with that category remain. The count query is derived from the
        same Query object and therefore always shares its joins.
        """
        query = self.db.query(Todo).filter(Todo.active())

        if not is_blank(completed):
            query = query.filter(Todo.completed.is_(parse_bool(completed)))

        normalized_priority = parse_priority(priority, default=None)
        if normalized_priority is not None:
            query = query.filter(Todo.priority == normalized_priority)

        if not is_blank(category_id):
            normalized_category_id = parse_positive_int(category_id, "categoryId")
            if is_storable_id(normalized_category_id):
                query = query.join(TodoCategory, TodoCategory.todo_id == Todo.id).filter(
                    TodoCategory.category_id == normalized_category_id
                )
            else:
                query = query.filter(false())

        field, order = normalize_sort(sort_by, sort_order)
        column = SORT_COLUMNS[field]
        if order == "asc":
            order_by = [column.asc(), Todo.id.asc()]
        else:
            order_by = [column.desc(), Todo.id.desc()]

        return self._page(query, order_by, normalize_pagination(page, limit))

    def list_deleted_todos(self, page: Any = None, limit: Any = None) -> PagedResult[TodoResponse]:
        """List soft-deleted todos, newest first."""
        query = self.db.query(Todo).filter(Todo.deleted_at.is_not(None))
        order_by = [Todo.created_at.desc(), Todo.id.desc()]
        return self._page(query, order_by, normalize_pagination(page, limit))

    def _page(
        self,
        query: Query,
        order_by: list,
        pagination: tuple[int, int] | None,
    ) -> PagedResult[TodoResponse]:
        ordered = query.order_by(*order_by)
        if pagination is None:
            return PagedResult[TodoResponse](items=self._to_responses(ordered.all()))

        page, limit = pagination
        total = query.count()
        rows = ordered.limit(limit).offset((page - 1) * limit).all()
        return PagedResult[TodoResponse](
            items=self._to_responses(rows),
            pagination=PageInfo(
                page=page,
                limit=limit,
                total=total,
                total_pages=math.ceil(total / limit),
            ),
        )

    # Single todo

    def get_todo(self, todo_id: Any) -> TodoResponse:
        """Get an active todo with its categories."""
        todo = self._get_active(parse_positive_int(todo_id))
        if todo is None:
            raise NotFoundError("Todo not found")
        return TodoResponse.model_validate(todo)

    def create_todo(self, title: Any, description: Any = None, priority: Any = None) -> int:
        """Create a todo and return its id."""
        todo = Todo(
            title=normalize_title(title),
            description=normalize_description(description),
            priority=parse_priority(priority),
        )
        with transaction(self.db):
            self.db.add(todo)
            self.db.flush()
            todo_id = todo.id

        logger.info(f"Todo created: id={todo_id}")
        return todo_id

    def update_todo(self, todo_id: Any, fields: dict[str, Any]) -> TodoResponse:
        """Apply a partial update.

        Only keys present in ``fields`` are validated and written. An empty
        update returns the todo as-is without touching updated_at.
        """
        normalized_id = parse_positive_int(todo_id)

        values: dict[str, Any] = {}
        if "title" in fields:
            values["title"] = normalize_title(fields["title"])
        if "description" in fields:
            values["description"] = normalize_description(fields["description"])
        if "completed" in fields:
            values["completed"] = parse_bool(fields["completed"])
        if "priority" in fields:
            values["priority"] = parse_priority(fields["priority"])

        todo = self._get_active(normalized_id)
        if todo is None:
            raise NotFoundError("Todo not found")

        if not values:
            return TodoResponse.model_validate(todo)

        with transaction(self.db):
            for key, value in values.items():
                setattr(todo, key, value)
            todo.updated_at = func.now()

        logger.info(f"Todo updated: id={normalized_id} fields={sorted(values)}")
        return self.get_todo(normalized_id)

    def delete_todo(self, todo_id: Any) -> TodoResponse:
        """Permanently delete an active todo and return it as it was."""
        todo = self._get_active(parse_positive_int(todo_id))
        if todo is None:
            raise NotFoundError("Todo not found")

        snapshot = TodoResponse.model_validate(todo)
        with transaction(self.db):
            self.db.delete(todo)

        logger.info(f"Todo deleted: id={snapshot.id} title={snapshot.title!r}")
        return snapshot

    # Batch operations

    def batch_delete_todos(self, ids: Any) -> list[TodoResponse]:
        """Permanently delete every listed todo, or none of them."""
        todos = self._apply_batch(ids, lambda query: query.delete(synchronize_session=False))
        logger.info(f"Todos batch deleted: count={len(todos)} ids={[t.id for t in todos]}")
        return todos

    def batch_soft_delete_todos(self, ids: Any) -> list[TodoResponse]:
        """Soft-delete every listed todo, or none of them."""
        todos = self._apply_batch(
            ids,
            lambda query: query.update(
                {Todo.deleted_at: func.now()}, synchronize_session=False
            ),
        )
        logger.info(f"Todos batch soft-deleted: count={len(todos)} ids={[t.id for t in todos]}")
        return todos

    def batch_restore_todos(self, ids: Any) -> list[TodoResponse]:
        """Clear deleted_at on every listed todo, or on none of them."""
        todos = self._apply_batch(
            ids,
            lambda query: query.update({Todo.deleted_at: None}, synchronize_session=False),
        )
        logger.info(f"Todos batch restored: count={len(todos)} ids={[t.id for t in todos]}")
        return todos

    def _apply_batch(self, ids: Any, effect: Callable[[Query], Any]) -> list[TodoResponse]:
        """Check that all ids exist, then run ``effect`` on them in one statement.

        Returns the rows as they were before the effect, in request order.
        """
        unique_ids = normalize_ids(ids)

        with transaction(self.db):
            storable_ids = [todo_id for todo_id in unique_ids if is_storable_id(todo_id)]
            rows = self.db.query(Todo).filter(Todo.id.in_(storable_ids)).all()
            found = {row.id: row for row in rows}

            missing = [todo_id for todo_id in unique_ids if todo_id not in found]
            if missing:
                raise NotFoundError(f"Todos not found: {missing}", missing_ids=missing)

            snapshots = [TodoResponse.model_validate(found[todo_id]) for todo_id in unique_ids]
            effect(self.db.query(Todo).filter(Todo.id.in_(unique_ids)))

        return snapshots

    # Search

    def search_todos(self, q: Any) -> list[TodoResponse]:
        """Find active todos whose title or description contains ``q``."""
        if not isinstance(q, str) or q.strip() == "":
            raise ValidationError("q cannot be empty")

        pattern = f"%{escape_like(q.strip())}%"
        todos = (
            self.db.query(Todo)
            .filter(
                Todo.active(),
                or_(
                    Todo.title.like(pattern, escape="\\"),
                    Todo.description.like(pattern, escape="\\"),
                ),
            )
            .order_by(Todo.created_at.desc(), Todo.id.desc())
            .all()
        )
        return self._to_responses(todos)

    # Categories

    def add_category_to_todo(self, todo_id: Any, category_id: Any) -> TodoResponse:
        """Tag a todo with a category. Tagging twice is a no-op."""
        normalized_id, normalized_category_id = self._check_link_target(todo_id, category_id)

        category = None
        if is_storable_id(normalized_category_id):
            category = (
                self.db.query(Category).filter(Category.id == normalized_category_id).first()
            )
        if category is None:
            raise NotFoundError("Category not found")

        with transaction(self.db):
            self._insert_link(normalized_id, normalized_category_id)

        logger.info(f"Category added to todo: id={normalized_id} category={normalized_category_id}")
        return self.get_todo(normalized_id)

    def remove_category_from_todo(self, todo_id: Any, category_id: Any) -> TodoResponse:
        """Untag a todo. Removing a missing link is not an error."""
        normalized_id, normalized_category_id = self._check_link_target(todo_id, category_id)

        if is_storable_id(normalized_category_id):
            with transaction(self.db):
                self.db.query(TodoCategory).filter(
                    TodoCategory.todo_id == normalized_id,
                    TodoCategory.category_id == normalized_category_id,
                ).delete(synchronize_session=False)

        logger.info(
            f"Category removed from todo: id={normalized_id} category={normalized_category_id}"
        )
        return self.get_todo(normalized_id)

    def _check_link_target(self, todo_id: Any, category_id: Any) -> tuple[int, int]:
        normalized_id = parse_positive_int(todo_id)
        normalized_category_id = parse_positive_int(category_id, "categoryId")
        if self._get_active(normalized_id) is None:
            raise NotFoundError("Todo not found")
        return normalized_id, normalized_category_id

    def _insert_link(self, todo_id: int, category_id: int) -> None:
        insert = UPSERT_INSERTS.get(self.db.get_bind().dialect.name)
        if insert is not None:
            self.db.execute(
                insert(TodoCategory)
                .values(todo_id=todo_id, category_id=category_id)
                .on_conflict_do_nothing(index_elements=["todo_id", "category_id"])
            )
            return

        exists = (
            self.db.query(TodoCategory)
            .filter(TodoCategory.todo_id == todo_id, TodoCategory.category_id == category_id)
            .first()
        )
        if exists is None:
            self.db.add(TodoCategory(todo_id=todo_id, category_id=category_id))

    # Helpers

    def _get_active(self, todo_id: int) -> Todo | None:
        if not is_storable_id(todo_id):
            return None
        return self.db.query(Todo).filter(Todo.id == todo_id, Todo.active()).first()

    @staticmethod
    def _to_responses(todos: list[Todo]) -> list[TodoResponse]:
        return [TodoResponse.model_validate(todo) for todo in todos]
