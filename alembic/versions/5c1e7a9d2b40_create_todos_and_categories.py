"""Create todos, categories and todos_categories

Revision ID: 5c1e7a9d2b40
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c1e7a9d2b40"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# Single-column indexes on todos used by filtering and sorting
TODO_INDEXES = ["id", "completed", "priority", "created_at", "deleted_at"]


def upgrade() -> None:
    op.create_table(
        "todos",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.String(length=1000), nullable=False, server_default=""),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("priority", sa.Integer(), nullable=False, server_default=sa.text("2")),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    for column in TODO_INDEXES:
        op.create_index(f"ix_todos_{column}", "todos", [column])

    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("color", sa.String(length=50), nullable=False),
    )
    op.create_index("ix_categories_id", "categories", ["id"])

    op.create_table(
        "todos_categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "todo_id",
            sa.Integer(),
            sa.ForeignKey("todos.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "category_id",
            sa.Integer(),
            sa.ForeignKey("categories.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.UniqueConstraint("todo_id", "category_id", name="uq_todo_category"),
    )
    op.create_index("ix_todos_categories_id", "todos_categories", ["id"])
    op.create_index("ix_todos_categories_todo_id", "todos_categories", ["todo_id"])
    op.create_index("ix_todos_categories_category_id", "todos_categories", ["category_id"])


def downgrade() -> None:
    op.drop_table("todos_categories")
    op.drop_table("categories")
    for column in reversed(TODO_INDEXES):
        op.drop_index(f"ix_todos_{column}", table_name="todos")
    op.drop_table("todos")
