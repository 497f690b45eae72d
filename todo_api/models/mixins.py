"""Mixins for SQLAlchemy models."""

from sqlalchemy import Column, DateTime, func


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamp columns.

    updated_at has no onupdate hook: writers bump it explicitly, so bulk
    statements such as soft delete and restore leave it untouched.
    """

    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class SoftDeleteMixin:
    """Mixin to add soft delete functionality."""

    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    @classmethod
    def active(cls):
        """Filter clause selecting rows that are not soft-deleted."""
        return cls.deleted_at.is_(None)
