"""Domain errors raised by the service layer.

Each error carries a ``status_code`` hint so the web layer can pick a response
code without the services knowing anything about HTTP.
"""


class TodoAppError(Exception):
    """Base class for all application errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TodoAppError):
    """Malformed or out-of-range input."""

    status_code = 400


class NotFoundError(TodoAppError):
    """A referenced task or category does not exist (or is not active)."""

    status_code = 404

    def __init__(self, message: str, missing_ids: list[int] | None = None):
        super().__init__(message)
        self.missing_ids = missing_ids or []


class StorageError(TodoAppError):
    """The underlying database failed."""

    status_code = 500
