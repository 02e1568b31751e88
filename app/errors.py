"""
Error types raised by the task store and the API boundary.

The API blueprint maps each of these onto an HTTP status code:
``ValidationError`` -> 400, ``NotFoundError`` -> 404 and
``StoreUnavailable`` -> 500.
"""


class TaskStoreError(Exception):
    """Base class for task store failures."""


class ValidationError(TaskStoreError):
    """A required field is missing or a field has the wrong type."""


class NotFoundError(TaskStoreError):
    """The referenced task id does not exist."""

    def __init__(self, task_id: str):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class StoreUnavailable(TaskStoreError):
    """The database connection could not be established or was lost."""
