"""
Database models for the Task Manager application.

This module defines the SQLAlchemy model backing the task collection and
``TaskPayload``, the validated record type every API request body is parsed
into before it reaches the store.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any

from app import db
from app.errors import ValidationError


def _new_task_id() -> str:
    """Generate an opaque task identifier."""
    return uuid.uuid4().hex


class Task(db.Model):
    """
    Task model representing a to-do item.

    Attributes:
        id: Opaque identifier assigned by the store at creation.
        title: Short title describing the task.
        description: Detailed description of the task (empty by default).
        due_date: Optional calendar date the task is due.
        is_completed: Whether the task is done.
        created_at: Timestamp when the task was created.
    """

    __tablename__ = "tasks"

    id: str = db.Column(db.String(32), primary_key=True, default=_new_task_id)
    title: str = db.Column(db.Text, nullable=False)
    description: str = db.Column(db.Text, nullable=False, default="")
    due_date: date | None = db.Column(db.Date, nullable=True)
    is_completed: bool = db.Column(db.Boolean, nullable=False, default=False)
    created_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )

    @staticmethod
    def _to_utc_iso(value: datetime | None) -> str | None:
        """
        Convert datetime to an ISO-8601 UTC string.

        SQLite commonly returns naive datetime values even when timezone-aware
        columns are declared. For API contracts, always normalize to UTC.
        """
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        else:
            value = value.astimezone(timezone.utc)
        return value.isoformat()

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the task to its JSON representation.

        Returns:
            Dictionary keyed by the camelCase API field names.
        """
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description or "",
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "isCompleted": bool(self.is_completed),
            "createdAt": self._to_utc_iso(self.created_at),
        }

    def __repr__(self) -> str:
        """Return string representation of the task."""
        return f"<Task {self.id}: {self.title}>"


# -----------------------------------------------------------------------------
# Request payload validation
# -----------------------------------------------------------------------------

def parse_due_date(value: Any) -> date | None:
    """
    Parse a due date sent by a client.

    Accepts ``YYYY-MM-DD`` or a full ISO-8601 datetime (truncated to its
    date). ``None`` and the empty string clear the due date.

    Raises:
        ValidationError: If the value is not a parseable date string.
    """
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError("'dueDate' must be a date string (YYYY-MM-DD)")
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError(
            "Invalid dueDate format. Use ISO format (YYYY-MM-DD)"
        ) from None


def _parse_title(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("'title' is required")
    return value


def _parse_description(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError("'description' must be a string")
    return value


def _parse_is_completed(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValidationError("'isCompleted' must be a boolean")
    return value


# JSON field name -> (model attribute, parser)
PAYLOAD_FIELDS = {
    "title": ("title", _parse_title),
    "description": ("description", _parse_description),
    "dueDate": ("due_date", parse_due_date),
    "isCompleted": ("is_completed", _parse_is_completed),
}


@dataclass(frozen=True)
class TaskPayload:
    """
    Validated task fields taken from a request body.

    ``values`` is keyed by model attribute name and holds only the fields
    the client supplied. Server-owned fields (``id``, ``createdAt``) and
    unknown keys are dropped during parsing.
    """

    values: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any, *, partial: bool = False) -> "TaskPayload":
        """
        Build a payload from a decoded JSON body.

        Args:
            data: Decoded request body.
            partial: When True (updates) only supplied fields are checked;
                otherwise ``title`` is required.

        Raises:
            ValidationError: If the body is not an object, the title is
                missing or empty, or a field has the wrong type.
        """
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")

        if not partial and "title" not in data:
            raise ValidationError("'title' is required")

        values = {}
        for key, (attribute, parser) in PAYLOAD_FIELDS.items():
            if key in data:
                values[attribute] = parser(data[key])
        return cls(values=values)
