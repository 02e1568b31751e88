"""
Unit tests for the Task model and request payload parsing.
"""

from datetime import date, datetime

import pytest

from app.errors import ValidationError
from app.models import Task, TaskPayload, parse_due_date


pytestmark = pytest.mark.unit


def test_task_defaults_and_to_dict(db_session):
    task = Task(title="Test Task")
    db_session.session.add(task)
    db_session.session.commit()

    data = task.to_dict()

    assert data["title"] == "Test Task"
    assert data["description"] == ""
    assert data["dueDate"] is None
    assert data["isCompleted"] is False
    assert len(data["id"]) == 32
    assert data["createdAt"] is not None


def test_task_created_at_serialized_as_utc(db_session):
    task = Task(title="Timestamp Task")
    db_session.session.add(task)
    db_session.session.commit()

    parsed = datetime.fromisoformat(task.to_dict()["createdAt"])

    assert parsed.utcoffset().total_seconds() == 0


def test_task_due_date_serialization(db_session):
    task = Task(title="Due Date Task", due_date=date(2025, 2, 4))
    db_session.session.add(task)
    db_session.session.commit()

    assert task.to_dict()["dueDate"] == "2025-02-04"


def test_task_ids_are_unique(db_session):
    first = Task(title="First")
    second = Task(title="Second")
    db_session.session.add_all([first, second])
    db_session.session.commit()

    assert first.id != second.id


class TestTaskPayload:
    """Tests for parsing request bodies into TaskPayload."""

    def test_full_payload_maps_to_model_attributes(self):
        """Test that camelCase JSON keys become model attribute names."""
        # Act
        payload = TaskPayload.from_json({
            "title": "Buy milk",
            "description": "Semi-skimmed",
            "dueDate": "2025-02-04",
            "isCompleted": True,
        })

        # Assert
        assert payload.values == {
            "title": "Buy milk",
            "description": "Semi-skimmed",
            "due_date": date(2025, 2, 4),
            "is_completed": True,
        }

    def test_server_owned_and_unknown_fields_are_dropped(self):
        """Test that id, createdAt and unknown keys never reach the store."""
        # Act
        payload = TaskPayload.from_json({
            "title": "Probe",
            "id": "client-chosen",
            "createdAt": "1990-01-01T00:00:00+00:00",
            "_id": "abc",
            "isAdmin": True,
        })

        # Assert
        assert payload.values == {"title": "Probe"}

    @pytest.mark.parametrize("body", [
        {},
        {"description": "no title"},
        {"title": ""},
        {"title": "   "},
        {"title": None},
        {"title": 42},
    ])
    def test_create_requires_non_empty_title(self, body):
        with pytest.raises(ValidationError, match="title"):
            TaskPayload.from_json(body)

    def test_partial_payload_does_not_require_title(self):
        payload = TaskPayload.from_json({"isCompleted": True}, partial=True)

        assert payload.values == {"is_completed": True}

    def test_partial_payload_rejects_empty_title(self):
        with pytest.raises(ValidationError):
            TaskPayload.from_json({"title": ""}, partial=True)

    @pytest.mark.parametrize("body", [None, [], "title", 7])
    def test_non_object_body_is_rejected(self, body):
        with pytest.raises(ValidationError, match="JSON object"):
            TaskPayload.from_json(body, partial=True)

    def test_null_description_becomes_empty(self):
        payload = TaskPayload.from_json({"title": "T", "description": None})

        assert payload.values["description"] == ""

    @pytest.mark.parametrize("field,value", [
        ("description", 5),
        ("isCompleted", "yes"),
        ("isCompleted", 1),
        ("dueDate", 20250204),
        ("dueDate", "not-a-date"),
    ])
    def test_wrong_field_types_are_rejected(self, field, value):
        with pytest.raises(ValidationError):
            TaskPayload.from_json({"title": "T", field: value})


class TestParseDueDate:
    """Tests for due date parsing."""

    @pytest.mark.parametrize("value,expected", [
        ("2025-02-04", date(2025, 2, 4)),
        ("2025-02-04T10:30:00", date(2025, 2, 4)),
        ("2025-02-04T10:30:00Z", date(2025, 2, 4)),
        ("2025-02-04T10:30:00+02:00", date(2025, 2, 4)),
    ])
    def test_accepts_dates_and_datetimes(self, value, expected):
        assert parse_due_date(value) == expected

    @pytest.mark.parametrize("value", [None, ""])
    def test_blank_values_clear_the_date(self, value):
        assert parse_due_date(value) is None
