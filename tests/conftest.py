"""
Shared pytest fixtures for the Task Manager test suite.

This module contains fixtures that are shared across all test modules.
Fixtures follow the Arrange-Act-Assert (AAA) pattern and ensure
test isolation by providing fresh data for each test.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Fixture dependencies
- Test data factories
- Database setup/teardown
- Test client creation
"""

import os
from datetime import date, timedelta
from typing import Any

import pytest
from faker import Faker

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from app import create_app, create_ui_app, db
from app.models import Task
from app.store import TaskStore


# Initialize Faker for generating test data
fake = Faker()


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app():
    """
    Create the API application instance for the test session.

    Yields:
        Flask application instance configured for testing.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client for making HTTP requests to the API.

    Yields:
        Flask test client for making HTTP requests.
    """
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Create a fresh database for each test.

    Creates all tables before the test and drops them afterwards so
    that no task leaks from one test into the next.

    Yields:
        SQLAlchemy database handle.
    """
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


@pytest.fixture
def store(app, db_session) -> TaskStore:
    """Provide the task store bound to the test application."""
    return app.extensions["task_store"]


@pytest.fixture(scope="session")
def ui_app():
    """
    Create the standalone UI application for the test session.

    The UI talks to ``TASK_API_URL`` through requests, which the UI
    tests replace with fakes.
    """
    application = create_ui_app("testing")
    yield application


@pytest.fixture(scope="function")
def ui_client(ui_app):
    """Create a test client for the UI application."""
    with ui_app.test_client() as test_client:
        yield test_client


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def task_factory(store):
    """
    Factory fixture for creating Task instances through the store.

    Example:
        def test_something(task_factory):
            task = task_factory(title="My Task")
            assert task.id is not None
    """

    def _create_task(
        title: str | None = None,
        description: str | None = None,
        due_date: date | None = None,
        is_completed: bool = False
    ) -> Task:
        """
        Create a task with the given or default values.

        Args:
            title: Task title (defaults to random sentence).
            description: Task description (defaults to random paragraph).
            due_date: Task due date (defaults to None).
            is_completed: Completion flag (defaults to False).

        Returns:
            Created Task instance with an ID.
        """
        return store.create({
            "title": title or fake.sentence(nb_words=4),
            "description": description or fake.paragraph(),
            "due_date": due_date,
            "is_completed": is_completed,
        })

    return _create_task


@pytest.fixture
def sample_task(task_factory) -> Task:
    """Create a single sample task for tests that need one task."""
    return task_factory(
        title="Sample Task",
        description="This is a sample task for testing",
        due_date=date.today() + timedelta(days=3),
    )


# -----------------------------------------------------------------------------
# Test Data Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def valid_task_data() -> dict[str, Any]:
    """
    Provide valid task data for POST/PUT requests.

    Returns:
        Dictionary with valid task field values.
    """
    return {
        "title": "Test Task",
        "description": "This is a test task description",
        "dueDate": (date.today() + timedelta(days=7)).isoformat(),
    }


@pytest.fixture
def minimal_task_data() -> dict[str, str]:
    """Provide minimal valid task data (only required fields)."""
    return {"title": "Minimal Task"}


@pytest.fixture
def api_headers() -> dict[str, str]:
    """Provide common headers for API requests."""
    return {
        "Content-Type": "application/json",
        "Accept": "application/json"
    }
