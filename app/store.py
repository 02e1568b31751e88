"""
Task store backed by Flask-SQLAlchemy.

``TaskStore`` is the only writer of task records. It is constructed once by
the application factory, registered under ``app.extensions["task_store"]``
and looked up by the API blueprint for every request. The schema is created
lazily on first use and the engine's connection pool is reused for the life
of the process; ``close()`` releases it.
"""

import logging
import threading
from collections.abc import Mapping
from typing import Any

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from app.errors import NotFoundError, StoreUnavailable, ValidationError
from app.models import Task

logger = logging.getLogger(__name__)

# Attributes an update may replace; id and created_at are immutable.
MUTABLE_FIELDS = ("title", "description", "due_date", "is_completed")


class TaskStore:
    """Persist Task records and provide lookup/mutation primitives."""

    def __init__(self, database: SQLAlchemy):
        self._db = database
        self._app: Flask | None = None
        self._connected = False
        self._connect_lock = threading.Lock()

    def init_app(self, app: Flask) -> None:
        """Bind the store to an application."""
        self._app = app
        app.extensions["task_store"] = self

    # ------------------------------------------------------------------
    # Connection handling
    # ------------------------------------------------------------------

    def _session(self):
        """Return the request-scoped session, connecting on first use."""
        if not self._connected:
            # Concurrent first requests must not race on CREATE TABLE.
            with self._connect_lock:
                if not self._connected:
                    try:
                        self._db.create_all()
                    except OperationalError as exc:
                        logger.error("Unable to connect to task store: %s", exc)
                        raise StoreUnavailable("Task store is unavailable") from exc
                    self._connected = True
                    logger.info("Task store connected")
        return self._db.session

    def _commit(self, session) -> None:
        try:
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            raise

    def close(self) -> None:
        """Dispose of the engine and its pooled connections."""
        if self._app is None:
            return
        with self._app.app_context():
            self._db.engine.dispose()
        self._connected = False
        logger.info("Task store connection released")

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def create(self, fields: Mapping[str, Any]) -> Task:
        """
        Store a new task.

        Args:
            fields: Task attributes keyed by model attribute name. Only
                mutable attributes are used; ``id`` and ``created_at`` are
                always assigned here.

        Returns:
            The stored task with its id and creation timestamp.

        Raises:
            ValidationError: If ``title`` is missing or empty.
            StoreUnavailable: If the database cannot be reached.
        """
        title = fields.get("title")
        if not isinstance(title, str) or not title.strip():
            raise ValidationError("'title' is required")

        session = self._session()
        task = Task(**{name: fields[name] for name in MUTABLE_FIELDS if name in fields})
        session.add(task)
        try:
            self._commit(session)
        except OperationalError as exc:
            raise StoreUnavailable("Task store is unavailable") from exc
        return task

    def list_all(self) -> list[Task]:
        """Return every stored task."""
        session = self._session()
        try:
            return list(session.scalars(select(Task).order_by(Task.created_at)).all())
        except OperationalError as exc:
            raise StoreUnavailable("Task store is unavailable") from exc

    def get_by_id(self, task_id: str) -> Task:
        """
        Fetch a single task.

        Raises:
            NotFoundError: If no task has this id.
        """
        session = self._session()
        try:
            task = session.get(Task, task_id)
        except OperationalError as exc:
            raise StoreUnavailable("Task store is unavailable") from exc
        if task is None:
            raise NotFoundError(task_id)
        return task

    def update_by_id(self, task_id: str, fields: Mapping[str, Any]) -> Task:
        """
        Replace the named fields on a task.

        Fields that are not mutable are ignored; fields that are not named
        keep their current values.

        Returns:
            The updated task.

        Raises:
            NotFoundError: If no task has this id.
            ValidationError: If the update would leave the title empty.
        """
        if "title" in fields:
            title = fields["title"]
            if not isinstance(title, str) or not title.strip():
                raise ValidationError("'title' is required")

        task = self.get_by_id(task_id)
        for name in MUTABLE_FIELDS:
            if name in fields:
                setattr(task, name, fields[name])
        try:
            self._commit(self._db.session)
        except OperationalError as exc:
            raise StoreUnavailable("Task store is unavailable") from exc
        return task

    def delete_by_id(self, task_id: str) -> None:
        """Remove a task; deleting an absent id is a no-op."""
        session = self._session()
        try:
            task = session.get(Task, task_id)
            if task is None:
                logger.info("Task %s already absent", task_id)
                return
            session.delete(task)
            self._commit(session)
        except OperationalError as exc:
            raise StoreUnavailable("Task store is unavailable") from exc
