"""
REST API endpoints for Task management.

This module provides CRUD operations for tasks via HTTP methods.
All endpoints return JSON responses and follow REST conventions.
Request bodies are parsed into a ``TaskPayload`` before they reach
the task store.

Endpoints:
    GET    /api/health        - Health check
    GET    /api/tasks          - List all tasks
    GET    /api/tasks/<id>     - Get a single task by ID
    POST   /api/tasks          - Create a new task
    PUT    /api/tasks/<id>     - Update an existing task
    DELETE /api/tasks/<id>     - Delete a task
"""

import logging

from flask import Blueprint, Response, current_app, jsonify, request

from app.errors import NotFoundError, StoreUnavailable, ValidationError
from app.models import TaskPayload
from app.store import TaskStore

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def get_store() -> TaskStore:
    """Return the task store bound to the current application."""
    return current_app.extensions["task_store"]


# -----------------------------------------------------------------------------
# API Endpoints
# -----------------------------------------------------------------------------

@api_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Health check endpoint for deployment verification."""
    return jsonify({"status": "healthy", "service": "tasks"}), 200


@api_bp.route("/tasks", methods=["GET"])
def get_tasks() -> tuple[Response, int]:
    """
    List all tasks.

    Returns:
        JSON array of every stored task and 200 status code.
    """
    logger.info("GET /api/tasks - Fetching all tasks")

    tasks = get_store().list_all()
    logger.info("Found %d tasks", len(tasks))

    return jsonify([task.to_dict() for task in tasks]), 200


@api_bp.route("/tasks/<task_id>", methods=["GET"])
def get_task(task_id: str) -> tuple[Response, int]:
    """
    Get a single task by ID.

    Returns:
        JSON response with task data and 200 status code,
        or error message and 404 if not found.
    """
    logger.info("GET /api/tasks/%s - Fetching task", task_id)

    task = get_store().get_by_id(task_id)
    return jsonify(task.to_dict()), 200


@api_bp.route("/tasks", methods=["POST"])
def create_task() -> tuple[Response, int]:
    """
    Create a new task.

    Request Body (JSON):
        title: Task title (required)
        description: Task description (optional, default: "")
        dueDate: Due date, YYYY-MM-DD (optional)
        isCompleted: Completion flag (optional, default: false)

    Returns:
        JSON response with created task and 201 status code,
        or error message and 400 if validation fails.
    """
    logger.info("POST /api/tasks - Creating new task")

    payload = TaskPayload.from_json(request.get_json(silent=True))
    task = get_store().create(payload.values)

    logger.info("Created task with ID: %s", task.id)
    return jsonify(task.to_dict()), 201


@api_bp.route("/tasks/<task_id>", methods=["PUT"])
def update_task(task_id: str) -> tuple[Response, int]:
    """
    Update an existing task.

    Only the fields present in the body are replaced; the rest keep
    their current values.

    Returns:
        JSON response with updated task and 200 status code,
        or error message and 404/400 if not found or validation fails.
    """
    logger.info("PUT /api/tasks/%s - Updating task", task_id)

    payload = TaskPayload.from_json(request.get_json(silent=True), partial=True)
    task = get_store().update_by_id(task_id, payload.values)

    logger.info("Updated task %s", task_id)
    return jsonify(task.to_dict()), 200


@api_bp.route("/tasks/<task_id>", methods=["DELETE"])
def delete_task(task_id: str) -> tuple[str, int]:
    """
    Delete a task.

    Deleting a task that does not exist is not an error.

    Returns:
        Empty body with 204 status code.
    """
    logger.info("DELETE /api/tasks/%s - Deleting task", task_id)

    get_store().delete_by_id(task_id)

    logger.info("Deleted task %s", task_id)
    return "", 204


# -----------------------------------------------------------------------------
# Error Handlers
# -----------------------------------------------------------------------------

@api_bp.errorhandler(ValidationError)
def validation_failed(error: ValidationError) -> tuple[Response, int]:
    """Handle rejected request bodies."""
    logger.warning("Validation failed: %s", error)
    return jsonify({"error": str(error)}), 400


@api_bp.errorhandler(NotFoundError)
def task_not_found(error: NotFoundError) -> tuple[Response, int]:
    """Handle lookups of unknown task ids."""
    logger.warning("Task %s not found", error.task_id)
    return jsonify({"error": "Task not found"}), 404


@api_bp.errorhandler(StoreUnavailable)
def store_unavailable(error: StoreUnavailable) -> tuple[Response, int]:
    """Handle a lost or unreachable database."""
    logger.error("Task store unavailable: %s", error.__cause__ or error)
    return jsonify({"error": "Internal server error"}), 500


@api_bp.errorhandler(400)
def bad_request(error: Exception) -> tuple[Response, int]:
    """Handle 400 Bad Request errors."""
    return jsonify({"error": "Bad request"}), 400


@api_bp.errorhandler(404)
def not_found(error: Exception) -> tuple[Response, int]:
    """Handle 404 Not Found errors."""
    return jsonify({"error": "Resource not found"}), 404


@api_bp.errorhandler(500)
def internal_error(error: Exception) -> tuple[Response, int]:
    """Handle 500 Internal Server errors."""
    logger.error("Internal server error: %s", error)
    return jsonify({"error": "Internal server error"}), 500
