"""
HTML view routes for the Task Manager web interface.

This module renders the single task page (a create form plus the task
list) and forwards form submissions to the task API: over HTTP, or
in-process when the API app serves the UI itself. Every mutation
redirects back to the index, which lists tasks from the API again, so
the page always shows what the server holds.

Routes:
    GET  /                    - Task list page with create form
    POST /tasks               - Create task from form
    POST /tasks/<id>/update   - Update task from the inline edit form
    POST /tasks/<id>/delete   - Delete task
    GET  /<path>              - HTML fallback for any other page
    GET  /assets/<file>       - Static assets
"""

import logging
from typing import Any

import requests
from flask import Blueprint, current_app, jsonify, redirect, render_template, request, url_for

from app.client import TaskApiClient

logger = logging.getLogger(__name__)

views_bp = Blueprint(
    "views",
    __name__,
    static_folder="../static",
    static_url_path="/assets",
)


def _in_process_api():
    """Return the API app when the UI is served by the API process itself."""
    if current_app.config["TASK_API_IN_PROCESS"]:
        return current_app._get_current_object()
    return None


def _task_api() -> TaskApiClient:
    """Build an API client from the current app configuration."""
    return TaskApiClient(
        current_app.config["TASK_API_URL"],
        timeout=current_app.config["TASK_API_TIMEOUT"],
        app=_in_process_api(),
    )


def _form_fields() -> dict[str, Any]:
    """Collect the task fields posted by the create or edit form."""
    return {
        "title": request.form.get("title", ""),
        "description": request.form.get("description", ""),
        "dueDate": request.form.get("dueDate") or None,
    }


def _render_index():
    try:
        tasks = _task_api().list_tasks()
    except requests.RequestException as exc:
        logger.warning("Could not fetch tasks: %s", exc)
        tasks = []
    return render_template("index.html", tasks=tasks)


@views_bp.route("/")
def index():
    """
    Render the task list page.

    Returns:
        Rendered index.html template with the task list.
    """
    logger.info("GET / - Rendering task list")
    return _render_index()


@views_bp.route("/tasks", methods=["POST"])
def create_task():
    """
    Handle new task form submission.

    Form Data:
        title: Task title (required)
        description: Task description
        dueDate: Due date (YYYY-MM-DD)

    Returns:
        Redirect to index, which refetches the list.
    """
    logger.info("POST /tasks - Creating task from form")

    try:
        task = _task_api().create_task(_form_fields())
        logger.info("Created task %s from form", task.get("id"))
    except requests.RequestException as exc:
        logger.warning("Create task failed: %s", exc)

    return redirect(url_for("views.index"))


@views_bp.route("/tasks/<task_id>/update", methods=["POST"])
def update_task(task_id: str):
    """
    Handle the inline edit form.

    Form Data:
        title, description, dueDate: New field values
        isCompleted: Present when the completed checkbox is ticked

    Returns:
        Redirect to index, which refetches the list.
    """
    logger.info("POST /tasks/%s/update - Updating task from form", task_id)

    fields = _form_fields()
    fields["isCompleted"] = "isCompleted" in request.form
    try:
        _task_api().update_task(task_id, fields)
    except requests.RequestException as exc:
        logger.warning("Update of task %s failed: %s", task_id, exc)

    return redirect(url_for("views.index"))


@views_bp.route("/tasks/<task_id>/delete", methods=["POST"])
def delete_task(task_id: str):
    """
    Handle task deletion.

    Returns:
        Redirect to index, which refetches the list.
    """
    logger.info("POST /tasks/%s/delete - Deleting task", task_id)

    try:
        _task_api().delete_task(task_id)
    except requests.RequestException as exc:
        logger.warning("Delete of task %s failed: %s", task_id, exc)

    return redirect(url_for("views.index"))


@views_bp.route("/<path:path>")
def fallback(path: str):
    """Serve the task page for any other path outside the API."""
    if path == "api" or path.startswith("api/"):
        return jsonify({"error": "Resource not found"}), 404
    return _render_index()
