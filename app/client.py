"""
HTTP client the UI uses to talk to the task API.

The UI holds no task state of its own: every page render lists tasks
through this client and every form submission is forwarded to the API.
When the UI is served by the API process itself, requests are dispatched
through the application in-process instead of over the network, so a
single worker never waits on itself.
"""

import logging
from typing import Any

import requests
from flask import Flask

logger = logging.getLogger(__name__)


class _InProcessResponse:
    """Expose a Flask test response through the parts of requests.Response we use."""

    def __init__(self, response):
        self.status_code = response.status_code
        self._payload = response.get_json(silent=True)

    def json(self) -> Any:
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error from in-process task API")


class TaskApiClient:
    """
    Thin wrapper around the ``/api/tasks`` endpoints.

    Args:
        base_url: Root URL of the task API service (e.g.
            ``"http://localhost:5000"``).
        timeout: Per-request timeout in seconds.
        app: The API application, when the UI runs inside it. Calls are
            then dispatched in-process and ``base_url`` is not used.
    """

    def __init__(self, base_url: str, timeout: float = 5, app: Flask | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.app = app

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs):
        """
        Send a request to the task API and fail on non-2xx replies.

        Raises:
            requests.HTTPError: If the API answered with an error status.
            requests.RequestException: For network-level failures.
        """
        if self.app is not None:
            response = _InProcessResponse(
                self.app.test_client().open(
                    path,
                    method=method,
                    headers={"Accept": "application/json"},
                    **kwargs,
                )
            )
        else:
            response = requests.request(
                method=method,
                url=self._url(path),
                headers={"Accept": "application/json"},
                timeout=self.timeout,
                **kwargs,
            )
        response.raise_for_status()
        return response

    def list_tasks(self) -> list[dict[str, Any]]:
        """Fetch every task."""
        return self._request("GET", "/api/tasks").json()

    def create_task(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Create a task and return the stored record."""
        return self._request("POST", "/api/tasks", json=fields).json()

    def update_task(self, task_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Replace the given fields on a task and return the updated record."""
        return self._request("PUT", f"/api/tasks/{task_id}", json=fields).json()

    def delete_task(self, task_id: str) -> None:
        """Delete a task."""
        self._request("DELETE", f"/api/tasks/{task_id}")
