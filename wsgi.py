"""WSGI entry point for the task API service."""

import atexit
import os

from app import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
atexit.register(app.extensions["task_store"].close)

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=app.config["PORT"])
