"""
Flask application factory module.

This module creates and configures the Flask applications using the
factory pattern, allowing for different configurations (development,
testing, production).

Two factories are provided:
  * ``create_app`` -- the task API service, backed by ``TaskStore``. In
    production it also serves the UI pages and static assets.
  * ``create_ui_app`` -- the UI on its own, talking to the API over HTTP.
"""

import logging
import os
from pathlib import Path

from flask import Flask, Response, request
from flask_sqlalchemy import SQLAlchemy

from config import get_config

# Initialize SQLAlchemy without binding to app
db = SQLAlchemy()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def _ensure_sqlite_db_parent_exists(database_uri: str) -> None:
    """Create parent directories for file-based SQLite URIs when missing."""
    sqlite_prefix = "sqlite:///"
    if not database_uri.startswith(sqlite_prefix):
        return

    sqlite_path = database_uri[len(sqlite_prefix) :].split("?", 1)[0]
    if sqlite_path == ":memory:":
        return

    Path(sqlite_path).parent.mkdir(parents=True, exist_ok=True)


def _register_cors(app: Flask) -> None:
    """Allow cross-origin requests to every route."""

    @app.after_request
    def add_cors_headers(response: Response) -> Response:
        response.headers["Access-Control-Allow-Origin"] = app.config["CORS_ALLOWED_ORIGIN"]
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, DELETE, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = request.headers.get(
            "Access-Control-Request-Headers", "Content-Type"
        )
        return response


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the task API application.

    The task store is constructed here and bound to the app; the database
    connection itself is opened lazily by the store on first use.

    Args:
        config_name: Configuration environment name.
                     If None, uses FLASK_ENV environment variable.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__, instance_relative_config=True, static_folder=None)

    # Load configuration
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    logger.info("Creating app with config: %s", config_class.__name__)

    # Ensure instance folder exists
    os.makedirs(app.instance_path, exist_ok=True)
    _ensure_sqlite_db_parent_exists(app.config.get("SQLALCHEMY_DATABASE_URI", ""))

    # Initialize extensions
    db.init_app(app)

    from app.store import TaskStore

    store = TaskStore(db)
    store.init_app(app)

    _register_cors(app)

    # Register blueprints
    from app.routes.api import api_bp

    app.register_blueprint(api_bp, url_prefix="/api")

    if app.config["SERVE_UI"]:
        from app.routes.views import views_bp

        app.config["TASK_API_IN_PROCESS"] = True
        app.register_blueprint(views_bp)
        logger.info("Serving UI from the API process")

    return app


def create_ui_app(config_name: str | None = None) -> Flask:
    """
    Create the standalone UI application.

    The UI never touches the database; every read and write goes through
    the task API at ``TASK_API_URL``.

    Args:
        config_name: Configuration environment name.
                     If None, uses FLASK_ENV environment variable.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__, static_folder=None)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    logger.info(
        "Creating UI app with config: %s (API at %s)",
        config_class.__name__,
        app.config["TASK_API_URL"],
    )

    _register_cors(app)

    from app.routes.views import views_bp

    app.register_blueprint(views_bp)
    return app
