"""WSGI entry point for the standalone task UI."""

import os

from app import create_ui_app

app = create_ui_app(os.getenv("FLASK_ENV", "development"))

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=app.config["UI_PORT"])
