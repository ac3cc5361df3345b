"""
project: Warren
module: __init__.py
License: MIT

Flask application factory.

The layout engine itself lives in ``warren.layout`` and has no web
dependencies beyond optional app-config lookups; this factory wires the
JSON blueprint that serves generated layouts to out-of-process renderers.
Configuration is sourced from environment variables (optionally via a local
``.env``) with development defaults.
"""

import os

from dotenv import load_dotenv
from flask import Flask

# Load .env if present so WARREN_* variables can be supplied without exporting
# shell variables during development.
load_dotenv()

__version__ = "0.2.0"


def create_app(config: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # Read-only checkouts still serve layouts; only file logging needs the folder
        pass
    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        LAYOUT_CACHE_MAX=int(os.getenv("WARREN_LAYOUT_CACHE_MAX", "8")),
        JSON_SORT_KEYS=False,
    )
    if config:
        app.config.update(config)

    from warren.routes.layout_api import bp_layout

    app.register_blueprint(bp_layout)
    return app
