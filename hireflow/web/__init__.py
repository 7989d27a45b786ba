"""Flask web UI for HireFlow."""

from .app import create_app  # noqa: F401
