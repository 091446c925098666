"""API module for the Smart Notes backend."""

from backend.api.app import app, create_app

__all__ = [
    "app",
    "create_app",
]
