"""REST API layer: ``create_app`` builds the FastAPI application."""

from vargraph.api.app import create_app

__all__ = ["create_app"]
