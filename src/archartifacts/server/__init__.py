"""HTTP server: the FastAPI application factory."""

from archartifacts.server.app import create_app

__all__ = ["create_app"]
