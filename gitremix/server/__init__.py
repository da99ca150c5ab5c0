"""
HTTP server for git-remix.

This package provides the FastAPI application serving the remix endpoint.
"""

from .app import create_app

__all__ = ["create_app"]
