"""
Kelime Arena API package.

Provides the FastAPI application for the Kelime Arena word game backend.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
