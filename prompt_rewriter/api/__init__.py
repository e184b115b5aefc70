"""API module with FastAPI application."""

from prompt_rewriter.api.app import app, create_app

__all__ = ["app", "create_app"]
