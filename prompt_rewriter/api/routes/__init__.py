"""API routes."""

from prompt_rewriter.api.routes.health import router as health_router
from prompt_rewriter.api.routes.modes import router as modes_router
from prompt_rewriter.api.routes.rewrite import router as rewrite_router

__all__ = [
    "health_router",
    "modes_router",
    "rewrite_router",
]
