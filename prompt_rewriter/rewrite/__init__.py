"""Rewrite and self-improve pipelines."""

from prompt_rewriter.rewrite.service import (
    ImproveResult,
    RewriteResult,
    RewriteService,
    create_rewrite_service,
)

__all__ = [
    "RewriteService",
    "RewriteResult",
    "ImproveResult",
    "create_rewrite_service",
]
