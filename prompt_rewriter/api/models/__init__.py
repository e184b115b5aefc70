"""API request and response models."""

from prompt_rewriter.api.models.health import HealthResponse
from prompt_rewriter.api.models.modes import ModeInfo, ModesResponse
from prompt_rewriter.api.models.rewrite import (
    ErrorResponse,
    RewriteRequest,
    RewriteResponse,
    SelfImproveRequest,
    SelfImproveResponse,
)

__all__ = [
    # Rewrite
    "RewriteRequest",
    "RewriteResponse",
    "SelfImproveRequest",
    "SelfImproveResponse",
    "ErrorResponse",
    # Modes
    "ModeInfo",
    "ModesResponse",
    # Health
    "HealthResponse",
]
