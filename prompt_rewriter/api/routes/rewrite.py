"""Rewrite and self-improve endpoints."""

import structlog
from fastapi import APIRouter, Request

from prompt_rewriter.api.models.rewrite import (
    ErrorResponse,
    RewriteRequest,
    RewriteResponse,
    SelfImproveRequest,
    SelfImproveResponse,
)
from prompt_rewriter.rewrite.service import RewriteService

router = APIRouter(tags=["rewrite"])
logger = structlog.get_logger(__name__)

_ERROR_RESPONSES = {
    status: {"model": ErrorResponse}
    for status in (400, 413, 429, 500, 503)
}


@router.post("/rewrite", response_model=RewriteResponse, responses=_ERROR_RESPONSES)
async def rewrite(body: RewriteRequest, request: Request) -> RewriteResponse:
    """Rewrite the user's text for the selected mode.

    Failures raise ServiceError, which the app-level handler turns into
    ``{"error": ...}`` with the matching status code.
    """
    service: RewriteService = request.app.state.rewrite_service
    logger.info("Rewrite request", mode=body.mode, web_access=body.enable_web_access)

    result = await service.rewrite(body.user_prompt, body.mode, body.enable_web_access)

    return RewriteResponse(
        rewritten_prompt=result.text,
        mode=result.mode,
        mode_name=result.mode_name,
        is_content_generation=result.is_direct_content,
        web_access_used=result.web_access_used,
        web_sources=result.sources,
    )


@router.post("/self-improve", response_model=SelfImproveResponse, responses=_ERROR_RESPONSES)
async def self_improve(body: SelfImproveRequest, request: Request) -> SelfImproveResponse:
    """Improve a previous output using the mode's refinement instructions."""
    service: RewriteService = request.app.state.rewrite_service
    logger.info("Self-improve request", mode=body.mode)

    result = await service.self_improve(body.current_output, body.mode)

    return SelfImproveResponse(
        improved_output=result.text,
        mode=result.mode,
        mode_name=result.mode_name,
    )
