"""Health check endpoint."""

from fastapi import APIRouter, Request

from prompt_rewriter.api.models.health import HealthResponse
from prompt_rewriter.config.settings import Settings

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Report liveness and whether credentials are configured."""
    settings: Settings = request.app.state.settings
    return HealthResponse(
        status="healthy" if settings.llm_configured else "degraded",
        version="1.0.0",
        model=settings.chat_model,
        llm_configured=settings.llm_configured,
        search_configured=settings.search_configured,
    )
