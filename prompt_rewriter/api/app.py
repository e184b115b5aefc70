"""FastAPI application initialization and configuration."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from prompt_rewriter.api.routes import health_router, modes_router, rewrite_router
from prompt_rewriter.config.logging_config import configure_logging
from prompt_rewriter.config.modes import available_modes
from prompt_rewriter.config.settings import Settings, get_settings
from prompt_rewriter.errors import ServiceError, resolve_error
from prompt_rewriter.rewrite.service import create_rewrite_service

logger = structlog.get_logger(__name__)

_NO_CACHE_HEADERS = {"Cache-Control": "no-cache, no-store, must-revalidate"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI app.

    Builds the rewrite service once; it is shared by all requests.
    """
    settings: Settings = app.state.settings
    logger.info("Starting up Prompt Rewriter API...")

    if not hasattr(app.state, "rewrite_service"):
        app.state.rewrite_service = create_rewrite_service(settings)

    logger.info(
        "Prompt Rewriter API started successfully",
        model=settings.chat_model,
        llm_configured=settings.llm_configured,
        search_provider=settings.search_provider,
        available_modes=available_modes(),
    )

    yield

    logger.info("Prompt Rewriter API shutdown complete")


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Map pipeline failures to a short message and status code."""
    status, message = resolve_error(exc)
    logger.warning(
        "request_failed",
        path=request.url.path,
        kind=exc.kind.value,
        status=status,
        detail=exc.detail,
    )
    return JSONResponse({"error": message}, status_code=status, headers=_NO_CACHE_HEADERS)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are client errors with the same shape as every other failure."""
    logger.info("request_failed", path=request.url.path, kind="invalid_input", errors=exc.errors())
    return JSONResponse({"error": "Request body is invalid."}, status_code=400, headers=_NO_CACHE_HEADERS)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Never leak internals to callers."""
    status, message = resolve_error(exc)
    logger.error("request_failed", path=request.url.path, kind="unhandled", error=str(exc), exc_info=True)
    return JSONResponse({"error": message}, status_code=status, headers=_NO_CACHE_HEADERS)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()
    configure_logging(debug_mode=settings.debug, log_level=settings.log_level)

    app = FastAPI(
        title="Prompt Rewriter API",
        description="Mode-based prompt rewriting backed by a hosted LLM",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Include routers
    app.include_router(health_router)
    app.include_router(modes_router)
    app.include_router(rewrite_router)

    logger.info("FastAPI app created")

    return app


# Create app instance
app = create_app()
