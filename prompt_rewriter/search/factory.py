"""Search provider factory."""

from typing import Optional

import structlog

from prompt_rewriter.config.settings import Settings
from prompt_rewriter.search.base import SearchProvider
from prompt_rewriter.search.mock_provider import MockSearchProvider
from prompt_rewriter.search.serpapi_provider import SerpApiSearchProvider

logger = structlog.get_logger(__name__)


def create_search_provider(settings: Settings) -> Optional[SearchProvider]:
    """
    Create search provider based on configuration.

    Args:
        settings: Application settings

    Returns:
        Configured SearchProvider instance, or None when the selected
        provider has no usable credential (augmentation is then skipped)

    Raises:
        ValueError: If the search provider name is unknown
    """
    if settings.search_provider == "mock":
        logger.info("Creating MockSearchProvider")
        return MockSearchProvider()

    if not settings.search_configured:
        logger.info("Search API key not configured, web search disabled", provider=settings.search_provider)
        return None

    if settings.search_provider == "serpapi":
        logger.info("Creating SerpApiSearchProvider")
        return SerpApiSearchProvider(
            api_key=settings.serpapi_api_key,
            engine=settings.serpapi_engine,
            country=settings.search_country,
            language=settings.search_language,
            timeout=settings.search_timeout,
        )

    if settings.search_provider == "tavily":
        from prompt_rewriter.search.tavily_provider import TavilySearchProvider

        logger.info("Creating TavilySearchProvider")
        return TavilySearchProvider(api_key=settings.tavily_api_key, timeout=settings.search_timeout)

    raise ValueError(
        f"Unknown search provider: {settings.search_provider}. "
        f"Supported providers: serpapi, tavily, mock"
    )
