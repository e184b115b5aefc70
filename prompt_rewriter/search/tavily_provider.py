"""Tavily search provider implementation."""

import asyncio

import structlog
from tavily import TavilyClient

from prompt_rewriter.search.base import SearchProvider
from prompt_rewriter.search.models import SearchResponse, SearchResult

logger = structlog.get_logger(__name__)


class TavilySearchProvider(SearchProvider):
    """Tavily API search provider."""

    name = "tavily"

    def __init__(self, api_key: str, timeout: float = 10.0):
        """
        Initialize Tavily provider.

        Args:
            api_key: Tavily API key
            timeout: Request timeout in seconds
        """
        self.client = TavilyClient(api_key=api_key)
        self.timeout = timeout
        logger.info("TavilySearchProvider initialized")

    async def search(self, query: str, max_results: int = 5) -> SearchResponse:
        """
        Search using Tavily API.

        Args:
            query: Search query
            max_results: Maximum results

        Returns:
            SearchResponse with results
        """
        # Tavily client is synchronous; keep it off the event loop
        response = await asyncio.to_thread(
            self.client.search,
            query=query,
            max_results=max_results,
            search_depth="basic",
            include_answer=False,
            include_raw_content=False,
            timeout=int(self.timeout),
        )

        results = [
            SearchResult(
                title=result.get("title") or "",
                snippet=result.get("content") or "",
                link=result.get("url") or "",
            )
            for result in response.get("results", [])
        ]

        logger.info("Tavily search completed", query=query, results_count=len(results))

        return SearchResponse(
            query=query,
            results=results,
            total_results=len(results),
        )
