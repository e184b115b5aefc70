"""SerpApi search provider implementation."""

from __future__ import annotations

from typing import Any

import aiohttp
import structlog

from prompt_rewriter.search.base import SearchProvider
from prompt_rewriter.search.models import SearchResponse, SearchResult

logger = structlog.get_logger(__name__)

SERPAPI_URL = "https://serpapi.com/search"


class SerpApiSearchProvider(SearchProvider):
    """Google organic results through SerpApi."""

    name = "serpapi"

    def __init__(
        self,
        api_key: str,
        engine: str = "google",
        country: str = "us",
        language: str = "en",
        timeout: float = 10.0,
        url: str = SERPAPI_URL,
    ):
        """
        Initialize SerpApi provider.

        Args:
            api_key: SerpApi API key
            engine: SerpApi engine name
            country: Result country (``gl``)
            language: Interface language (``hl``)
            timeout: Request timeout in seconds
            url: Search endpoint
        """
        self.api_key = api_key
        self.engine = engine
        self.country = country
        self.language = language
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.url = url
        logger.info("SerpApiSearchProvider initialized", engine=engine)

    def _build_params(self, query: str, max_results: int) -> dict[str, str | int]:
        return {
            "q": query,
            "api_key": self.api_key,
            "engine": self.engine,
            "num": max_results,
            "gl": self.country,
            "hl": self.language,
        }

    @staticmethod
    def parse_results(payload: dict[str, Any]) -> list[SearchResult]:
        """Convert SerpApi ``organic_results`` into SearchResult models."""
        results = []
        for item in payload.get("organic_results") or []:
            if not isinstance(item, dict):
                continue
            results.append(
                SearchResult(
                    title=str(item.get("title") or ""),
                    snippet=str(item.get("snippet") or ""),
                    link=str(item.get("link") or ""),
                )
            )
        return results

    async def search(self, query: str, max_results: int = 5) -> SearchResponse:
        """
        Search using SerpApi.

        Args:
            query: Search query
            max_results: Maximum results

        Returns:
            SearchResponse with results

        Raises:
            aiohttp.ClientError: Transport failure or non-2xx status
            asyncio.TimeoutError: Request exceeded the timeout
        """
        params = self._build_params(query, max_results)

        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.get(self.url, params=params) as response:
                response.raise_for_status()
                payload = await response.json(content_type=None)

        if not isinstance(payload, dict):
            raise ValueError("Unexpected SerpApi response payload")
        if payload.get("error"):
            raise ValueError(f"SerpApi error: {payload['error']}")

        results = self.parse_results(payload)[:max_results]
        logger.info("SerpApi search completed", query=query, results_count=len(results))

        return SearchResponse(query=query, results=results, total_results=len(results))
