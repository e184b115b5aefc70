"""Mock search provider for offline runs."""

from __future__ import annotations

from urllib.parse import quote_plus

from prompt_rewriter.search.base import SearchProvider
from prompt_rewriter.search.models import SearchResponse, SearchResult


class MockSearchProvider(SearchProvider):
    """Return deterministic mock search results."""

    name = "mock"

    async def search(self, query: str, max_results: int = 5) -> SearchResponse:
        safe_query = quote_plus(query.strip() or "query")
        results = [
            SearchResult(
                title=f"Mock Result {idx + 1} for {query}",
                snippet=f"Mock snippet {idx + 1} about {query}.",
                link=f"https://example.com/{safe_query}/{idx + 1}",
            )
            for idx in range(max_results)
        ]
        return SearchResponse(query=query, results=results, total_results=len(results))
