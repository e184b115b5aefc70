"""Base search provider interface."""

from abc import ABC, abstractmethod

from prompt_rewriter.search.models import SearchResponse


class SearchProvider(ABC):
    """Abstract base class for search providers."""

    name: str = "search"

    @abstractmethod
    async def search(self, query: str, max_results: int = 5) -> SearchResponse:
        """
        Search the web for a query.

        Args:
            query: Search query string
            max_results: Maximum number of results to return

        Returns:
            SearchResponse with results

        Raises:
            Exception: Any transport or provider failure; callers decide how to degrade
        """
        pass
