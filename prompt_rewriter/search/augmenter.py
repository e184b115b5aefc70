"""Optional web-search augmentation for rewrite requests.

Augmentation never fails the request: a missing credential, an empty query,
a transport error or a timeout all produce an empty ``Augmentation``.
"""

from __future__ import annotations

import asyncio
import re
from typing import Callable, Optional

import structlog

from prompt_rewriter.errors import ErrorKind
from prompt_rewriter.search.base import SearchProvider
from prompt_rewriter.search.models import Augmentation, SearchResult
from prompt_rewriter.utils.date import get_current_year

# Ordered topic rules: the first rule whose keywords appear as whole words wins.
_TOPIC_RULES: tuple[tuple[re.Pattern, Optional[str]], ...] = (
    (re.compile(r"\b(ai|artificial intelligence)\b"), "latest AI developments {year} artificial intelligence trends"),
    (re.compile(r"\b(blog|article)\b"), None),
    (re.compile(r"\b(technology|tech)\b"), "latest technology trends {year} tech developments"),
    (re.compile(r"\b(business|marketing)\b"), "business trends {year} marketing strategies"),
    (re.compile(r"\b(health|medical)\b"), "health trends {year} medical developments"),
)

_BLOG_LEAD_IN = re.compile(r"write\s+(a\s+|an\s+)?(blog(\s+post)?|article)\s+(about|on)\s+", re.IGNORECASE)
_MIN_WORD_LENGTH = 4
_FALLBACK_WORDS = 3


def derive_search_query(user_text: str, year: Optional[int] = None) -> Optional[str]:
    """Build a short search query from the user's text.

    Args:
        user_text: Raw text supplied by the caller
        year: Year used to bias results towards fresh content

    Returns:
        Query string, or None when nothing usable can be derived
    """
    prompt = " ".join((user_text or "").lower().split())
    if not prompt:
        return None
    year = year or get_current_year()

    for pattern, template in _TOPIC_RULES:
        if not pattern.search(prompt):
            continue
        if template is not None:
            return template.format(year=year)
        topic = _BLOG_LEAD_IN.sub("", prompt).strip()
        return f"{topic} latest news {year} current developments"

    words = [word for word in prompt.split(" ") if len(word) >= _MIN_WORD_LENGTH]
    if words:
        return f"{' '.join(words[:_FALLBACK_WORDS])} {year} latest developments"
    return None


def build_augmentation(results: list[SearchResult]) -> Augmentation:
    """Join usable results into snippet text and collect their links."""
    usable = [result for result in results if result.title.strip() and result.snippet.strip()]
    snippet_text = "\n\n".join(f"{result.title.strip()}: {result.snippet.strip()}" for result in usable)
    links = [result.link for result in usable if result.link]
    return Augmentation(snippet_text=snippet_text, source_links=links)


class SearchAugmenter:
    """Fetches a handful of search snippets relevant to the user's text."""

    def __init__(
        self,
        provider: Optional[SearchProvider],
        max_results: int = 5,
        timeout: float = 10.0,
        query_builder: Callable[[str], Optional[str]] = derive_search_query,
        logger=None,
    ):
        """
        Initialize the augmenter.

        Args:
            provider: Search transport, or None when search is not configured
            max_results: Organic results requested per search
            timeout: Ceiling in seconds for the search call
            query_builder: Turns user text into a search query
            logger: Structured logger for search events
        """
        self.provider = provider
        self.max_results = max_results
        self.timeout = timeout
        self.query_builder = query_builder
        self.logger = logger or structlog.get_logger(__name__)

    async def augment(self, user_text: str) -> Augmentation:
        if self.provider is None:
            self.logger.info("search_skipped", reason="not_configured")
            return Augmentation()

        query = self.query_builder(user_text)
        if not query:
            self.logger.info("search_skipped", reason="no_query")
            return Augmentation()

        try:
            response = await asyncio.wait_for(
                self.provider.search(query, max_results=self.max_results),
                timeout=self.timeout,
            )
        except Exception as exc:
            self.logger.warning(
                "search_failed",
                provider=self.provider.name,
                kind=ErrorKind.SEARCH_UNAVAILABLE.value,
                query=query,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return Augmentation()

        augmentation = build_augmentation(response.results[: self.max_results])
        self.logger.info(
            "search_completed",
            provider=self.provider.name,
            query=query,
            results_count=len(response.results),
            sources_count=len(augmentation.source_links),
        )
        return augmentation
