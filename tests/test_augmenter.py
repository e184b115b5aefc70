"""Tests for search augmentation."""

import pytest

from prompt_rewriter.search.augmenter import SearchAugmenter, build_augmentation, derive_search_query
from prompt_rewriter.search.models import SearchResult
from prompt_rewriter.utils.date import get_current_year
from tests.mocks import FailingSearchProvider, HangingSearchProvider, MockSearchProvider, RecordingLogger


@pytest.mark.parametrize(
    "user_text,expected",
    [
        ("How will AI change hiring?", "latest AI developments 2026 artificial intelligence trends"),
        ("Uses of artificial intelligence in farming", "latest AI developments 2026 artificial intelligence trends"),
        ("Write a blog post about sourdough baking", "sourdough baking latest news 2026 current developments"),
        ("Best tech for remote teams", "latest technology trends 2026 tech developments"),
        ("Grow my small business online", "business trends 2026 marketing strategies"),
        ("Medical imaging breakthroughs", "health trends 2026 medical developments"),
        ("Explain quantum computing simply", "explain quantum computing 2026 latest developments"),
    ],
)
def test_derive_search_query(user_text, expected):
    assert derive_search_query(user_text, year=2026) == expected


def test_query_defaults_to_current_year():
    year = get_current_year()
    assert derive_search_query("Explain quantum computing") == f"explain quantum computing {year} latest developments"


def test_keywords_match_whole_words_only():
    # "maintain" contains "ai", "biotech" contains "tech"
    assert derive_search_query("maintain biotech labs", year=2026) == "maintain biotech labs 2026 latest developments"


@pytest.mark.parametrize("user_text", ["", "   ", "hi so do it"])
def test_no_query_when_nothing_usable(user_text):
    assert derive_search_query(user_text, year=2026) is None


def test_build_augmentation_filters_incomplete_results():
    augmentation = build_augmentation(
        [
            SearchResult(title="Qubits", snippet="Two states at once.", link="https://example.com/a"),
            SearchResult(title="", snippet="No title here.", link="https://example.com/b"),
            SearchResult(title="No snippet", snippet="  ", link="https://example.com/c"),
            SearchResult(title="No link", snippet="Still useful.", link=""),
        ]
    )

    assert augmentation.snippet_text == "Qubits: Two states at once.\n\nNo link: Still useful."
    assert augmentation.source_links == ["https://example.com/a"]
    assert augmentation.used


def test_empty_augmentation_is_unused():
    augmentation = build_augmentation([])
    assert augmentation.snippet_text == ""
    assert augmentation.source_links == []
    assert not augmentation.used


@pytest.mark.asyncio
async def test_augment_uses_provider_results():
    provider = MockSearchProvider()
    logger = RecordingLogger()
    augmenter = SearchAugmenter(provider, max_results=5, logger=logger)

    augmentation = await augmenter.augment("Explain quantum computing")

    assert provider.queries and provider.queries[0].startswith("explain quantum computing")
    assert provider.max_results_seen == [5]
    assert augmentation.source_links == ["https://example.com/quantum", "https://example.com/hardware"]
    assert "Quantum Computing Explained: Quantum computers use qubits" in augmentation.snippet_text
    (event,) = logger.events("search_completed")
    assert event["results_count"] == 2


@pytest.mark.asyncio
async def test_augment_caps_results():
    provider = MockSearchProvider(
        [{"title": f"T{i}", "snippet": f"S{i}", "link": f"https://example.com/{i}"} for i in range(8)]
    )
    augmenter = SearchAugmenter(provider, max_results=3, logger=RecordingLogger())

    augmentation = await augmenter.augment("Explain quantum computing")

    assert len(augmentation.source_links) == 3


@pytest.mark.asyncio
async def test_augment_without_provider_is_skipped():
    logger = RecordingLogger()

    augmentation = await SearchAugmenter(None, logger=logger).augment("Explain quantum computing")

    assert not augmentation.used
    assert logger.events("search_skipped") == [{"reason": "not_configured"}]


@pytest.mark.asyncio
async def test_augment_without_query_is_skipped():
    provider = MockSearchProvider()
    logger = RecordingLogger()

    augmentation = await SearchAugmenter(provider, logger=logger).augment("hi")

    assert not augmentation.used
    assert provider.queries == []
    assert logger.events("search_skipped") == [{"reason": "no_query"}]


@pytest.mark.asyncio
async def test_augment_swallows_provider_failure():
    provider = FailingSearchProvider()
    logger = RecordingLogger()

    augmentation = await SearchAugmenter(provider, logger=logger).augment("Explain quantum computing")

    assert augmentation.snippet_text == ""
    assert augmentation.source_links == []
    assert provider.search_count == 1
    (event,) = logger.events("search_failed")
    assert event["error_type"] == "ConnectionError"
    assert event["kind"] == "search_unavailable"


@pytest.mark.asyncio
async def test_augment_times_out():
    logger = RecordingLogger()
    augmenter = SearchAugmenter(HangingSearchProvider(), timeout=0.01, logger=logger)

    augmentation = await augmenter.augment("Explain quantum computing")

    assert not augmentation.used
    assert len(logger.events("search_failed")) == 1
