"""Mock objects for testing."""

from tests.mocks.mock_llm import MockChatModel, ProviderError, RecordingSleep
from tests.mocks.mock_logger import RecordingLogger
from tests.mocks.mock_search import FailingSearchProvider, HangingSearchProvider, MockSearchProvider

__all__ = [
    "MockChatModel",
    "ProviderError",
    "RecordingSleep",
    "RecordingLogger",
    "MockSearchProvider",
    "FailingSearchProvider",
    "HangingSearchProvider",
]
