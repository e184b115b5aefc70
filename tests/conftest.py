"""Shared fixtures."""

import pytest

from prompt_rewriter.config.settings import Settings
from prompt_rewriter.rewrite.service import RewriteService
from tests.mocks import MockChatModel, MockSearchProvider, RecordingLogger, RecordingSleep


@pytest.fixture
def settings() -> Settings:
    """Settings with a usable completion key, isolated from the environment file."""
    return Settings(
        _env_file=None,
        groq_api_key="gsk-test-key",
        search_provider="mock",
        retry_delays=[1.0, 2.0, 4.0],
    )


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def search_provider() -> MockSearchProvider:
    return MockSearchProvider()


@pytest.fixture
def make_service(settings, search_provider, recording_sleep, recording_logger):
    """Factory building a RewriteService around scripted model replies."""

    def _make(responses=None, llm=None, provider=search_provider, service_settings=None):
        llm = llm or MockChatModel(responses)
        service = RewriteService(
            settings=service_settings or settings,
            llm=llm,
            search_provider=provider,
            sleep=recording_sleep,
            logger=recording_logger,
        )
        return service, llm

    return _make
