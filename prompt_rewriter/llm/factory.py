"""LLM factory for the completion provider."""

from __future__ import annotations

import structlog
from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from prompt_rewriter.config.settings import Settings, is_configured
from prompt_rewriter.errors import ErrorKind, ServiceError
from prompt_rewriter.llm.mock import MockChatModel

logger = structlog.get_logger(__name__)


def create_chat_model(settings: Settings) -> BaseChatModel:
    """Create the long-lived chat model used for every completion.

    Client-side retries are disabled; retrying is the invoker's job.
    Temperature and max_tokens are supplied per call.
    """
    if settings.llm_mode == "mock" or settings.chat_model.startswith("mock"):
        logger.info("using_mock_llm")
        return MockChatModel()

    if not is_configured(settings.groq_api_key, settings.placeholder_api_key):
        raise ServiceError(ErrorKind.MISCONFIGURED, "Completion provider API key not configured")

    llm_kwargs = {
        "model": settings.chat_model,
        "api_key": settings.groq_api_key,
        "base_url": settings.groq_base_url,
        "timeout": settings.completion_timeout,
        "max_retries": 0,
        "streaming": False,
    }

    logger.debug("creating_chat_model", model=settings.chat_model, base_url=settings.groq_base_url)
    return ChatOpenAI(**llm_kwargs)
