"""Rewrite service: the rewrite and self-improve pipelines."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import structlog
from langchain_core.messages import HumanMessage, SystemMessage

from prompt_rewriter.config.modes import ModeProfile, get_mode
from prompt_rewriter.config.settings import Settings
from prompt_rewriter.errors import ErrorKind, ServiceError
from prompt_rewriter.llm.budget import TokenBudgetEstimator
from prompt_rewriter.llm.invoker import CompletionInvoker, SleepFn
from prompt_rewriter.normalization.normalizer import ResponseNormalizer
from prompt_rewriter.prompts.messages import RewritePromptBuilder
from prompt_rewriter.search.augmenter import SearchAugmenter
from prompt_rewriter.search.base import SearchProvider
from prompt_rewriter.search.models import Augmentation

logger = structlog.get_logger(__name__)


@dataclass
class RewriteResult:
    """Result of the rewrite pipeline."""

    text: str
    mode: str
    mode_name: str
    is_direct_content: bool
    web_access_used: bool
    sources: list[str] = field(default_factory=list)


@dataclass
class ImproveResult:
    """Result of the self-improve pipeline."""

    text: str
    mode: str
    mode_name: str


class RewriteService:
    """Composes budget checks, augmentation, completion and normalization.

    The service holds no per-request state; one instance serves all requests.
    """

    def __init__(
        self,
        settings: Settings,
        llm: Any = None,
        search_provider: Optional[SearchProvider] = None,
        sleep: SleepFn = asyncio.sleep,
        logger=None,
        llm_factory: Optional[Callable[[Settings], Any]] = None,
        settings_loader: Optional[Callable[[], Settings]] = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            settings: Application settings, consulted per request for credentials
            llm: Chat model; required before the first completion when credentials are set
            search_provider: Search transport, or None to disable augmentation
            sleep: Coroutine used for retry backoff
            logger: Structured logger shared by the pipeline components
            llm_factory: Builds the chat model once credentials appear, when ``llm`` is None
            settings_loader: Re-reads settings while no chat model has been built
        """
        self.settings = settings
        self.logger = logger or structlog.get_logger(__name__)
        self.prompts = RewritePromptBuilder()
        self.budget = TokenBudgetEstimator(
            max_context_tokens=settings.max_context_tokens,
            chars_per_token=settings.chars_per_token,
            input_budget_ratio=settings.input_budget_ratio,
            logger=self.logger,
        )
        self.augmenter = SearchAugmenter(
            search_provider,
            max_results=settings.search_max_results,
            timeout=settings.search_timeout,
            logger=self.logger,
        )
        self.sleep = sleep
        self.llm_factory = llm_factory
        self.settings_loader = settings_loader
        self.invoker = self._build_invoker(llm) if llm is not None else None
        self.normalizer = ResponseNormalizer(logger=self.logger)

    def _require_text(self, value: Any, field_name: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ServiceError(ErrorKind.INVALID_INPUT, f"{field_name} is required and must be a string")
        return value

    def _build_invoker(self, llm: Any) -> CompletionInvoker:
        return CompletionInvoker(
            llm,
            max_completion_tokens=self.settings.max_completion_tokens,
            timeout=self.settings.completion_timeout,
            max_attempts=self.settings.max_retries,
            delays=self.settings.retry_delays,
            sleep=self.sleep,
            logger=self.logger,
        )

    def _load_invoker(self) -> None:
        # Credentials may be supplied after startup; pick them up on the next request
        settings = self.settings_loader() if self.settings_loader else self.settings
        if not settings.llm_configured:
            return
        llm = self.llm_factory(settings)
        self.settings = settings
        self.invoker = self._build_invoker(llm)
        self.logger.info("completion_provider_configured", model=settings.chat_model)

    def _require_configured(self) -> CompletionInvoker:
        if self.invoker is None and self.llm_factory is not None:
            self._load_invoker()
        if not self.settings.llm_configured or self.invoker is None:
            self.logger.error("completion_provider_not_configured", llm_mode=self.settings.llm_mode)
            raise ServiceError(ErrorKind.MISCONFIGURED, "Completion provider API key not configured")
        return self.invoker

    async def _augment(self, user_text: str, mode: ModeProfile, requested: bool) -> Augmentation:
        if not (requested or mode.always_augmented):
            return Augmentation()
        try:
            return await self.augmenter.augment(user_text)
        except Exception as exc:
            self.logger.warning(
                "search_failed",
                kind=ErrorKind.SEARCH_UNAVAILABLE.value,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return Augmentation()

    async def _complete(
        self,
        invoker: CompletionInvoker,
        mode: ModeProfile,
        system_text: str,
        user_message: str,
        temperature: float,
        max_output_tokens: int,
    ) -> str:
        messages = [SystemMessage(content=system_text), HumanMessage(content=user_message)]
        result = await invoker.invoke(messages, temperature=temperature, max_output_tokens=max_output_tokens)

        if not result.text or not result.text.strip():
            self.logger.error("completion_empty", mode=mode.key, attempts=len(result.attempts))
            raise ServiceError(ErrorKind.EMPTY_RESPONSE, "Provider returned no text")

        normalized = self.normalizer.normalize(result.text, mode)
        if not normalized:
            self.logger.error("normalized_output_empty", mode=mode.key, raw_length=len(result.text))
            raise ServiceError(ErrorKind.EMPTY_RESPONSE, "Reply was empty after normalization")
        return normalized

    async def rewrite(
        self,
        user_text: Any,
        mode_key: Any,
        web_access_requested: bool = False,
    ) -> RewriteResult:
        """Rewrite ``user_text`` for the selected mode.

        Args:
            user_text: Text to transform
            mode_key: Registered mode key
            web_access_requested: Ask for search augmentation regardless of mode

        Returns:
            RewriteResult with the normalized text and the sources used

        Raises:
            ServiceError: Invalid input, misconfiguration, oversize request or completion failure
        """
        user_text = self._require_text(user_text, "userPrompt")
        mode = get_mode(mode_key)
        invoker = self._require_configured()

        augmentation = await self._augment(user_text, mode, bool(web_access_requested))
        user_message = self.prompts.build_rewrite(user_text, mode, augmentation.snippet_text)

        if not self.budget.validate(mode.system_instructions, user_message, augmentation.snippet_text):
            raise ServiceError(ErrorKind.PAYLOAD_TOO_LARGE, "Request exceeds the input token budget")

        text = await self._complete(
            invoker,
            mode,
            mode.system_instructions,
            user_message,
            temperature=mode.temperature,
            max_output_tokens=mode.max_output_tokens,
        )

        self.logger.info(
            "rewrite_completed",
            mode=mode.key,
            web_access_used=augmentation.used,
            sources=len(augmentation.source_links),
            output_chars=len(text),
        )
        return RewriteResult(
            text=text,
            mode=mode.key,
            mode_name=mode.display_name,
            is_direct_content=mode.is_direct_content,
            web_access_used=augmentation.used,
            sources=list(augmentation.source_links) if augmentation.used else [],
        )

    async def self_improve(self, current_output: Any, mode_key: Any) -> ImproveResult:
        """Ask the model for an improved version of a previous output.

        Uses the mode's improvement instructions; no search augmentation.
        """
        current_output = self._require_text(current_output, "currentOutput")
        mode = get_mode(mode_key)
        invoker = self._require_configured()

        user_message = self.prompts.build_improvement(current_output)
        if not self.budget.validate(mode.improve_instructions, user_message):
            raise ServiceError(ErrorKind.PAYLOAD_TOO_LARGE, "Request exceeds the input token budget")

        text = await self._complete(
            invoker,
            mode,
            mode.improve_instructions,
            user_message,
            temperature=mode.improve_temperature,
            max_output_tokens=mode.improve_max_output_tokens,
        )

        self.logger.info("self_improve_completed", mode=mode.key, output_chars=len(text))
        return ImproveResult(text=text, mode=mode.key, mode_name=mode.display_name)


def create_rewrite_service(settings: Settings) -> RewriteService:
    """Build a service from settings, wiring the chat model and search provider."""
    from prompt_rewriter.llm.factory import create_chat_model
    from prompt_rewriter.search.factory import create_search_provider

    llm = create_chat_model(settings) if settings.llm_configured else None
    if llm is None:
        logger.warning("Completion provider API key not configured; requests will fail until it is set")

    return RewriteService(
        settings=settings,
        llm=llm,
        search_provider=create_search_provider(settings),
        llm_factory=create_chat_model,
        settings_loader=Settings,
    )
