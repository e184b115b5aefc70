"""Completion calls with bounded retries and error classification.

Each call makes up to ``max_attempts`` attempts. Between attempts the invoker
waits ``delays[attempt]`` seconds, doubled when the provider rate-limited the
request. Failures are classified in a fixed priority order:

1. rate limited (429) - retryable, doubled delay
2. payload too large (413) - terminal
3. connection problems and timeouts - retryable
4. rejected credentials (401/403) - terminal, reported as misconfiguration
5. provider errors (5xx) - retryable
6. anything else - retryable, reported as an unexpected failure
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Sequence

import httpx
import openai
import structlog
from langchain_core.messages import BaseMessage

from prompt_rewriter.errors import ErrorKind, ServiceError

SleepFn = Callable[[float], Awaitable[Any]]

DEFAULT_DELAYS: tuple[float, ...] = (1.0, 2.0, 4.0)

_CONNECTION_ERRORS: tuple[type[BaseException], ...] = (
    asyncio.TimeoutError,
    TimeoutError,
    ConnectionError,
    openai.APITimeoutError,
    openai.APIConnectionError,
    httpx.TimeoutException,
    httpx.NetworkError,
)


@dataclass(frozen=True)
class CompletionAttempt:
    """Record of one provider call within an invocation."""

    index: int
    duration_ms: int
    succeeded: bool
    kind: Optional[ErrorKind] = None
    retryable: bool = False
    usage_tokens: Optional[int] = None


@dataclass
class CompletionResult:
    """Raw completion text plus the metadata gathered while producing it."""

    text: str
    usage: dict[str, int] = field(default_factory=dict)
    attempts: list[CompletionAttempt] = field(default_factory=list)


def _status_code(error: BaseException) -> Optional[int]:
    for attr in ("status_code", "status", "http_status"):
        value = getattr(error, attr, None)
        if isinstance(value, int):
            return value
    response = getattr(error, "response", None)
    value = getattr(response, "status_code", None)
    return value if isinstance(value, int) else None


def classify_failure(error: BaseException) -> tuple[ErrorKind, bool]:
    """Classify a provider failure.

    Returns:
        Tuple of (error kind, whether the attempt may be retried)
    """
    status = _status_code(error)

    if status == 429 or isinstance(error, openai.RateLimitError):
        return ErrorKind.RATE_LIMITED, True
    if status == 413:
        return ErrorKind.PAYLOAD_TOO_LARGE, False
    if isinstance(error, _CONNECTION_ERRORS) or "timeout" in str(error).lower():
        return ErrorKind.TIMEOUT, True
    if status in (401, 403) or isinstance(error, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return ErrorKind.MISCONFIGURED, False
    if status is not None and status >= 500:
        return ErrorKind.SERVICE_UNAVAILABLE, True
    return ErrorKind.UNEXPECTED, True


def extract_text(message: Any) -> str:
    """Pull plain text out of a chat model response."""
    content = getattr(message, "content", message)
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text") or ""))
        return "".join(parts)
    return str(content)


def extract_usage(message: Any) -> dict[str, int]:
    """Token counters reported by the provider, if any."""
    usage = getattr(message, "usage_metadata", None)
    if usage:
        return {key: int(value) for key, value in dict(usage).items() if isinstance(value, int)}
    metadata = getattr(message, "response_metadata", None) or {}
    token_usage = metadata.get("token_usage") or {}
    if not token_usage:
        return {}
    return {
        "input_tokens": int(token_usage.get("prompt_tokens") or 0),
        "output_tokens": int(token_usage.get("completion_tokens") or 0),
        "total_tokens": int(token_usage.get("total_tokens") or 0),
    }


class CompletionInvoker:
    """Calls a chat model with bounded retries and classified failures."""

    def __init__(
        self,
        llm: Any,
        max_completion_tokens: int = 32768,
        timeout: float = 30.0,
        max_attempts: int = 3,
        delays: Sequence[float] = DEFAULT_DELAYS,
        sleep: SleepFn = asyncio.sleep,
        logger=None,
    ):
        """
        Initialize the invoker.

        Args:
            llm: Chat model exposing ``ainvoke(messages, **kwargs)``
            max_completion_tokens: Hard ceiling applied to every request's max_tokens
            timeout: Ceiling in seconds for a single attempt
            max_attempts: Attempts in total, including the first
            delays: Backoff schedule indexed by attempt number
            sleep: Coroutine used to wait between attempts
            logger: Structured logger receiving per-attempt events
        """
        if not delays:
            raise ValueError("Backoff schedule must not be empty")
        self.llm = llm
        self.max_completion_tokens = max_completion_tokens
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.delays = tuple(delays)
        self.sleep = sleep
        self.logger = logger or structlog.get_logger(__name__)

    def _delay_for(self, attempt: int, kind: ErrorKind) -> float:
        delay = self.delays[min(attempt, len(self.delays) - 1)]
        if kind is ErrorKind.RATE_LIMITED:
            delay *= 2
        return delay

    async def invoke(
        self,
        messages: Sequence[BaseMessage],
        temperature: float,
        max_output_tokens: int,
    ) -> CompletionResult:
        """Run the completion, retrying transient failures.

        Args:
            messages: Ordered system and user messages, replayed verbatim on retry
            temperature: Sampling temperature
            max_output_tokens: Requested completion size, capped at the model ceiling

        Returns:
            CompletionResult with the raw text, which may be empty

        Raises:
            ServiceError: Terminal failure or exhausted retries
        """
        max_tokens = min(max_output_tokens, self.max_completion_tokens)
        attempts: list[CompletionAttempt] = []

        for attempt in range(self.max_attempts):
            is_last_attempt = attempt == self.max_attempts - 1
            started = time.perf_counter()
            self.logger.debug(
                "completion_attempt_started",
                attempt=attempt + 1,
                max_attempts=self.max_attempts,
                temperature=temperature,
                max_tokens=max_tokens,
            )

            try:
                response = await asyncio.wait_for(
                    self.llm.ainvoke(list(messages), temperature=temperature, max_tokens=max_tokens),
                    timeout=self.timeout,
                )
            except Exception as exc:
                duration_ms = int((time.perf_counter() - started) * 1000)
                kind, retryable = classify_failure(exc)
                attempts.append(
                    CompletionAttempt(
                        index=attempt,
                        duration_ms=duration_ms,
                        succeeded=False,
                        kind=kind,
                        retryable=retryable,
                    )
                )
                self.logger.warning(
                    "completion_attempt_failed",
                    attempt=attempt + 1,
                    max_attempts=self.max_attempts,
                    duration_ms=duration_ms,
                    kind=kind.value,
                    retryable=retryable,
                    error_type=type(exc).__name__,
                    error=str(exc),
                    status=_status_code(exc),
                )

                if not retryable or is_last_attempt:
                    raise ServiceError(kind, str(exc)) from exc

                delay = self._delay_for(attempt, kind)
                self.logger.info(
                    "completion_retry_scheduled",
                    attempt=attempt + 1,
                    kind=kind.value,
                    delay_seconds=delay,
                )
                await self.sleep(delay)
                continue

            duration_ms = int((time.perf_counter() - started) * 1000)
            usage = extract_usage(response)
            attempts.append(
                CompletionAttempt(
                    index=attempt,
                    duration_ms=duration_ms,
                    succeeded=True,
                    usage_tokens=usage.get("total_tokens"),
                )
            )
            self.logger.info(
                "completion_attempt_succeeded",
                attempt=attempt + 1,
                duration_ms=duration_ms,
                total_tokens=usage.get("total_tokens"),
                output_tokens=usage.get("output_tokens"),
            )
            return CompletionResult(text=extract_text(response), usage=usage, attempts=attempts)

        # max_attempts >= 1, so the loop always returns or raises
        raise ServiceError(ErrorKind.UNEXPECTED, "completion attempts exhausted")
