"""Mock chat models for testing."""

from typing import Any, List

from langchain_core.messages import AIMessage


class ProviderError(Exception):
    """Provider failure carrying an HTTP status, like the OpenAI SDK errors."""

    def __init__(self, status_code: int, message: str = "provider error"):
        super().__init__(message)
        self.status_code = status_code


class MockChatModel:
    """Scripted chat model.

    Each call consumes the next scripted item: strings become replies,
    exceptions are raised. The last item repeats once the script runs out.
    """

    def __init__(self, responses: List[Any] | None = None, usage: dict | None = None):
        self.responses = responses if responses is not None else ["Mock response"]
        self.usage = usage or {"input_tokens": 10, "output_tokens": 5, "total_tokens": 15}
        self.call_count = 0
        self.calls: list[dict[str, Any]] = []

    async def ainvoke(self, messages: List[Any], **kwargs: Any) -> AIMessage:
        """Mock async invocation."""
        self.call_count += 1
        self.calls.append({"messages": list(messages), **kwargs})

        response_idx = min(self.call_count - 1, len(self.responses) - 1)
        item = self.responses[response_idx]
        if isinstance(item, BaseException):
            raise item
        return AIMessage(content=item, usage_metadata=self.usage)

    @property
    def last_messages(self) -> list[Any]:
        return self.calls[-1]["messages"] if self.calls else []


class RecordingSleep:
    """Stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
