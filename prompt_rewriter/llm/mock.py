"""Mock chat model for offline runs."""

from __future__ import annotations

import re
from typing import Any, List, Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, SystemMessage
from langchain_core.outputs import ChatGeneration, ChatResult

_QUOTED_PROMPT = re.compile(r'REWRITE THIS SPECIFIC PROMPT for [^:\n]+:\s*"(.*)"', re.DOTALL)
_CONTENT_REQUEST = re.compile(r"publication-ready content for:\s*(.+)", re.DOTALL)
_DOCUMENT_REQUEST = re.compile(r"into a professional document:\s*(.+)", re.DOTALL)
_CURRENT_OUTPUT = re.compile(r"Current Output:\s*(.*?)\s*Provide only the improved version\.", re.DOTALL)


class MockChatModel(BaseChatModel):
    """Minimal chat model that returns deterministic responses."""

    model_name: str = "mock"

    @property
    def _llm_type(self) -> str:
        return "mock-chat"

    def _generate(
        self,
        messages: List[BaseMessage],
        stop: Optional[List[str]] = None,
        run_manager: Any = None,
        **kwargs: Any,
    ) -> ChatResult:
        content = self._compose_response(messages)
        message = AIMessage(
            content=content,
            usage_metadata={
                "input_tokens": sum(len(str(m.content)) for m in messages) // 4,
                "output_tokens": len(content) // 4,
                "total_tokens": (sum(len(str(m.content)) for m in messages) + len(content)) // 4,
            },
        )
        return ChatResult(generations=[ChatGeneration(message=message)])

    async def _agenerate(
        self,
        messages: List[BaseMessage],
        stop: Optional[List[str]] = None,
        run_manager: Any = None,
        **kwargs: Any,
    ) -> ChatResult:
        return self._generate(messages, stop=stop, run_manager=run_manager, **kwargs)

    def _compose_response(self, messages: List[BaseMessage]) -> str:
        if not messages:
            return "Mock response."

        system = next((str(m.content) for m in messages if isinstance(m, SystemMessage)), "")
        last_text = str(messages[-1].content)
        wants_framework = "Role: [" in system

        match = _CURRENT_OUTPUT.search(last_text)
        if match:
            return f"Here is the improved version: {match.group(1).strip()}"

        match = _QUOTED_PROMPT.search(last_text)
        if match:
            topic = match.group(1).strip()
            if wants_framework:
                return self._framework(topic)
            return f"Here is the rewritten prompt: You are an expert assistant. {topic}. Explain your reasoning and cite sources."

        match = _CONTENT_REQUEST.search(last_text)
        if match:
            topic = match.group(1).strip()
            return f"# {topic}\n\nThis mock article covers {topic} for a general audience.\n\nI hope this helps!"

        match = _DOCUMENT_REQUEST.search(last_text)
        if match:
            return " ".join(match.group(1).split())

        return "Mock response based on provided context."

    def _framework(self, topic: str) -> str:
        return "\n\n".join(
            [
                "Role: Senior specialist for the request.",
                f"Context: The user asked: {topic}",
                "Task: Produce a complete, actionable answer.",
                "Format: Numbered sections with short paragraphs.",
                "Rules: Be specific and cite assumptions.",
                "Examples: One worked example relevant to the request.",
            ]
        )
