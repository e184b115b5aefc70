"""Base class for prompt builders."""

from abc import ABC
from typing import List


class PromptBuilder(ABC):
    """Base class for all prompt builders.

    Provides common utilities for formatting prompts.
    """

    def _with_context(self, label: str, context: str, body: str) -> str:
        """Prefix a message body with a labelled context block when there is one.

        Args:
            label: Lead-in for the context block
            context: Context text, possibly empty
            body: Message body

        Returns:
            Combined message
        """
        if not context:
            return body
        return f"{label}: {context}\n\n{body}"

    def _format_sections(self, sections: List[str]) -> str:
        """Join non-empty sections with blank lines."""
        return "\n\n".join(s for s in sections if s)
