"""User-message construction for rewrite and self-improve requests."""

from __future__ import annotations

from prompt_rewriter.config.modes import ModeFamily, ModeProfile
from prompt_rewriter.prompts.base import PromptBuilder


class RewritePromptBuilder(PromptBuilder):
    """Builds the user message sent alongside a mode's system instructions."""

    def build_rewrite(self, user_text: str, mode: ModeProfile, web_context: str = "") -> str:
        """Frame the user's text for the mode family.

        Args:
            user_text: Text supplied by the caller
            mode: Selected mode profile
            web_context: Augmentation snippets, empty when search was skipped or failed

        Returns:
            User message content
        """
        if mode.family is ModeFamily.CONTENT:
            body = f"Generate complete, publication-ready content for: {user_text}"
            return self._with_context("Use this current information to enhance your content", web_context, body)

        if mode.family is ModeFamily.DOCUMENT:
            body = f"Transform this content into a professional document:\n\n{user_text}"
            return self._with_context("Context for enhancement", web_context, body)

        body = self._format_sections(
            [
                f'REWRITE THIS SPECIFIC PROMPT for {mode.display_name}:\n"{user_text}"',
                "Apply your mode's specialization to THEIR specific request. Do not create generic examples.",
            ]
        )
        return self._with_context("Context", web_context, body)

    def build_improvement(self, current_output: str) -> str:
        """Ask for an improved version of a previous output."""
        return self._format_sections(
            [
                "Improve this output following your mode instructions. "
                "Enhance clarity, completeness, and effectiveness while maintaining the original intent.",
                f"Current Output:\n{current_output}",
                "Provide only the improved version.",
            ]
        )
