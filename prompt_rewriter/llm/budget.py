"""Token budget estimation for outbound completion requests.

Counts are approximated from character length (``chars_per_token`` characters
per token). This is triage before the network call, not the provider's
tokenizer; the provider still enforces its own limits.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import structlog

DEFAULT_CHARS_PER_TOKEN = 4
DEFAULT_INPUT_BUDGET_RATIO = 0.8


def estimate_tokens(text: str, chars_per_token: int = DEFAULT_CHARS_PER_TOKEN) -> int:
    """Approximate the number of tokens ``text`` will consume."""
    if not text:
        return 0
    return math.ceil(len(text) / chars_per_token)


@dataclass(frozen=True)
class TokenBudget:
    """Per-request token estimate, split by message component."""

    system_tokens: int
    user_tokens: int
    web_tokens: int
    max_allowed_tokens: int

    @property
    def total_tokens(self) -> int:
        return self.system_tokens + self.user_tokens + self.web_tokens

    @property
    def within_budget(self) -> bool:
        return self.total_tokens <= self.max_allowed_tokens


class TokenBudgetEstimator:
    """Checks requests against the input share of the provider context window."""

    def __init__(
        self,
        max_context_tokens: int,
        chars_per_token: int = DEFAULT_CHARS_PER_TOKEN,
        input_budget_ratio: float = DEFAULT_INPUT_BUDGET_RATIO,
        logger=None,
    ):
        self.max_context_tokens = max_context_tokens
        self.chars_per_token = chars_per_token
        self.input_budget_ratio = input_budget_ratio
        self.logger = logger or structlog.get_logger(__name__)

    @property
    def max_input_tokens(self) -> int:
        # The remaining share of the window is left for the completion.
        return math.floor(self.max_context_tokens * self.input_budget_ratio)

    def estimate(self, text: str) -> int:
        return estimate_tokens(text, self.chars_per_token)

    def measure(self, system_text: str, user_text: str, web_text: str = "") -> TokenBudget:
        """Build a budget from the three message components."""
        return TokenBudget(
            system_tokens=self.estimate(system_text),
            user_tokens=self.estimate(user_text),
            web_tokens=self.estimate(web_text),
            max_allowed_tokens=self.max_input_tokens,
        )

    def validate(self, system_text: str, user_text: str, web_text: str = "") -> bool:
        """Return True when the request fits the input budget.

        Args:
            system_text: System instructions
            user_text: User message
            web_text: Augmentation snippets

        Returns:
            Whether the estimated total is within the input budget
        """
        budget = self.measure(system_text, user_text, web_text)
        self.logger.info(
            "token_budget_estimated",
            system_tokens=budget.system_tokens,
            user_tokens=budget.user_tokens,
            web_tokens=budget.web_tokens,
            total_tokens=budget.total_tokens,
            max_allowed_tokens=budget.max_allowed_tokens,
            within_budget=budget.within_budget,
        )
        return budget.within_budget
