"""Deterministic clean-up of raw model replies.

Stages, in order:
    1. trim surrounding whitespace
    2. strip conversational prefixes and suffixes
    3. unwrap a single pair of quotes enclosing the whole reply
       (2 and 3 repeat until the text stops changing)
    4. per-mode structure: labelled sections, report headings, or nothing

The normalizer never raises. An empty return value means the reply had no
usable content; callers treat that as an empty response.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Sequence

import structlog

from prompt_rewriter.config.modes import REPORT_HEADINGS, ModeProfile, OutputStyle
from prompt_rewriter.normalization.patterns import (
    EXCESS_BLANK_LINES,
    PREFIX_PATTERNS,
    QUOTE_PAIRS,
    SUFFIX_PATTERNS,
)
from prompt_rewriter.normalization.sections import SectionScanner

_INLINE_BULLET = re.compile(r"([.!?])[ \t]*(?:•|-(?=\s))[ \t]*")


def strip_filler(text: str) -> str:
    """Remove catalogued conversational prefixes and suffixes."""
    for pattern in PREFIX_PATTERNS:
        text = pattern.sub("", text, count=1)
    for pattern in SUFFIX_PATTERNS:
        text = pattern.sub("", text, count=1)
    return text.strip()


def strip_wrappers(text: str) -> str:
    """Strip filler and enclosing quotes until neither changes the text.

    Removing one layer can expose another: "Improved version:" inside quotes,
    or the same lead-in twice.
    """
    while True:
        stripped = unwrap_quotes(strip_filler(text))
        if stripped == text:
            return text
        text = stripped


def unwrap_quotes(text: str) -> str:
    """Remove one pair of quotes when it encloses the entire text."""
    for opening, closing in QUOTE_PAIRS:
        if len(text) < 2 or not (text.startswith(opening) and text.endswith(closing)):
            continue
        inner = text[len(opening):-len(closing)]
        # '"A" and "B"' is two quotations, not one wrapped reply
        if closing != "'" and closing in inner:
            continue
        return inner.strip()
    return text


@lru_cache(maxsize=None)
def _scanner_for(labels: tuple[str, ...]) -> SectionScanner:
    return SectionScanner(labels)


def separate_report_headings(text: str, headings: Sequence[str] = REPORT_HEADINGS) -> str:
    """Start a new paragraph wherever a heading was run into the previous sentence."""
    for heading in headings:
        pattern = re.compile(rf"([.!?])\s*({re.escape(heading)}[:\s])")
        text = pattern.sub(r"\1\n\n\2", text)
    text = _INLINE_BULLET.sub(r"\1\n- ", text)
    return EXCESS_BLANK_LINES.sub("\n\n", text)


class ResponseNormalizer:
    """Turns a raw completion into the text returned to callers."""

    def __init__(self, logger=None):
        self.logger = logger or structlog.get_logger(__name__)

    def normalize(self, raw_text: str, mode: ModeProfile) -> str:
        """Normalize a reply for ``mode``.

        Args:
            raw_text: Completion text as returned by the provider
            mode: Mode the reply was produced for

        Returns:
            Normalized text, empty when nothing usable remained
        """
        text = (raw_text or "").replace("\r\n", "\n").strip()
        text = strip_wrappers(text)

        if mode.output_style is OutputStyle.STRUCTURED and mode.section_labels:
            scan = _scanner_for(tuple(mode.section_labels)).scan(text)
            if scan.found_any:
                if scan.duplicate_label or scan.stopped_at_commentary:
                    self.logger.debug(
                        "structured_reply_truncated",
                        mode=mode.key,
                        duplicate_label=scan.duplicate_label,
                        stopped_at_commentary=scan.stopped_at_commentary,
                    )
                text = strip_wrappers(scan.text)
            else:
                self.logger.debug("structured_reply_without_labels", mode=mode.key)
        elif mode.output_style is OutputStyle.REPORT:
            text = separate_report_headings(text)

        return text.strip()
