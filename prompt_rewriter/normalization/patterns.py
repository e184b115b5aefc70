"""Conversational filler that models wrap around their answers."""

import re

# A lead-in is only stripped when a colon or a line break follows it
_LEAD_IN_END = r"(?::|[ \t]*(?:\n|$))\s*"

PREFIX_PATTERNS: tuple[re.Pattern, ...] = tuple(
    re.compile(rf"^{phrase}{_LEAD_IN_END}", re.IGNORECASE)
    for phrase in (
        r"Here is the rewritten prompt",
        r"The rewritten prompt is",
        r"Rewritten prompt",
        r"Here's the rewritten prompt",
        r"Here's a rewritten version",
        r"Rewritten version",
        r"Here is the improved version",
        r"The improved version is",
        r"Improved version",
        r"Here's the improved version",
        r"Here's an improved version",
        r"Enhanced version",
        r"Here is an? (?:improved|optimized|rewritten|enhanced)(?: (?:version|prompt))?",
        r"The (?:improved|optimized|rewritten) prompt",
        r"The (?:enhanced|improved|optimized) version",
    )
)

SUFFIX_PATTERNS: tuple[re.Pattern, ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"\s*This (rewritten prompt|improved version)\.{3}$",
        r"\s*I hope this (enhanced version )?helps!?\.?$",
        r"\s*Let me know if you need (any adjustments|further improvements)\.?$",
    )
)

# Lines that close a reply with remarks addressed to the user
COMMENTARY_LINE = re.compile(
    r"^(I hope\b|Let me know\b|Feel free\b|Note:|This (improved|enhanced|rewritten|optimized) (version|prompt|framework)\b)",
    re.IGNORECASE,
)

QUOTE_PAIRS: tuple[tuple[str, str], ...] = (
    ('"', '"'),
    ("'", "'"),
    ("“", "”"),
)

EXCESS_BLANK_LINES = re.compile(r"\n[ \t]*\n(?:[ \t]*\n)+")
