"""Line scanner that rebuilds a fixed, ordered set of labelled sections.

Models asked for a labelled structure ("Role: ...", "Context: ...") often
add a preamble, repeat the whole structure, or trail off into commentary.
The scanner keeps the first instance of each label and stops at the first
repeated label, so runaway repetition is cut rather than merged.

States:
    BEFORE_FIRST_LABEL  preamble; lines are dropped until a label appears
    IN_SECTION          lines are appended to the open section
    DONE                a repeated label or closing commentary was reached
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from prompt_rewriter.normalization.patterns import COMMENTARY_LINE, EXCESS_BLANK_LINES

_BULLET_MARKERS = ("-", "•", "*")


class ScanState(str, Enum):
    BEFORE_FIRST_LABEL = "before_first_label"
    IN_SECTION = "in_section"
    DONE = "done"


@dataclass
class SectionScan:
    """Outcome of one scan."""

    text: str
    labels: list[str] = field(default_factory=list)
    duplicate_label: Optional[str] = None
    stopped_at_commentary: bool = False

    @property
    def found_any(self) -> bool:
        return bool(self.labels)


class SectionScanner:
    """Rebuilds text around ``labels``, keeping each one at most once."""

    def __init__(self, labels: Sequence[str]):
        if not labels:
            raise ValueError("SectionScanner needs at least one label")
        self.labels = tuple(labels)
        alternatives = "|".join(re.escape(label) for label in self.labels)
        # Optional markdown heading/bold decoration around the label
        self._label_line = re.compile(rf"^(?:#{{1,6}}\s*)?(?:\*\*)?({alternatives})(?:\*\*)?:")
        self._first_label_line = re.compile(
            rf"^[ \t]*(?:#{{1,6}}\s*)?(?:\*\*)?{re.escape(self.labels[0])}(?:\*\*)?:",
            re.MULTILINE,
        )

    def match_label(self, line: str) -> Optional[str]:
        """Return the label a line opens with, if any."""
        match = self._label_line.match(line.strip())
        return match.group(1) if match else None

    def _drop_preamble(self, text: str) -> str:
        match = self._first_label_line.search(text)
        return text[match.start():] if match else text

    def scan(self, text: str) -> SectionScan:
        """Rebuild the labelled structure found in ``text``."""
        result = SectionScan(text="")
        output: list[str] = []
        state = ScanState.BEFORE_FIRST_LABEL
        previous_blank = False

        for line in self._drop_preamble(text).split("\n"):
            stripped = line.strip()
            label = self.match_label(stripped)

            if state is ScanState.BEFORE_FIRST_LABEL:
                if label is None:
                    continue
                result.labels.append(label)
                output.append(stripped)
                state = ScanState.IN_SECTION
                previous_blank = False
                continue

            if label is not None:
                if label in result.labels:
                    result.duplicate_label = label
                    state = ScanState.DONE
                    break
                result.labels.append(label)
                _trim_trailing_blank(output)
                output.append("")
                output.append(stripped)
                previous_blank = False
                continue

            if not stripped:
                output.append("")
                previous_blank = True
                continue

            if line[:1].isspace() or stripped.startswith(_BULLET_MARKERS):
                output.append(line.rstrip())
            elif previous_blank and COMMENTARY_LINE.match(stripped):
                result.stopped_at_commentary = True
                state = ScanState.DONE
                break
            else:
                output.append(line.rstrip())
            previous_blank = False

        _trim_trailing_blank(output)
        result.text = EXCESS_BLANK_LINES.sub("\n\n", "\n".join(output)).strip()
        return result


def _trim_trailing_blank(lines: list[str]) -> None:
    while lines and not lines[-1].strip():
        lines.pop()
