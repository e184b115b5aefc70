"""Rewrite mode configurations.

The registry is built once at import time and exposed as a read-only mapping,
so concurrent requests can look modes up without synchronization.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from prompt_rewriter.errors import ErrorKind, ServiceError
from prompt_rewriter.prompts import improve, rewrite


class ModeFamily(str, Enum):
    """How the user's text is framed for the model."""

    REWRITING = "rewriting"
    CONTENT = "content"
    DOCUMENT = "document"


class OutputStyle(str, Enum):
    """Post-processing applied to the model reply."""

    PLAIN = "plain"
    STRUCTURED = "structured"
    REPORT = "report"


FRAMEWORK_LABELS: tuple[str, ...] = ("Role", "Context", "Task", "Format", "Rules", "Examples")

REPORT_HEADINGS: tuple[str, ...] = (
    "Executive Summary",
    "Methodology",
    "Background",
    "Analysis",
    "Findings",
    "Recommendations",
    "Conclusion",
    "Appendices",
    "References",
    "Data Sources",
    "Research Approach",
    "Target Audience",
    "Deliverables",
    "Timeline",
    "Success Metrics",
    "Quality Assurance",
    "Stakeholder Communication",
    "Risk Assessment",
    "Implementation",
    "Follow-up",
)


@dataclass(frozen=True)
class ModeProfile:
    """A named transformation profile."""

    key: str
    display_name: str
    description: str
    family: ModeFamily
    output_style: OutputStyle
    system_instructions: str
    improve_instructions: str
    temperature: float
    max_output_tokens: int
    improve_temperature: float = 0.7
    improve_max_output_tokens: int = 2000
    section_labels: tuple[str, ...] = ()

    @property
    def is_direct_content(self) -> bool:
        """True when the mode produces content rather than a prompt for later use."""
        return self.family in (ModeFamily.CONTENT, ModeFamily.DOCUMENT)

    @property
    def always_augmented(self) -> bool:
        """Direct content modes always try to ground themselves in fresh search results."""
        return self.is_direct_content


def _rewriting(key: str, display_name: str, description: str, system: str, improved: str, **extra) -> ModeProfile:
    return ModeProfile(
        key=key,
        display_name=display_name,
        description=description,
        family=ModeFamily.REWRITING,
        output_style=extra.pop("output_style", OutputStyle.PLAIN),
        system_instructions=system,
        improve_instructions=improved,
        temperature=0.4,
        max_output_tokens=500,
        **extra,
    )


def _direct(key: str, display_name: str, description: str, family: ModeFamily, system: str, improved: str) -> ModeProfile:
    return ModeProfile(
        key=key,
        display_name=display_name,
        description=description,
        family=family,
        output_style=OutputStyle.PLAIN,
        system_instructions=system,
        improve_instructions=improved,
        temperature=0.8,
        max_output_tokens=3000,
    )


_PROFILES: tuple[ModeProfile, ...] = (
    _rewriting(
        "question-research",
        "Question/Research Mode",
        "Turns a plain question into a research prompt with methodology, confidence ratings and sources.",
        rewrite.QUESTION_RESEARCH,
        improve.QUESTION_RESEARCH,
    ),
    _rewriting(
        "report-writing",
        "Report Writing Mode",
        "Turns a report request into a sectioned brief for an AI report writer.",
        rewrite.REPORT_WRITING,
        improve.REPORT_WRITING,
        output_style=OutputStyle.REPORT,
    ),
    _rewriting(
        "coding-agent",
        "Coding Agent Mode",
        "Turns a programming request into a development brief covering architecture, security and testing.",
        rewrite.CODING_AGENT,
        improve.CODING_AGENT,
    ),
    _rewriting(
        "multi-tool-agent",
        "Multi-Tool Agent Mode",
        "Turns a request into direct commands for an agent coordinating several tools.",
        rewrite.MULTI_TOOL_AGENT,
        improve.MULTI_TOOL_AGENT,
    ),
    _direct(
        "document-rewriting",
        "Document Rewriting Mode",
        "Rewrites the supplied text into a polished professional document.",
        ModeFamily.DOCUMENT,
        rewrite.DOCUMENT_REWRITING,
        improve.DOCUMENT_REWRITING,
    ),
    _rewriting(
        "framework-optimization",
        "Framework Optimization Mode",
        "Expresses the request as a Role, Context, Task, Format, Rules and Examples framework.",
        rewrite.FRAMEWORK_OPTIMIZATION,
        improve.FRAMEWORK_OPTIMIZATION,
        output_style=OutputStyle.STRUCTURED,
        section_labels=FRAMEWORK_LABELS,
    ),
    _direct(
        "content-generation",
        "Content Generation Mode",
        "Writes finished, publication-ready content for the request.",
        ModeFamily.CONTENT,
        rewrite.CONTENT_GENERATION,
        improve.CONTENT_GENERATION,
    ),
    _rewriting(
        "context-engineering",
        "Context Engineering Mode",
        "Builds a context-aware prompt with explicit information architecture.",
        rewrite.CONTEXT_ENGINEERING,
        improve.CONTEXT_ENGINEERING,
    ),
    _rewriting(
        "ultimate-mode",
        "Ultimate Mode",
        "Combines the six-part framework with context engineering.",
        rewrite.ULTIMATE_MODE,
        improve.ULTIMATE_MODE,
    ),
)

MODE_REGISTRY: Mapping[str, ModeProfile] = MappingProxyType({profile.key: profile for profile in _PROFILES})

DEFAULT_MODE = "question-research"


def available_modes() -> list[str]:
    """Mode keys in catalogue order."""
    return list(MODE_REGISTRY)


def get_mode(key: str | None) -> ModeProfile:
    """Look up a mode, rejecting unknown keys as invalid input."""
    profile = MODE_REGISTRY.get(key) if isinstance(key, str) else None
    if profile is None:
        raise ServiceError(
            ErrorKind.INVALID_INPUT,
            f"Invalid mode. Valid modes are: {', '.join(available_modes())}",
        )
    return profile
