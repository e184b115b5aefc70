"""Mode-based prompt rewriting service backed by a hosted LLM."""

__version__ = "1.0.0"
