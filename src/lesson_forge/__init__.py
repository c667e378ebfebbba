"""lesson_forge: CEFR-aware lesson generation over unreliable LLM providers."""

__version__ = "0.1.0"
