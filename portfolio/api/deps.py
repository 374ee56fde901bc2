"""FastAPI dependencies for the agent collaborators."""

from portfolio.llm import LanguageModelClient
from portfolio.notifications import Notifier

_llm: LanguageModelClient | None = None


def get_llm() -> LanguageModelClient:
    """Process-wide language model client (models are created on first use)."""
    global _llm
    if _llm is None:
        _llm = LanguageModelClient()
    return _llm


def get_notifier() -> Notifier:
    return Notifier.from_settings()
