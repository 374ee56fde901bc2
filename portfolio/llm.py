"""
Language model client.

Wraps a LangChain chat model behind a single ``complete`` call. The client is
constructed explicitly and handed to each agent task, so tests can pass a stub.
"""

import logging
from collections.abc import Callable
from typing import Any

from langchain_deepseek import ChatDeepSeek

from portfolio.config import settings
from portfolio.errors import InferenceError

logger = logging.getLogger(__name__)


def create_chat_model(temperature: float) -> ChatDeepSeek:
    """Create the DeepSeek chat model used in production."""
    if not settings.deepseek_api_key:
        raise ValueError("DEEPSEEK_API_KEY not set")

    return ChatDeepSeek(
        model=settings.llm_model,
        api_key=settings.deepseek_api_key,
        temperature=temperature,
    )


class LanguageModelClient:
    """Single best-effort prompt → text call. No retry, no timeout."""

    def __init__(self, model_factory: Callable[[float], Any] = create_chat_model):
        self._model_factory = model_factory
        self._models: dict[float, Any] = {}

    def _get_model(self, temperature: float):
        if temperature not in self._models:
            self._models[temperature] = self._model_factory(temperature)
        return self._models[temperature]

    async def complete(self, prompt: str, temperature: float) -> str:
        """
        Send a fully substituted prompt and return the reply text.

        Raises:
            InferenceError: If the model cannot be created or the call fails
        """
        try:
            model = self._get_model(temperature)
            response = await model.ainvoke(prompt)
        except Exception as e:
            logger.error("Model call failed (%s): %s", type(e).__name__, e)
            raise InferenceError(f"Language model call failed: {e}") from e

        content = getattr(response, "content", response)
        return content if isinstance(content, str) else str(content)
