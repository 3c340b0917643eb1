"""LLM package initialization."""

from error_solutions_bot.llm.factory import LLMFactory
from error_solutions_bot.llm.gemini_provider import GeminiProvider
from error_solutions_bot.llm.provider import LLMProvider

__all__ = [
    "GeminiProvider",
    "LLMFactory",
    "LLMProvider",
]
