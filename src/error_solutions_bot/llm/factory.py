"""Factory for creating LLM providers."""

import logging

from error_solutions_bot.config import BotSettings
from error_solutions_bot.errors import ConfigurationError
from error_solutions_bot.llm.gemini_provider import GeminiProvider
from error_solutions_bot.llm.openai_provider import OpenAIProvider
from error_solutions_bot.llm.provider import LLMProvider

logger = logging.getLogger(__name__)


class LLMFactory:
    """Factory for creating LLM provider instances."""

    @staticmethod
    def create(settings: BotSettings) -> LLMProvider:
        """Create an LLM provider based on settings.

        Args:
            settings: Settings specifying the provider and its credentials.

        Returns:
            Configured LLM provider instance.

        Raises:
            ConfigurationError: If the provider is not supported or lacks credentials.
        """
        logger.info("Creating LLM provider", extra={"provider": settings.llm_provider})

        if settings.llm_provider == "gemini":
            return GeminiProvider(
                api_key=settings.gemini_api_key,
                model=settings.gemini_model,
                base_url=settings.gemini_base_url,
            )
        elif settings.llm_provider == "openai":
            return OpenAIProvider(
                api_key=settings.openai_api_key,
                model=settings.openai_model,
            )
        else:
            raise ConfigurationError(f"Unsupported LLM provider: {settings.llm_provider}")
