"""OpenAI LLM provider implementation."""

import logging
from typing import Any

from openai import OpenAI

from error_solutions_bot.errors import ConfigurationError, LLMResponseError
from error_solutions_bot.llm.provider import LLMProvider

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """OpenAI API provider, selectable with LLM_PROVIDER=openai."""

    def __init__(self, *, api_key: str | None, model: str, client: OpenAI | None = None) -> None:
        """Initialize the OpenAI provider.

        Args:
            api_key: OpenAI API key.
            model: Chat model name.
            client: Optional pre-built client (tests inject a mock).

        Raises:
            ConfigurationError: If API key is not provided.
        """
        if not api_key:
            raise ConfigurationError("OPENAI_API_KEY is required for the openai provider")

        self.client = client or OpenAI(api_key=api_key)
        self.model = model

        logger.info("OpenAI provider initialized", extra={"model": self.model})

    def generate(
        self,
        prompt: str,
        max_tokens: int | None = None,
        temperature: float | None = None,
        **kwargs: Any,
    ) -> str:
        return self.chat(
            [{"role": "user", "content": prompt}],
            max_tokens=max_tokens,
            temperature=temperature,
            **kwargs,
        )

    def chat(
        self,
        messages: list[dict[str, str]],
        max_tokens: int | None = None,
        temperature: float | None = None,
        **kwargs: Any,
    ) -> str:
        logger.debug("Generating chat completion", extra={"messages": len(messages)})

        params: dict[str, Any] = {"model": self.model, "messages": messages, **kwargs}
        if max_tokens is not None:
            params["max_tokens"] = max_tokens
        if temperature is not None:
            params["temperature"] = temperature

        response = self.client.chat.completions.create(**params)

        if not response.choices:
            raise LLMResponseError("OpenAI response has no choices")
        content = response.choices[0].message.content or ""
        logger.debug("Generated text", extra={"characters": len(content)})
        return content

    def count_tokens(self, text: str) -> int:
        """Rough approximation: 1 token ≈ 4 characters."""
        return len(text) // 4

    def close(self) -> None:
        self.client.close()
