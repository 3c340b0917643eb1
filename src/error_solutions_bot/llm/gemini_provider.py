"""Gemini provider backed by the Generative Language REST API."""

from __future__ import annotations

import logging
from typing import Any

import requests

from error_solutions_bot.errors import ConfigurationError, LLMResponseError
from error_solutions_bot.llm.provider import LLMProvider

logger = logging.getLogger(__name__)

_ROLE_MAP = {"user": "user", "system": "user", "assistant": "model", "model": "model"}


class GeminiProvider(LLMProvider):
    """Calls `models/{model}:generateContent` with an API key."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str = "gemini-1.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        session: requests.Session | None = None,
        timeout: float = 60.0,
    ) -> None:
        """Initialize the Gemini provider.

        Args:
            api_key: Generative Language API key.
            model: Model name, without the `models/` prefix.
            base_url: API root including the version segment.
            session: Optional pre-built HTTP session (tests inject a mock).
            timeout: Per-request timeout in seconds.

        Raises:
            ConfigurationError: If the API key is missing.
        """
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY is required")

        self._api_key = api_key
        self.model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

        logger.info("Gemini provider initialized", extra={"model": model})

    def _model_url(self, method: str) -> str:
        return f"{self._base_url}/models/{self.model}:{method}"

    def _post(self, method: str, payload: dict[str, Any]) -> dict[str, Any]:
        url = self._model_url(method)
        # The key travels as a query parameter; only the bare URL is logged.
        logger.debug("Calling Gemini", extra={"url": url})
        try:
            resp = self._session.post(
                url,
                params={"key": self._api_key},
                json=payload,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            # Transport errors embed the full request URL, key included.
            raise LLMResponseError(
                f"Gemini {method} request failed ({type(e).__name__})"
            ) from None
        if resp.status_code >= 400:
            raise LLMResponseError(
                f"Gemini {method} failed with HTTP {resp.status_code}: {resp.text[:200]}"
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise LLMResponseError(f"Gemini {method} returned invalid JSON") from e
        if not isinstance(data, dict):
            raise LLMResponseError(f"Gemini {method} returned an unexpected payload")
        return data

    @staticmethod
    def _generation_config(
        max_tokens: int | None, temperature: float | None
    ) -> dict[str, Any]:
        config: dict[str, Any] = {}
        if max_tokens is not None:
            config["maxOutputTokens"] = max_tokens
        if temperature is not None:
            config["temperature"] = temperature
        return config

    @staticmethod
    def extract_text(data: dict[str, Any]) -> str:
        """Return `.candidates[0].content.parts[0].text`.

        Raises:
            LLMResponseError: If any step of the path is missing.
        """

        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            feedback = data.get("promptFeedback") if isinstance(data, dict) else None
            raise LLMResponseError(
                f"Gemini response has no candidate text (promptFeedback={feedback})"
            ) from e
        if not isinstance(text, str):
            raise LLMResponseError("Gemini candidate text is not a string")
        return text

    def _generate_from_contents(
        self,
        contents: list[dict[str, Any]],
        max_tokens: int | None,
        temperature: float | None,
        **kwargs: Any,
    ) -> str:
        payload: dict[str, Any] = {"contents": contents}
        generation_config = self._generation_config(max_tokens, temperature)
        if generation_config:
            payload["generationConfig"] = generation_config
        payload.update(kwargs)

        content = self.extract_text(self._post("generateContent", payload))
        logger.debug("Generated text", extra={"characters": len(content)})
        return content

    def generate(
        self,
        prompt: str,
        max_tokens: int | None = None,
        temperature: float | None = None,
        **kwargs: Any,
    ) -> str:
        logger.debug("Generating completion", extra={"prompt_preview": prompt[:100]})
        contents = [{"role": "user", "parts": [{"text": prompt}]}]
        return self._generate_from_contents(contents, max_tokens, temperature, **kwargs)

    def chat(
        self,
        messages: list[dict[str, str]],
        max_tokens: int | None = None,
        temperature: float | None = None,
        **kwargs: Any,
    ) -> str:
        contents: list[dict[str, Any]] = []
        for message in messages:
            role = _ROLE_MAP.get(message.get("role", "user"), "user")
            contents.append({"role": role, "parts": [{"text": message.get("content", "")}]})
        logger.debug("Generating chat completion", extra={"messages": len(messages)})
        return self._generate_from_contents(contents, max_tokens, temperature, **kwargs)

    def count_tokens(self, text: str) -> int:
        data = self._post(
            "countTokens",
            {"contents": [{"role": "user", "parts": [{"text": text}]}]},
        )
        total = data.get("totalTokens")
        if not isinstance(total, int):
            raise LLMResponseError("Gemini countTokens response has no totalTokens")
        return total

    def close(self) -> None:
        self._session.close()
