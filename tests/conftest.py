"""Test configuration and fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from error_solutions_bot.llm.provider import LLMProvider

SETTINGS_ENV_VARS = (
    "LLM_PROVIDER",
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "GEMINI_BASE_URL",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "GITHUB_TOKEN",
    "PAT_TOKEN",
    "GITHUB_REPOSITORY",
    "GITHUB_BASE_URL",
    "INVITE_ORG",
    "INVITED_USERS_FILE",
    "ERRORS_DIR",
    "ARTICLE_TOPIC",
    "ISSUE_LABELS",
    "GIT_USER_NAME",
    "GIT_USER_EMAIL",
    "GIT_BRANCH",
    "LOG_LEVEL",
)


class FakeLLM(LLMProvider):
    """Returns canned answers in order and records prompts."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []
        self.closed = False

    def generate(
        self,
        prompt: str,
        max_tokens: int | None = None,
        temperature: float | None = None,
        **kwargs: Any,
    ) -> str:
        self.prompts.append(prompt)
        return self.answers.pop(0)

    def chat(
        self,
        messages: list[dict[str, str]],
        max_tokens: int | None = None,
        temperature: float | None = None,
        **kwargs: Any,
    ) -> str:
        return self.generate(messages[-1]["content"])

    def count_tokens(self, text: str) -> int:
        return len(text.split())

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty directory with no settings variables (CI runners export some)."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def make_llm() -> type[FakeLLM]:
    """Build a FakeLLM with `make_llm("answer 1", "answer 2")`."""
    return FakeLLM
