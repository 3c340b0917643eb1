"""Configuration for the error-solutions automation.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Variable names match the secrets exposed by the CI workflows
(`GEMINI_API_KEY`, `GITHUB_TOKEN`, `PAT_TOKEN`) so the same settings work
locally and on the runner.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from error_solutions_bot.errors import ConfigurationError

DEFAULT_ARTICLE_TOPIC = "Firebase Firestore, data storing and posts"


class BotSettings(BaseSettings):
    """Settings for the automation commands.

    Environment variables:
    - GEMINI_API_KEY, GEMINI_MODEL, GEMINI_BASE_URL
    - LLM_PROVIDER      (optional, "gemini" or "openai")
    - OPENAI_API_KEY, OPENAI_MODEL (only for the openai provider)
    - GITHUB_TOKEN, GITHUB_REPOSITORY, GITHUB_BASE_URL
    - PAT_TOKEN         (optional, used for pushing commits)
    - INVITE_ORG, INVITED_USERS_FILE, ERRORS_DIR
    - ARTICLE_TOPIC, ISSUE_LABELS
    - GIT_USER_NAME, GIT_USER_EMAIL, GIT_BRANCH
    - LOG_LEVEL

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `BotSettings(_env_file=path_to_env)`.
    """

    llm_provider: Literal["gemini", "openai"] = Field(
        default="gemini",
        validation_alias="LLM_PROVIDER",
        description="LLM backend used for generation",
    )

    gemini_api_key: str = Field(
        default="",
        validation_alias="GEMINI_API_KEY",
        description="API key for the Generative Language API",
    )
    gemini_model: str = Field(
        default="gemini-1.5-flash",
        validation_alias="GEMINI_MODEL",
    )
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        validation_alias="GEMINI_BASE_URL",
    )

    openai_api_key: str | None = Field(default=None, validation_alias="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-4o-mini", validation_alias="OPENAI_MODEL")

    github_token: str = Field(
        default="",
        validation_alias="GITHUB_TOKEN",
        description="GitHub token used for issues and organization invitations",
    )
    pat_token: str | None = Field(
        default=None,
        validation_alias="PAT_TOKEN",
        description="Personal access token embedded in the push remote",
    )
    github_repository: str = Field(
        default="OpenRockets/web-dev-error-solutions",
        validation_alias="GITHUB_REPOSITORY",
        description="Repository in the form 'owner/repo'",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )

    invite_org: str = Field(default="openrockets", validation_alias="INVITE_ORG")
    invited_users_file: Path = Field(
        default=Path("invited_users.json"),
        validation_alias="INVITED_USERS_FILE",
    )
    errors_dir: Path = Field(default=Path("errors"), validation_alias="ERRORS_DIR")

    article_topic: str = Field(
        default=DEFAULT_ARTICLE_TOPIC,
        validation_alias="ARTICLE_TOPIC",
        description="Subject phrase inserted into the article prompt",
    )
    issue_labels: str = Field(
        default="documentation,web",
        validation_alias="ISSUE_LABELS",
        description="Comma-separated labels applied to generated issues",
    )

    git_user_name: str = Field(default="openrocketsofficial", validation_alias="GIT_USER_NAME")
    git_user_email: str = Field(default="motiontel@outlook.com", validation_alias="GIT_USER_EMAIL")
    git_branch: str = Field(default="main", validation_alias="GIT_BRANCH")

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return normalized

    @field_validator("github_repository")
    @classmethod
    def _strip_repository(cls, value: str) -> str:
        return value.strip().strip("/")

    @property
    def labels(self) -> list[str]:
        """Issue labels as a list, blanks removed."""

        return [label.strip() for label in self.issue_labels.split(",") if label.strip()]

    def require_github_token(self) -> str:
        if not self.github_token.strip():
            raise ConfigurationError("GITHUB_TOKEN is required")
        return self.github_token
