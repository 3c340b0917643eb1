"""Exceptions raised by the automation commands."""

from __future__ import annotations

from dataclasses import dataclass


class ConfigurationError(ValueError):
    """A required credential or setting is missing or unsupported."""


class LLMResponseError(Exception):
    """The LLM call failed or returned no usable text."""


@dataclass(frozen=True, slots=True)
class InvalidUsernameError(ValueError):
    """The LLM answer did not contain a usable GitHub login."""

    raw: str

    def __str__(self) -> str:
        return f"LLM did not return a valid username: {self.raw[:80]!r}"


@dataclass(frozen=True, slots=True)
class UserNotFoundError(LookupError):
    """A GitHub login could not be resolved to a user ID."""

    username: str

    def __str__(self) -> str:
        return f"Could not fetch user ID for {self.username}"
