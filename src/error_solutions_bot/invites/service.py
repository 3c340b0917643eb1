"""Invite an LLM-suggested GitHub user to the organization.

Steps, in order:
- ask the LLM for a username and sanitize it
- skip users already listed in `invited_users.json`
- resolve the login to a numeric ID
- send the organization invitation
- record the username and (optionally) commit and push the file

There is no compensation between sending the invitation and recording it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from error_solutions_bot.errors import InvalidUsernameError
from error_solutions_bot.git import GitPublisher
from error_solutions_bot.github.client import GitHubClient
from error_solutions_bot.invites.store import InvitedUsersStore
from error_solutions_bot.llm.provider import LLMProvider

logger = logging.getLogger(__name__)

USERNAME_PROMPT = (
    "Return a GitHub username of a random open-source contributor.  "
    "Only return the username. No @ symbol, no quotes, no explanations."
)

# GitHub logins: alphanumerics and hyphens, at most 39 characters.
_USERNAME_RE = re.compile(r"^[A-Za-z0-9-]{1,39}")


def extract_username(raw: str | None) -> str | None:
    """Pull a login out of an LLM answer, or return None if there is none."""

    if raw is None:
        return None

    for line in raw.splitlines():
        candidate = line.strip().replace("@", "")
        if not candidate:
            continue
        if candidate == "null":
            return None
        match = _USERNAME_RE.match(candidate)
        return match.group(0) if match else None
    return None


@dataclass(frozen=True, slots=True)
class InvitationResult:
    username: str
    invited: bool
    user_id: int | None = None
    skipped_reason: str | None = None
    committed: bool = False


class InviteService:
    """Run one invitation cycle."""

    def __init__(
        self,
        *,
        llm: LLMProvider,
        github: GitHubClient,
        store: InvitedUsersStore,
        org: str,
        publisher: GitPublisher | None = None,
    ) -> None:
        self._llm = llm
        self._github = github
        self._store = store
        self._org = org
        self._publisher = publisher

    def suggest_username(self) -> str:
        logger.info("Requesting a GitHub username from the LLM")
        raw = self._llm.generate(USERNAME_PROMPT)
        username = extract_username(raw)
        if username is None:
            raise InvalidUsernameError(raw or "")
        logger.info("LLM suggested username", extra={"username": username})
        return username

    def run(self) -> InvitationResult:
        username = self.suggest_username()

        self._store.ensure_exists()
        if self._store.contains(username):
            logger.info("User already invited; skipping", extra={"username": username})
            return InvitationResult(
                username=username, invited=False, skipped_reason="already_invited"
            )

        user = self._github.get_user(username)
        self._github.invite_to_organization(org=self._org, invitee_id=user.id)
        self._store.append(username)

        committed = False
        if self._publisher is not None:
            committed = self._publisher.publish(
                [self._store.path], message=f"Add {username} to invited list"
            )

        return InvitationResult(
            username=username, invited=True, user_id=user.id, committed=committed
        )
