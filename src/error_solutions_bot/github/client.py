"""GitHub API client wrapper.

This wraps PyGithub (issue creation) and a `requests` session (plain REST calls) to keep
GitHub calls out of command code and make tests easy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import requests
from github import Auth, Github
from github.Repository import Repository

from error_solutions_bot.errors import UserNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CreatedIssue:
    """Minimal issue metadata returned from GitHub."""

    repository: str
    number: int
    title: str
    created_at: datetime
    status: str
    url: str | None = None


@dataclass(frozen=True, slots=True)
class IssueContent:
    """Title and body of an existing issue."""

    number: int
    title: str
    body: str


@dataclass(frozen=True, slots=True)
class GitHubUser:
    login: str
    id: int


class GitHubClient:
    """Small wrapper around the GitHub operations the automation needs."""

    def __init__(
        self,
        *,
        token: str,
        repository: str,
        base_url: str = "https://api.github.com",
        repo: Repository | None = None,
        github_api: Github | None = None,
        session: requests.Session | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")
        if not repository.strip().strip("/"):
            raise ValueError("GitHub repository is required")

        self._repository_name = repository.strip().strip("/")
        self._rest_base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "web-dev-error-solutions",
            }
        )

        self._repo = repo
        if repo is not None:
            logger.debug("Using injected Repository instance")

        # Building Github does not hit the network.
        self._github = github_api or Github(auth=Auth.Token(token), base_url=self._rest_base_url)

    @property
    def repository(self) -> str:
        """Return the configured repository name ("owner/repo")."""

        return self._repository_name

    def _get_repo(self) -> Repository:
        # Resolved lazily: invitation runs never touch the repository object.
        if self._repo is None:
            self._repo = self._github.get_repo(self._repository_name)
            logger.info(
                "Connected to repository", extra={"repo": self._repository_name}
            )
        return self._repo

    def _url(self, path: str) -> str:
        return f"{self._rest_base_url}/{path.lstrip('/')}"

    def _repo_url(self, *, path: str) -> str:
        path = path.strip("/")
        base = self._url(f"repos/{self._repository_name}")
        return f"{base}/{path}" if path else base

    def create_issue(
        self,
        *,
        title: str,
        body: str | None,
        labels: list[str] | None,
    ) -> CreatedIssue:
        if not title.strip():
            raise ValueError("Issue title is required")

        issue = self._get_repo().create_issue(title=title, body=body or "", labels=labels or [])

        logger.info(
            "Issue created",
            extra={"repo": self._repository_name, "issue_number": issue.number},
        )
        return CreatedIssue(
            repository=self._repository_name,
            number=issue.number,
            title=issue.title,
            created_at=issue.created_at,
            status=getattr(issue, "state", "open"),
            url=getattr(issue, "html_url", None),
        )

    def get_latest_open_issue(self, *, per_page: int = 100) -> IssueContent:
        """Return the most recently created open issue (pull requests excluded).

        The issues endpoint also lists pull requests, so pages are walked until an
        issue turns up or the listing runs out.

        Raises:
            LookupError: If the repository has no open issues.
        """

        url = self._repo_url(path="issues")
        page = 1
        while True:
            resp = self._session.get(
                url,
                params={
                    "state": "open",
                    "sort": "created",
                    "direction": "desc",
                    "per_page": per_page,
                    "page": page,
                },
                timeout=30,
            )
            resp.raise_for_status()
            payload = resp.json()
            if not isinstance(payload, list):
                raise ValueError("Unexpected issues response: expected a list")

            for item in payload:
                if not isinstance(item, dict) or "pull_request" in item:
                    continue
                number = item.get("number")
                if not isinstance(number, int) or number <= 0:
                    continue
                title = item.get("title")
                body = item.get("body")
                return IssueContent(
                    number=number,
                    title=title if isinstance(title, str) else "",
                    body=body if isinstance(body, str) else "",
                )

            if len(payload) < per_page:
                break
            page += 1

        raise LookupError(f"No open issues found in {self._repository_name}")

    def get_user(self, username: str) -> GitHubUser:
        """Resolve a login to its numeric user ID.

        Raises:
            UserNotFoundError: If the user does not exist or has no ID.
        """

        login = username.strip()
        if not login:
            raise ValueError("username must be non-empty")

        resp = self._session.get(self._url(f"users/{login}"), timeout=30)
        if resp.status_code == 404:
            raise UserNotFoundError(login)
        resp.raise_for_status()

        data: dict[str, Any] = resp.json()
        user_id = data.get("id") if isinstance(data, dict) else None
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise UserNotFoundError(login)

        resolved = data.get("login")
        return GitHubUser(login=resolved if isinstance(resolved, str) else login, id=user_id)

    def invite_to_organization(self, *, org: str, invitee_id: int) -> dict[str, Any]:
        """POST an organization invitation for a user ID."""

        if not org.strip():
            raise ValueError("org is required")

        url = self._url(f"orgs/{org.strip()}/invitations")
        resp = self._session.post(url, json={"invitee_id": invitee_id}, timeout=30)
        resp.raise_for_status()

        data = resp.json()
        logger.info(
            "Organization invitation sent",
            extra={"org": org, "invitee_id": invitee_id, "status_code": resp.status_code},
        )
        return data if isinstance(data, dict) else {}

    def close(self) -> None:
        self._session.close()
        self._github.close()
