"""CLI entrypoint for the scheduled automation.

Each subcommand is one linear, single-shot run meant to be called from a CI workflow.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from error_solutions_bot import __version__
from error_solutions_bot.articles.service import ArticleIssueService
from error_solutions_bot.config import BotSettings
from error_solutions_bot.documents.service import DocumentService
from error_solutions_bot.errors import ConfigurationError, InvalidUsernameError
from error_solutions_bot.git import GitPublisher, authenticated_remote
from error_solutions_bot.github.client import GitHubClient
from error_solutions_bot.invites.service import InviteService
from error_solutions_bot.invites.store import InvitedUsersStore
from error_solutions_bot.llm.factory import LLMFactory
from error_solutions_bot.logging import configure_logging

logger = logging.getLogger(__name__)


def _parse_labels(value: str | None) -> list[str] | None:
    if value is None:
        return None
    parts = [p.strip() for p in value.split(",")]
    labels = [p for p in parts if p]
    return labels or None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="error-solutions",
        description="Scheduled automation for the web-dev-error-solutions corpus",
    )
    parser.add_argument(
        "--version", action="version", version=f"web-dev-error-solutions {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_issue = subparsers.add_parser(
        "generate-issue", help="Generate an article with the LLM and open it as an issue"
    )
    generate_issue.add_argument(
        "--repo",
        "--repository",
        dest="repository",
        default=None,
        help="Target repository in the form 'owner/repo' (defaults to GITHUB_REPOSITORY)",
    )
    generate_issue.add_argument(
        "--labels",
        default=None,
        help="Comma-separated labels (defaults to ISSUE_LABELS)",
    )
    generate_issue.add_argument(
        "--topic",
        default=None,
        help="Subject phrase for the article prompt (defaults to ARTICLE_TOPIC)",
    )
    generate_issue.add_argument(
        "--artifacts-dir",
        type=Path,
        default=None,
        help="Also write full.md, title.txt and issue-body.md to this directory",
    )

    invite_user = subparsers.add_parser(
        "invite-user", help="Invite an LLM-suggested GitHub user to the organization"
    )
    invite_user.add_argument(
        "--org", default=None, help="Organization login (defaults to INVITE_ORG)"
    )
    invite_user.add_argument(
        "--invited-file",
        type=Path,
        default=None,
        help="Tracking file (defaults to INVITED_USERS_FILE)",
    )
    invite_user.add_argument(
        "--no-commit",
        action="store_true",
        help="Record the username locally without committing or pushing",
    )

    generate_doc = subparsers.add_parser(
        "generate-doc", help="Write the latest open issue to errors/<topic>/<slug>/README.md"
    )
    generate_doc.add_argument(
        "--repo",
        "--repository",
        dest="repository",
        default=None,
        help="Source repository in the form 'owner/repo' (defaults to GITHUB_REPOSITORY)",
    )
    generate_doc.add_argument(
        "--errors-dir",
        type=Path,
        default=None,
        help="Root folder for articles (defaults to ERRORS_DIR)",
    )
    generate_doc.add_argument(
        "--no-commit",
        action="store_true",
        help="Write the article without committing or pushing",
    )

    return parser


def _github_client(settings: BotSettings, repository: str | None) -> GitHubClient:
    return GitHubClient(
        token=settings.require_github_token(),
        repository=repository or settings.github_repository,
        base_url=settings.github_base_url,
    )


def _publisher(settings: BotSettings, *, workdir: Path) -> GitPublisher:
    remote_url = None
    if settings.pat_token:
        remote_url = authenticated_remote(
            login=settings.git_user_name,
            token=settings.pat_token,
            repository=settings.github_repository,
        )
    return GitPublisher(
        workdir=workdir,
        branch=settings.git_branch,
        user_name=settings.git_user_name,
        user_email=settings.git_user_email,
        remote_url=remote_url,
    )


def _run_generate_issue(args: argparse.Namespace, settings: BotSettings) -> int:
    llm = LLMFactory.create(settings)
    try:
        github = _github_client(settings, args.repository)
        try:
            service = ArticleIssueService(
                llm=llm,
                github=github,
                topic=args.topic or settings.article_topic,
                labels=_parse_labels(args.labels) or settings.labels,
            )
            issue = service.generate_and_open(artifacts_dir=args.artifacts_dir)
        finally:
            github.close()
    finally:
        llm.close()

    print(f"Created issue #{issue.number}: {issue.title}")
    return 0


def _run_invite_user(args: argparse.Namespace, settings: BotSettings) -> int:
    invited_file: Path = args.invited_file or settings.invited_users_file
    publisher = None
    if not args.no_commit:
        publisher = _publisher(settings, workdir=invited_file.resolve().parent)

    llm = LLMFactory.create(settings)
    try:
        github = _github_client(settings, None)
        try:
            service = InviteService(
                llm=llm,
                github=github,
                store=InvitedUsersStore(invited_file),
                org=args.org or settings.invite_org,
                publisher=publisher,
            )
            result = service.run()
        finally:
            github.close()
    finally:
        llm.close()

    if not result.invited:
        print(f"User {result.username} already invited. Skipping.")
        return 0

    print(f"Invited {result.username} (id={result.user_id}) to {args.org or settings.invite_org}")
    return 0


def _run_generate_doc(args: argparse.Namespace, settings: BotSettings) -> int:
    errors_dir: Path = args.errors_dir or settings.errors_dir
    publisher = None
    if not args.no_commit:
        publisher = _publisher(settings, workdir=Path.cwd())

    github = _github_client(settings, args.repository)
    try:
        result = DocumentService(
            github=github, errors_dir=errors_dir, publisher=publisher
        ).run()
    finally:
        github.close()

    print(f"Wrote issue #{result.issue_number} to {result.path}")
    return 0


_COMMANDS = {
    "generate-issue": _run_generate_issue,
    "invite-user": _run_invite_user,
    "generate-doc": _run_generate_doc,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = BotSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment or .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    if not settings.github_token.strip():
        logger.error("Missing GitHub token", extra={"command": args.command})
        print("Configuration error: GITHUB_TOKEN is required", file=sys.stderr)
        return 2

    try:
        return _COMMANDS[args.command](args, settings)
    except ConfigurationError as e:
        logger.error("Configuration error", extra={"command": args.command, "error": str(e)})
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except InvalidUsernameError as e:
        logger.error("Invalid username from LLM", extra={"error": str(e)})
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Command failed", extra={"command": args.command})
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
