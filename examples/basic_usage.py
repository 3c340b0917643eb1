#!/usr/bin/env python3
"""Programmatic article generation example.

This demonstrates using the components directly:

* load settings from `.env`
* ask the configured LLM for an article
* print the split title and body, optionally opening the issue

Nothing is sent to GitHub unless `--open-issue` is passed.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from error_solutions_bot.articles.service import ArticleIssueService
from error_solutions_bot.config import BotSettings
from error_solutions_bot.github.client import GitHubClient
from error_solutions_bot.llm.factory import LLMFactory
from error_solutions_bot.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate one article (programmatic example).")
    parser.add_argument("--topic", default="CSS animations", help="Subject phrase for the prompt")
    parser.add_argument("--open-issue", action="store_true", help="Also open the GitHub issue")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = BotSettings()
    configure_logging(settings.log_level)

    llm = LLMFactory.create(settings)
    github = GitHubClient(
        token=settings.require_github_token(),
        repository=settings.github_repository,
        base_url=settings.github_base_url,
    )

    try:
        service = ArticleIssueService(
            llm=llm, github=github, topic=args.topic, labels=settings.labels
        )
        if args.open_issue:
            issue = service.generate_and_open()
            print(f"Created issue #{issue.number}: {issue.title}")
            return 0

        article = service.generate_article()
        print(f"Title: {article.title}")
        print(article.body)
        return 0
    finally:
        llm.close()
        github.close()


if __name__ == "__main__":
    raise SystemExit(main())
