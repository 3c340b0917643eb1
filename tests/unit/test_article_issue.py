"""Unit tests for article generation and issue creation (mocked)."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest

from error_solutions_bot.articles.service import (
    ArticleIssueService,
    build_article_prompt,
    split_article,
)
from error_solutions_bot.github.client import CreatedIssue, GitHubClient

ARTICLE = """# Handling Firestore transaction contention

## Description of the error
Concurrent writes to the same document abort transactions.

```js
await runTransaction(db, async (tx) => { /* ... */ });
```
"""


def test_split_article_strips_h1_marker_and_keeps_remaining_lines_as_body() -> None:
    article = split_article(ARTICLE)

    assert article.title == "Handling Firestore transaction contention"
    assert article.body.startswith("\n## Description of the error\n")
    assert "runTransaction" in article.body


def test_split_article_only_removes_exact_h1_prefix() -> None:
    assert split_article("## Not an H1\nbody").title == "## Not an H1"
    assert split_article("Plain title\nbody").title == "Plain title"


def test_split_article_single_line_has_empty_body() -> None:
    article = split_article("# Only a title")

    assert article.title == "Only a title"
    assert article.body == ""


@pytest.mark.parametrize("markdown", ["", "   \n  ", "# \nbody"])
def test_split_article_rejects_empty_input_or_title(markdown: str) -> None:
    with pytest.raises(ValueError):
        split_article(markdown)


def test_build_article_prompt_inserts_topic() -> None:
    prompt = build_article_prompt("CSS animations")

    assert "problem developers face in CSS animations." in prompt
    assert "A Markdown H1 title" in prompt
    assert prompt.endswith("Free to use, copy, share, edit or publish.")


def _github() -> Mock:
    github = Mock(spec=GitHubClient)
    github.repository = "octo-org/octo-repo"
    github.create_issue.return_value = CreatedIssue(
        repository="octo-org/octo-repo",
        number=41,
        title="Handling Firestore transaction contention",
        created_at=datetime(2025, 1, 1, tzinfo=UTC),
        status="open",
    )
    return github


def test_generate_and_open_creates_issue_with_default_labels(make_llm: Any) -> None:
    llm = make_llm(ARTICLE)
    github = _github()
    service = ArticleIssueService(llm=llm, github=github, topic="Firebase Firestore")

    issue = service.generate_and_open()

    assert issue.number == 41
    assert "Firebase Firestore" in llm.prompts[0]
    github.create_issue.assert_called_once_with(
        title="Handling Firestore transaction contention",
        body=split_article(ARTICLE).body,
        labels=["documentation", "web"],
    )


def test_generate_and_open_writes_artifacts(make_llm: Any, tmp_path: Path) -> None:
    service = ArticleIssueService(llm=make_llm(ARTICLE), github=_github(), labels=["docs"])

    service.generate_and_open(artifacts_dir=tmp_path / "out")

    out = tmp_path / "out"
    assert (out / "title.txt").read_text(encoding="utf-8") == (
        "Handling Firestore transaction contention\n"
    )
    assert (out / "issue-body.md").read_text(encoding="utf-8") == split_article(ARTICLE).body
    assert (out / "full.md").read_text(encoding="utf-8").startswith(
        "# Handling Firestore transaction contention\n\n## Description"
    )


def test_empty_llm_answer_does_not_create_issue(make_llm: Any) -> None:
    github = _github()
    service = ArticleIssueService(llm=make_llm(""), github=github)

    with pytest.raises(ValueError):
        service.generate_and_open()
    github.create_issue.assert_not_called()
