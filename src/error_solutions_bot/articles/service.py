"""Generate a bug-fix article with the LLM and open it as a GitHub issue.

The issue is later turned into `errors/<topic>/<slug>/README.md` by
`error_solutions_bot.documents.service`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from error_solutions_bot.config import DEFAULT_ARTICLE_TOPIC
from error_solutions_bot.github.client import CreatedIssue, GitHubClient
from error_solutions_bot.llm.provider import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_LABELS = ["documentation", "web"]

ARTICLE_PROMPT_TEMPLATE = (
    "Generate a documentation with Markdown about a randomly chosen problem developers face "
    "in {topic}. Include:\n"
    "- A Markdown H1 title\n"
    "- Description of the error\n"
    "- full code of fixing step by step\n"
    "- external references with links\n"
    "- Explanation\n"
    "- End with: Copyrights (c) OpenRockets Open-source Network. "
    "Free to use, copy, share, edit or publish."
)


def build_article_prompt(topic: str = DEFAULT_ARTICLE_TOPIC) -> str:
    if not topic.strip():
        raise ValueError("Article topic must be non-empty")
    return ARTICLE_PROMPT_TEMPLATE.format(topic=topic.strip())


@dataclass(frozen=True, slots=True)
class GeneratedArticle:
    """An LLM article split into issue title and body."""

    title: str
    body: str

    @property
    def markdown(self) -> str:
        return f"# {self.title}\n{self.body}"


def split_article(markdown: str) -> GeneratedArticle:
    """Split Markdown into a title (first line) and a body (all other lines).

    Only an exact leading "# " is removed from the title; other heading levels
    and formatting are kept as the model wrote them.
    """

    if not markdown.strip():
        raise ValueError("LLM returned an empty article")

    first, _, rest = markdown.partition("\n")
    first = first.rstrip("\r")
    title = first[2:] if first.startswith("# ") else first
    title = title.strip()
    if not title:
        raise ValueError("Article title is empty")

    return GeneratedArticle(title=title, body=rest)


class ArticleIssueService:
    """Ask the LLM for an article and publish it as an issue."""

    def __init__(
        self,
        *,
        llm: LLMProvider,
        github: GitHubClient,
        topic: str = DEFAULT_ARTICLE_TOPIC,
        labels: list[str] | None = None,
    ) -> None:
        self._llm = llm
        self._github = github
        self._prompt = build_article_prompt(topic)
        self._labels = list(labels) if labels is not None else list(DEFAULT_LABELS)

    def generate_article(self) -> GeneratedArticle:
        content = self._llm.generate(self._prompt)
        article = split_article(content)
        logger.info(
            "Article generated",
            extra={"title": article.title, "body_characters": len(article.body)},
        )
        return article

    def generate_and_open(self, *, artifacts_dir: Path | None = None) -> CreatedIssue:
        article = self.generate_article()
        if artifacts_dir is not None:
            write_article_artifacts(article, artifacts_dir)

        return self._github.create_issue(
            title=article.title,
            body=article.body,
            labels=self._labels,
        )


def write_article_artifacts(article: GeneratedArticle, directory: Path) -> None:
    """Write `full.md`, `title.txt` and `issue-body.md` for CI inspection."""

    directory.mkdir(parents=True, exist_ok=True)
    (directory / "full.md").write_text(article.markdown + "\n", encoding="utf-8")
    (directory / "title.txt").write_text(article.title + "\n", encoding="utf-8")
    (directory / "issue-body.md").write_text(article.body, encoding="utf-8")
    logger.debug("Article artefacts written", extra={"path": str(directory)})
