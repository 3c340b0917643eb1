"""Turn the latest generated issue into an `errors/<topic>/<slug>/README.md` article."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from error_solutions_bot.documents.topics import detect_topic, slugify_title
from error_solutions_bot.git import GitPublisher
from error_solutions_bot.github.client import GitHubClient

logger = logging.getLogger(__name__)

DOCUMENT_COMMIT_MESSAGE = "updated"


@dataclass(frozen=True, slots=True)
class DocumentResult:
    issue_number: int
    topic: str
    slug: str
    path: Path
    committed: bool = False


def render_error_document(title: str, body: str) -> str:
    text = f"# 🐞 {title.strip()}\n\n{body}"
    return text if text.endswith("\n") else text + "\n"


def write_error_document(*, root: Path, topic: str, slug: str, title: str, body: str) -> Path:
    """Write (or overwrite) `root/topic/slug/README.md` and return its path."""

    folder = root / topic / slug
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / "README.md"
    path.write_text(render_error_document(title, body), encoding="utf-8")
    return path


class DocumentService:
    """Fetch the newest open issue and file it under `errors/`."""

    def __init__(
        self,
        *,
        github: GitHubClient,
        errors_dir: Path,
        publisher: GitPublisher | None = None,
    ) -> None:
        self._github = github
        self._errors_dir = errors_dir
        self._publisher = publisher

    def run(self) -> DocumentResult:
        issue = self._github.get_latest_open_issue()
        topic = detect_topic(issue.title, issue.body)
        slug = slugify_title(issue.title)

        path = write_error_document(
            root=self._errors_dir, topic=topic, slug=slug, title=issue.title, body=issue.body
        )
        logger.info(
            "Error document written",
            extra={"issue_number": issue.number, "topic": topic, "path": str(path)},
        )

        committed = False
        if self._publisher is not None:
            committed = self._publisher.publish([path], message=DOCUMENT_COMMIT_MESSAGE)

        return DocumentResult(
            issue_number=issue.number, topic=topic, slug=slug, path=path, committed=committed
        )
