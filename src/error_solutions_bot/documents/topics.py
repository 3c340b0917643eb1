"""Map an issue onto an `errors/` topic folder and a slug."""

from __future__ import annotations

import re

# Checked in order; the first keyword found wins.
TOPIC_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("nextjs", "nextjs"),
    ("tailwind", "tailwinds"),
    ("mern", "mern"),
    ("react", "react"),
    ("express", "expressjs"),
    ("openai", "openai"),
    ("vue", "vuejs"),
    ("jquery", "jquery"),
    ("javascript", "javascript"),
    ("css", "css"),
)
DEFAULT_TOPIC = "general"

_NON_SLUG_RE = re.compile(r"[^a-z0-9]")
_DASH_RUN_RE = re.compile(r"-+")


def detect_topic(title: str, body: str) -> str:
    content = f"{title}\n{body}".lower()
    for keyword, topic in TOPIC_KEYWORDS:
        if keyword in content:
            return topic
    return DEFAULT_TOPIC


def slugify_title(title: str) -> str:
    """Lowercase, replace anything outside [a-z0-9] with '-', collapse and trim dashes."""

    slug = _NON_SLUG_RE.sub("-", title.lower())
    slug = _DASH_RUN_RE.sub("-", slug)
    slug = slug.removeprefix("-").removesuffix("-")
    if not slug:
        raise ValueError(f"Title produces an empty folder name: {title!r}")
    return slug
