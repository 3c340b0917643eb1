"""JSON-file backed list of GitHub logins that were already invited."""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class InvitedUsersStore:
    """A flat JSON array of usernames, append-only."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def ensure_exists(self) -> None:
        if self._path.exists():
            return
        self.save([])
        logger.info("Created invited users file", extra={"path": str(self._path)})

    def load(self) -> list[str]:
        """Return the stored usernames in file order.

        Raises:
            ValueError: If the file is not a JSON array of strings. The file is
                left untouched so a broken history is never silently replaced.
        """
        if not self._path.exists():
            return []

        text = self._path.read_text(encoding="utf-8")
        if not text.strip():
            return []

        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invited users file is not valid JSON: {self._path}") from e

        if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
            raise ValueError(f"Invited users file must be a JSON array of strings: {self._path}")
        return raw

    def save(self, usernames: list[str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(usernames, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def contains(self, username: str) -> bool:
        # Exact element match; "bob" is not a member of ["bobby"].
        return username in self.load()

    def append(self, username: str) -> list[str]:
        usernames = self.load()
        usernames.append(username)
        self.save(usernames)
        logger.info(
            "Username recorded",
            extra={"username": username, "path": str(self._path), "total": len(usernames)},
        )
        return usernames
