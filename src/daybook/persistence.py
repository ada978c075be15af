"""JSON file persistence, one document per collection."""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

COLLECTIONS = ("tasks", "notes", "expenses", "events", "reminders")


class JsonStore:
    """Reads and writes whole collections as pretty-printed JSON arrays.

    Every call is a full read or a full overwrite. There is no locking, so two
    writers touching the same collection race and the last write wins.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        return self.root / f"{name}.json"

    def load(self, name: str) -> list[dict]:
        """Return the collection's records, or [] if missing or unreadable."""
        path = self.path_for(name)
        if not path.exists():
            return []

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.error("Error loading %s: %s", path, exc)
            return []

        if not isinstance(raw, list):
            logger.error("Error loading %s: expected a JSON array, got %s", path, type(raw).__name__)
            return []
        return raw

    def save(self, name: str, records: list[dict]) -> None:
        """Overwrite the collection on disk. I/O errors propagate."""
        path = self.path_for(name)
        try:
            path.write_text(json.dumps(records, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            logger.error("Error saving %s: %s", path, exc)
            raise
