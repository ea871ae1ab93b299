"""JSON file document holding every user's data for the local backend."""

import json
import logging
import os
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass, field
from pathlib import Path
from uuid import UUID

from fityo.adapters.serialization import STORAGE_VERSION
from fityo.domain.errors import StorageFailure

logger = logging.getLogger(__name__)


def empty_section() -> dict[str, object]:
    """Return the data layout stored for one user."""
    return {
        "foods": [],
        "logs": [],
        "weight_history": [],
        "templates": [],
        "days": [],
        "selected_date": None,
    }


@dataclass
class LocalStateStore:
    """File-backed document keyed by a storage version tag.

    Layout: ``{"version": ..., "users": {<user_id>: <section>}}``. A file with
    another version tag is treated as empty.
    """

    path: Path
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)

    def read(self, user_id: UUID) -> dict[str, object]:
        """Return a copy of the user's section."""
        with self._lock:
            document = self._load()
        return deepcopy(document["users"].get(str(user_id)) or empty_section())

    @contextmanager
    def update(self, user_id: UUID) -> Iterator[dict[str, object]]:
        """Yield the user's section for in-place edits and write it back."""
        with self._lock:
            document = self._load()
            section = document["users"].setdefault(str(user_id), empty_section())
            yield section
            self._write(document)

    def _load(self) -> dict[str, dict]:
        if not self.path.exists():
            return {"version": STORAGE_VERSION, "users": {}}
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.exception("Failed to read local state from %s", self.path)
            raise StorageFailure("Failed to read local state") from exc
        if document.get("version") != STORAGE_VERSION:
            logger.warning(
                "Ignoring local state version %s in %s",
                document.get("version"),
                self.path,
            )
            return {"version": STORAGE_VERSION, "users": {}}
        document.setdefault("users", {})
        return document

    def _write(self, document: dict[str, object]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8"
            )
            os.replace(tmp_path, self.path)
        except OSError as exc:
            logger.exception("Failed to write local state to %s", self.path)
            raise StorageFailure("Failed to write local state") from exc
