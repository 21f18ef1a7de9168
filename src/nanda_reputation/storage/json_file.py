"""JSON file storage — current scores and capped history in one document.

Layout of the file:

    {
      "current": {"<subject_id>": {...ReputationScore...}},
      "history": {"<subject_id>": [{...}, {...}]}
    }
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from pydantic import BaseModel, Field

from nanda_reputation.config import HISTORY_LIMIT, MAX_HISTORY_SIZE
from nanda_reputation.models import ReputationScore

from .base import ReputationStorage, tail

logger = logging.getLogger(__name__)


class _StoreDocument(BaseModel):
    current: dict[str, ReputationScore] = Field(default_factory=dict)
    history: dict[str, list[ReputationScore]] = Field(default_factory=dict)


class JsonFileReputationStorage(ReputationStorage):
    """Keeps every subject in a single JSON file, rewritten on each save.

    History per subject is capped at ``max_history``; the oldest entries are
    dropped first.
    """

    def __init__(self, path: str | Path, max_history: int = MAX_HISTORY_SIZE) -> None:
        self.path = Path(path)
        self.max_history = max_history
        self._lock = threading.Lock()

    def _load(self) -> _StoreDocument:
        if not self.path.exists():
            return _StoreDocument()
        try:
            return _StoreDocument.model_validate_json(self.path.read_bytes())
        # pydantic ValidationError is a ValueError
        except (ValueError, OSError) as exc:
            logger.warning("Unreadable score file %s, starting empty: %s", self.path, exc)
            return _StoreDocument()

    def _write(self, doc: _StoreDocument) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(doc.model_dump_json(indent=2))
        tmp.replace(self.path)

    def save(self, score: ReputationScore) -> None:
        with self._lock:
            doc = self._load()
            doc.current[score.subject_id] = score
            history = doc.history.setdefault(score.subject_id, [])
            history.append(score)
            if len(history) > self.max_history:
                del history[: len(history) - self.max_history]
            self._write(doc)
        logger.debug("Saved score for %s to %s", score.subject_id, self.path)

    def get_current(self, subject_id: str) -> ReputationScore | None:
        with self._lock:
            return self._load().current.get(subject_id)

    def get_history(
        self, subject_id: str, limit: int = HISTORY_LIMIT
    ) -> list[ReputationScore]:
        with self._lock:
            return tail(self._load().history.get(subject_id, []), limit)
