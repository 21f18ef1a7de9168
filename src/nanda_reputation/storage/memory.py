"""In-process storage for development and tests."""

from __future__ import annotations

import threading

from nanda_reputation.config import HISTORY_LIMIT
from nanda_reputation.models import ReputationScore

from .base import ReputationStorage, tail


class InMemoryReputationStorage(ReputationStorage):
    def __init__(self) -> None:
        self._current: dict[str, ReputationScore] = {}
        self._history: dict[str, list[ReputationScore]] = {}
        self._lock = threading.Lock()

    def save(self, score: ReputationScore) -> None:
        with self._lock:
            self._current[score.subject_id] = score
            self._history.setdefault(score.subject_id, []).append(score)

    def get_current(self, subject_id: str) -> ReputationScore | None:
        return self._current.get(subject_id)

    def get_history(
        self, subject_id: str, limit: int = HISTORY_LIMIT
    ) -> list[ReputationScore]:
        with self._lock:
            return tail(list(self._history.get(subject_id, [])), limit)
