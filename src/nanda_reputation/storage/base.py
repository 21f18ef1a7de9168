"""Abstract base for reputation score storage."""

from __future__ import annotations

from abc import ABC, abstractmethod

from nanda_reputation.config import HISTORY_LIMIT
from nanda_reputation.models import ReputationScore


class ReputationStorage(ABC):
    """Persists ReputationScores per subject.

    save() overwrites the subject's current score (last write wins) and
    appends to its history. History is never rewritten.
    """

    @abstractmethod
    def save(self, score: ReputationScore) -> None:
        ...

    @abstractmethod
    def get_current(self, subject_id: str) -> ReputationScore | None:
        ...

    @abstractmethod
    def get_history(
        self, subject_id: str, limit: int = HISTORY_LIMIT
    ) -> list[ReputationScore]:
        """Return up to ``limit`` most recent scores, oldest first."""
        ...


def tail(records: list[ReputationScore], limit: int) -> list[ReputationScore]:
    """Last ``limit`` records in their original order."""
    if limit <= 0:
        return []
    return records[-limit:]
