"""Reputation client — fetch → score → store.

Wires a MetricsSource, an AlgorithmRegistry and a ReputationStorage
together. The registry is owned by the client instance, so two clients in
one process never see each other's algorithms.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable

from nanda_reputation import config
from nanda_reputation.algorithms import AlgorithmRegistry, ReputationAlgorithm
from nanda_reputation.models import AlgorithmInfo, ReputationScore
from nanda_reputation.scoring.primitives import detect_outliers
from nanda_reputation.sources.base import MetricsSource
from nanda_reputation.storage.base import ReputationStorage
from nanda_reputation.storage.memory import InMemoryReputationStorage

logger = logging.getLogger(__name__)


def find_history_outliers(
    history: list[ReputationScore],
    z_threshold: float = config.OUTLIER_Z_THRESHOLD,
) -> list[ReputationScore]:
    """Return the records whose overall score is a z-score outlier in history."""
    indices = detect_outliers([s.overall_score for s in history], z_threshold)
    return [history[i] for i in indices]


class ReputationClient:
    def __init__(
        self,
        source: MetricsSource,
        storage: ReputationStorage | None = None,
        registry: AlgorithmRegistry | None = None,
    ) -> None:
        self.source = source
        self.storage = storage if storage is not None else InMemoryReputationStorage()
        self.registry = registry if registry is not None else AlgorithmRegistry()

    # ------------------------------------------------------------------
    # Algorithms
    # ------------------------------------------------------------------

    def register_algorithm(self, algorithm: ReputationAlgorithm) -> None:
        self.registry.register(algorithm)

    def get_algorithm(self, algorithm_id: str) -> ReputationAlgorithm:
        return self.registry.get(algorithm_id)

    def list_algorithms(self) -> list[AlgorithmInfo]:
        return self.registry.list()

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    async def calculate_reputation_score(
        self, subject_id: str, algorithm_id: str
    ) -> ReputationScore:
        """Fetch metrics for a subject, score them, and save the result.

        Raises:
            AlgorithmNotFoundError: If algorithm_id is not registered.
            MetricsSourceError: If the source cannot fetch the subject.
        """
        # Resolve first so an unknown id fails before any I/O
        algorithm = self.registry.get(algorithm_id)
        bundle = await self.source.fetch(subject_id)
        score = algorithm.calculate_score(subject_id, bundle)
        self.storage.save(score)
        logger.debug(
            "Scored %s with %s: %d (confidence %d)",
            subject_id,
            algorithm_id,
            score.overall_score,
            score.confidence.level,
        )
        return score

    async def calculate_many(
        self,
        subject_ids: Iterable[str],
        algorithm_id: str,
        concurrency: int = config.METRICS_CONCURRENT_SUBJECTS,
    ) -> dict[str, ReputationScore]:
        """Score many subjects with at most ``concurrency`` fetches in flight.

        Returns a dict keyed by subject id, in input order.
        """
        t0 = time.monotonic()
        self.registry.get(algorithm_id)
        semaphore = asyncio.Semaphore(concurrency)
        subjects = list(dict.fromkeys(subject_ids))

        async def _one(subject_id: str) -> ReputationScore:
            async with semaphore:
                return await self.calculate_reputation_score(subject_id, algorithm_id)

        scores = await asyncio.gather(*(_one(s) for s in subjects))
        results = dict(zip(subjects, scores))

        elapsed = time.monotonic() - t0
        logger.info(
            "Scored %d subjects with %s in %.1fs", len(results), algorithm_id, elapsed
        )
        return results

    # ------------------------------------------------------------------
    # Stored scores
    # ------------------------------------------------------------------

    def get_reputation_score(self, subject_id: str) -> ReputationScore | None:
        return self.storage.get_current(subject_id)

    def get_reputation_history(
        self, subject_id: str, limit: int = config.HISTORY_LIMIT
    ) -> list[ReputationScore]:
        return self.storage.get_history(subject_id, limit)

    def find_anomalies(
        self,
        subject_id: str,
        algorithm_id: str | None = None,
        limit: int = 50,
        z_threshold: float | None = None,
    ) -> list[ReputationScore]:
        """Stored scores for a subject that stand out from its recent history.

        The threshold is ``z_threshold`` when given, else the
        ``outlier_z_threshold`` of the algorithm registered under
        ``algorithm_id``, else config.OUTLIER_Z_THRESHOLD.

        Raises:
            AlgorithmNotFoundError: If algorithm_id is given but not registered.
        """
        if z_threshold is None:
            if algorithm_id is not None:
                z_threshold = self.registry.get(algorithm_id).config.outlier_z_threshold
            else:
                z_threshold = config.OUTLIER_Z_THRESHOLD
        history = self.storage.get_history(subject_id, limit)
        return find_history_outliers(history, z_threshold)
