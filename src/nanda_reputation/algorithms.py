"""Pluggable reputation algorithms and the registry that holds them."""

from __future__ import annotations

from abc import ABC, abstractmethod

from nanda_reputation.config import (
    HALF_LIFE_DAYS,
    MINIMUM_DATA_POINTS,
    OUTLIER_Z_THRESHOLD,
)
from nanda_reputation.errors import AlgorithmNotFoundError
from nanda_reputation.models import (
    AlgorithmInfo,
    CategoryWeights,
    MetricsBundle,
    ReputationScore,
    ScoringConfig,
)
from nanda_reputation.scoring.calculator import (
    WEIGHTED_ALGORITHM_ID,
    calculate_score,
    validate_config,
)
from nanda_reputation.scoring.confidence import ConfidenceEstimators


class ReputationAlgorithm(ABC):
    """Base class for reputation algorithms.

    Subclasses set the identifying attributes and implement
    calculate_score(). Algorithms must be safe to call concurrently.
    """

    id: str
    name: str
    description: str
    version: str
    config: ScoringConfig

    def info(self) -> AlgorithmInfo:
        return AlgorithmInfo(
            id=self.id,
            name=self.name,
            description=self.description,
            version=self.version,
        )

    @abstractmethod
    def calculate_score(
        self, subject_id: str, bundle: MetricsBundle
    ) -> ReputationScore:
        ...


class WeightedAlgorithm(ReputationAlgorithm):
    """Weighted category blend with confidence, see scoring.calculator.

    ``id`` is the registry key and may be customised; records it produces
    always carry WEIGHTED_ALGORITHM_ID as their algorithm_id.
    """

    version = "1.0"

    def __init__(
        self,
        config: ScoringConfig | None = None,
        estimators: ConfidenceEstimators | None = None,
        id: str = WEIGHTED_ALGORITHM_ID,
        name: str = "Weighted Score Algorithm",
        description: str = (
            "Calculates reputation based on weighted components with time decay"
        ),
    ) -> None:
        self.config = config or ScoringConfig()
        validate_config(self.config)
        self.estimators = estimators or ConfidenceEstimators.defaults(
            self.config.half_life_days
        )
        self.id = id
        self.name = name
        self.description = description

    def calculate_score(
        self, subject_id: str, bundle: MetricsBundle
    ) -> ReputationScore:
        return calculate_score(subject_id, bundle, self.config, self.estimators)

    def __repr__(self) -> str:
        return f"WeightedAlgorithm(id={self.id!r}, config={self.config!r})"


def create_weighted_algorithm(
    weights: CategoryWeights | dict[str, float],
    half_life_days: float = HALF_LIFE_DAYS,
    minimum_data_points: int = MINIMUM_DATA_POINTS,
    estimators: ConfidenceEstimators | None = None,
    outlier_z_threshold: float = OUTLIER_Z_THRESHOLD,
    **identity: str,
) -> WeightedAlgorithm:
    """Build a WeightedAlgorithm from plain parameters.

    Args:
        weights: Category weights, as a model or a dict with the four
            category keys.
        half_life_days: Decay half-life for age-sensitive signals.
        minimum_data_points: Feedback samples needed for full sample-size
            confidence is five times this.
        estimators: Optional confidence factor estimators.
        outlier_z_threshold: z-score above which a stored score counts as
            an anomaly in its history.
        **identity: Optional ``id``, ``name`` and ``description`` overrides.

    Raises:
        ConfigurationError: If the resulting config is invalid.
    """
    if isinstance(weights, dict):
        weights = CategoryWeights(**weights)
    config = ScoringConfig(
        weights=weights,
        half_life_days=half_life_days,
        minimum_data_points=minimum_data_points,
        outlier_z_threshold=outlier_z_threshold,
    )
    return WeightedAlgorithm(config, estimators, **identity)


class AlgorithmRegistry:
    """Algorithms keyed by id. Each instance is independent."""

    def __init__(self, algorithms: list[ReputationAlgorithm] | None = None) -> None:
        self._algorithms: dict[str, ReputationAlgorithm] = {}
        for algorithm in algorithms or []:
            self.register(algorithm)

    def register(self, algorithm: ReputationAlgorithm) -> None:
        """Add an algorithm, replacing any already registered under its id."""
        self._algorithms[algorithm.id] = algorithm

    def get(self, algorithm_id: str) -> ReputationAlgorithm:
        try:
            return self._algorithms[algorithm_id]
        except KeyError:
            raise AlgorithmNotFoundError(algorithm_id) from None

    def list(self) -> list[AlgorithmInfo]:
        return [a.info() for a in self._algorithms.values()]

    def __contains__(self, algorithm_id: object) -> bool:
        return algorithm_id in self._algorithms

    def __len__(self) -> int:
        return len(self._algorithms)
