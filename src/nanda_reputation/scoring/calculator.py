"""Aggregate score computation — combines category scores into a reputation score."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from nanda_reputation.config import WEIGHT_SUM_TOLERANCE
from nanda_reputation.errors import ConfigurationError
from nanda_reputation.models import (
    CategoryScores,
    MetricsBundle,
    ReputationScore,
    ScoringConfig,
)

from .categories import CATEGORY_SCORERS
from .confidence import ConfidenceEstimators, calculate_confidence
from .primitives import clamp, round_half_up

logger = logging.getLogger(__name__)

# Written to every record; bump when the formula changes.
WEIGHTED_ALGORITHM_ID = "weighted-score-v1"


def validate_config(config: ScoringConfig) -> None:
    """Raise ConfigurationError if config cannot drive a calculation."""
    if config.half_life_days <= 0:
        raise ConfigurationError(
            f"half_life_days must be positive, got {config.half_life_days}"
        )
    if config.minimum_data_points < 0:
        raise ConfigurationError(
            f"minimum_data_points must be >= 0, got {config.minimum_data_points}"
        )
    if config.outlier_z_threshold <= 0:
        raise ConfigurationError(
            f"outlier_z_threshold must be positive, got {config.outlier_z_threshold}"
        )
    for category, weight in config.weights.model_dump().items():
        if weight < 0:
            raise ConfigurationError(f"weight for {category} is negative: {weight}")


def calculate_score(
    subject_id: str,
    bundle: MetricsBundle,
    config: ScoringConfig | None = None,
    estimators: ConfidenceEstimators | None = None,
) -> ReputationScore:
    """Run all category scorers and compute the weighted aggregate.

    Weights are applied as given. If they do not sum to 1 the result is
    clamped to 0-100 and may saturate at either bound; a warning is logged.
    """
    config = config or ScoringConfig()
    validate_config(config)

    weights = config.weights.model_dump()
    total_weight = sum(weights.values())
    if abs(total_weight - 1.0) > WEIGHT_SUM_TOLERANCE:
        logger.warning(
            "Category weights sum to %.4f, not 1.0; overall score for %s "
            "will be clamped to 0-100",
            total_weight,
            subject_id,
        )

    # Run each category scorer
    scores = {
        category: clamp(scorer(bundle)) for category, scorer in CATEGORY_SCORERS.items()
    }

    # Weighted aggregate
    weighted = sum(scores[cat] * weights[cat] for cat in CATEGORY_SCORERS)
    overall = clamp(weighted)

    confidence = calculate_confidence(bundle, config, estimators)

    data_points = 0
    if bundle.feedback is not None and bundle.feedback.rating_count:
        data_points = max(bundle.feedback.rating_count, 0)

    return ReputationScore(
        subject_id=subject_id,
        overall_score=round_half_up(overall),
        categories=CategoryScores(**{cat: round_half_up(s) for cat, s in scores.items()}),
        confidence=confidence,
        last_updated=datetime.now(UTC),
        data_points=data_points,
        algorithm_id=WEIGHTED_ALGORITHM_ID,
    )
