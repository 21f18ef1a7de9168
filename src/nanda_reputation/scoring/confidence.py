"""Confidence estimation — how much the overall score can be trusted.

Confidence is a weighted blend of five factors, each 0-100. Sample size and
verification level are computed directly from the bundle. Consistency,
diversity and recency are supplied by pluggable FactorEstimators so callers
can swap in their own signals without touching the blend.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

from nanda_reputation.config import (
    CONFIDENCE_WEIGHTS,
    DIVERSITY_FULL_CLIENTS,
    HALF_LIFE_DAYS,
    PLACEHOLDER_FACTORS,
    RATING_MAX_STD_DEV,
    RATING_MIN,
)
from nanda_reputation.models import Confidence, MetricsBundle, ScoringConfig

from .categories import verification_points
from .primitives import apply_time_decay, clamp, round_half_up

# Pure function of the bundle returning 0-100
FactorEstimator = Callable[[MetricsBundle], float]


class ConstantEstimator:
    """Always returns the same value, whatever the bundle holds."""

    __slots__ = ("value",)

    def __init__(self, value: float) -> None:
        self.value = value

    def __call__(self, bundle: MetricsBundle) -> float:
        return self.value

    def __repr__(self) -> str:
        return f"ConstantEstimator({self.value!r})"


class RecencyEstimator:
    """Decay a perfect score by the age of the subject's last verification."""

    __slots__ = ("half_life_days",)

    def __init__(self, half_life_days: float = HALF_LIFE_DAYS) -> None:
        self.half_life_days = half_life_days

    def __call__(self, bundle: MetricsBundle) -> float:
        details = bundle.verification
        if details is None or details.verified_at is None:
            return 0.0
        return apply_time_decay(100.0, details.verified_at, self.half_life_days)

    def __repr__(self) -> str:
        return f"RecencyEstimator(half_life_days={self.half_life_days!r})"


def estimate_consistency(bundle: MetricsBundle) -> float:
    """Use the reported consistency score, else the spread of star ratings.

    A distribution concentrated on one star value scores 100; one split
    evenly between 1 and 5 stars scores 0.
    """
    if bundle.usage is not None and bundle.usage.consistency_score is not None:
        return bundle.usage.consistency_score

    feedback = bundle.feedback
    if feedback is None or not feedback.rating_distribution:
        return 0.0
    counts = [max(c, 0) for c in feedback.rating_distribution]
    total = sum(counts)
    if total == 0:
        return 0.0

    stars = [RATING_MIN + i for i in range(len(counts))]
    mean = sum(s * c for s, c in zip(stars, counts)) / total
    variance = sum(c * (s - mean) ** 2 for s, c in zip(stars, counts)) / total
    return 100 * (1 - math.sqrt(variance) / RATING_MAX_STD_DEV)


def estimate_diversity(bundle: MetricsBundle) -> float:
    usage = bundle.usage
    if usage is None or not usage.unique_clients:
        return 0.0
    return min(100.0, usage.unique_clients / DIVERSITY_FULL_CLIENTS * 100)


@dataclass(frozen=True)
class ConfidenceEstimators:
    """The three pluggable confidence factors."""

    consistency: FactorEstimator
    diversity: FactorEstimator
    recency: FactorEstimator

    @classmethod
    def defaults(cls, half_life_days: float = HALF_LIFE_DAYS) -> ConfidenceEstimators:
        return cls(
            consistency=estimate_consistency,
            diversity=estimate_diversity,
            recency=RecencyEstimator(half_life_days),
        )

    @classmethod
    def placeholders(cls) -> ConfidenceEstimators:
        """Fixed 70/60/80 values used before real estimators existed."""
        return cls(
            consistency=ConstantEstimator(PLACEHOLDER_FACTORS["consistency"]),
            diversity=ConstantEstimator(PLACEHOLDER_FACTORS["diversity"]),
            recency=ConstantEstimator(PLACEHOLDER_FACTORS["recency"]),
        )


def _sample_size(bundle: MetricsBundle, ideal: int) -> float:
    count = bundle.feedback.rating_count if bundle.feedback is not None else None
    if not count or count < 0:
        return 0.0
    return min(100.0, count / ideal * 100)


def calculate_confidence(
    bundle: MetricsBundle,
    config: ScoringConfig | None = None,
    estimators: ConfidenceEstimators | None = None,
) -> Confidence:
    """Compute confidence factors and their weighted level (0-100 int)."""
    config = config or ScoringConfig()
    estimators = estimators or ConfidenceEstimators.defaults(config.half_life_days)

    verification = bundle.verification
    factors = {
        "sample_size": _sample_size(bundle, config.ideal_data_points),
        "consistency": clamp(estimators.consistency(bundle)),
        "diversity": clamp(estimators.diversity(bundle)),
        "recency": clamp(estimators.recency(bundle)),
        "verification_level": float(
            verification_points(verification.level if verification else None)
        ),
    }

    weighted = sum(factors[name] * w for name, w in CONFIDENCE_WEIGHTS.items())
    weight_sum = sum(CONFIDENCE_WEIGHTS.values())
    level = weighted / weight_sum if weight_sum > 0 else 0.0

    return Confidence(level=round_half_up(clamp(level)), factors=factors)
