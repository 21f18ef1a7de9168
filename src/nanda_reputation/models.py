"""Pydantic models for metrics input, scoring configuration, and score output."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from nanda_reputation import config

# --- Input ---


class VerificationLevel(str, Enum):
    NONE = "none"
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"


class PerformanceMetrics(BaseModel):
    uptime_percentage: float | None = None  # 0-100
    avg_response_time_ms: float | None = None
    error_rate: float | None = None  # 0-1
    successful_transactions: int | None = None


class VerificationDetails(BaseModel):
    level: str | None = None  # "none", "bronze", "silver", "gold"
    verified_at: datetime | None = None
    methods: list[str] = Field(default_factory=list)


class FeedbackMetrics(BaseModel):
    average_rating: float | None = None  # 1-5 scale
    rating_count: int | None = None
    rating_distribution: list[int] | None = None  # counts for 1..5 stars
    review_count: int | None = None


class UsageMetrics(BaseModel):
    total_requests: int | None = None
    unique_clients: int | None = None
    longevity_days: int | None = None
    consistency_score: float | None = None  # 0-100


class MetricsBundle(BaseModel):
    """Sparse bundle of signals for one subject. Every category is optional."""

    performance: PerformanceMetrics | None = None
    verification: VerificationDetails | None = None
    feedback: FeedbackMetrics | None = None
    usage: UsageMetrics | None = None
    custom: dict[str, bool | int | float | str] = Field(default_factory=dict)


# --- Configuration ---


class CategoryWeights(BaseModel):
    model_config = ConfigDict(frozen=True)

    performance: float = config.CATEGORY_WEIGHTS["performance"]
    verification: float = config.CATEGORY_WEIGHTS["verification"]
    feedback: float = config.CATEGORY_WEIGHTS["feedback"]
    usage: float = config.CATEGORY_WEIGHTS["usage"]

    def total(self) -> float:
        return self.performance + self.verification + self.feedback + self.usage


class ScoringConfig(BaseModel):
    """Per-calculation configuration. Validated at call time by the scorer."""

    model_config = ConfigDict(frozen=True)

    weights: CategoryWeights = Field(default_factory=CategoryWeights)
    half_life_days: float = config.HALF_LIFE_DAYS
    minimum_data_points: int = config.MINIMUM_DATA_POINTS
    outlier_z_threshold: float = config.OUTLIER_Z_THRESHOLD

    @property
    def ideal_data_points(self) -> int:
        """Feedback sample count at which the sample-size factor saturates."""
        return max(1, self.minimum_data_points * config.IDEAL_DATA_POINTS_MULTIPLIER)

    @property
    def max_age_days(self) -> float:
        return self.half_life_days * config.MAX_AGE_HALF_LIVES


# --- Output ---


class CategoryScores(BaseModel):
    model_config = ConfigDict(frozen=True)

    performance: int = Field(ge=0, le=100)
    verification: int = Field(ge=0, le=100)
    feedback: int = Field(ge=0, le=100)
    usage: int = Field(ge=0, le=100)


class Confidence(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: int = Field(ge=0, le=100)
    factors: dict[str, float] = Field(default_factory=dict)


class ReputationScore(BaseModel):
    """Immutable result of one scoring call."""

    model_config = ConfigDict(frozen=True)

    subject_id: str
    overall_score: int = Field(ge=0, le=100)
    categories: CategoryScores
    confidence: Confidence
    last_updated: datetime
    data_points: int = Field(default=0, ge=0)
    algorithm_id: str


class AlgorithmInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    version: str
