"""Category scorers — performance, verification, feedback, usage.

Each scorer takes a MetricsBundle and returns an unrounded float. Scorers
never raise on missing data: an absent category falls back to its entry in
CATEGORY_DEFAULTS, and absent fields inside a present category fall back
per term as documented on each function.
"""

from __future__ import annotations

from nanda_reputation.config import (
    CATEGORY_DEFAULTS,
    PERFORMANCE_TERM_DEFAULT,
    PERFORMANCE_WEIGHTS,
    RATING_MAX,
    RATING_MIN,
    RESPONSE_TIME_MS_PER_POINT,
    USAGE_FULL_MARKS,
    USAGE_WEIGHTS,
    VERIFICATION_POINTS,
)
from nanda_reputation.models import MetricsBundle, VerificationLevel

from .primitives import clamp


def verification_points(level: VerificationLevel | str | None) -> int:
    """Map a verification level to points.

    Names are matched case-insensitively so "Silver" scores like "silver".
    Anything outside VerificationLevel scores the same as "none".
    """
    if isinstance(level, VerificationLevel):
        level = level.value
    if not level:
        return VERIFICATION_POINTS["none"]
    return VERIFICATION_POINTS.get(level.strip().lower(), VERIFICATION_POINTS["none"])


# ---------------------------------------------------------------------------
# Performance
# ---------------------------------------------------------------------------


def score_performance(bundle: MetricsBundle) -> float:
    """Blend uptime, response time and error rate.

    Missing uptime contributes 0. Missing response time or error rate
    contributes the neutral PERFORMANCE_TERM_DEFAULT instead.
    """
    metrics = bundle.performance
    if metrics is None:
        return CATEGORY_DEFAULTS["performance"]

    uptime = metrics.uptime_percentage or 0.0

    # Lower is better for both, so invert
    if metrics.avg_response_time_ms is not None:
        response = clamp(100 - metrics.avg_response_time_ms / RESPONSE_TIME_MS_PER_POINT)
    else:
        response = PERFORMANCE_TERM_DEFAULT

    if metrics.error_rate is not None:
        errors = clamp(100 - metrics.error_rate * 100)
    else:
        errors = PERFORMANCE_TERM_DEFAULT

    return (
        uptime * PERFORMANCE_WEIGHTS["uptime"]
        + response * PERFORMANCE_WEIGHTS["response_time"]
        + errors * PERFORMANCE_WEIGHTS["error_rate"]
    )


# ---------------------------------------------------------------------------
# Verification
# ---------------------------------------------------------------------------


def score_verification(bundle: MetricsBundle) -> float:
    details = bundle.verification
    if details is None:
        return CATEGORY_DEFAULTS["verification"]
    return float(verification_points(details.level))


# ---------------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------------


def score_feedback(bundle: MetricsBundle) -> float:
    """Rescale the average star rating to 0-100. A zero rating counts as absent."""
    metrics = bundle.feedback
    if metrics is None or not metrics.average_rating:
        return CATEGORY_DEFAULTS["feedback"]
    return (metrics.average_rating - RATING_MIN) / (RATING_MAX - RATING_MIN) * 100


# ---------------------------------------------------------------------------
# Usage
# ---------------------------------------------------------------------------


def _saturating(count: int | None, full_marks: int) -> float:
    """Linear 0-100 up to full_marks. Missing or zero counts score 0."""
    if not count:
        return 0.0
    return min(100.0, count / full_marks * 100)


def score_usage(bundle: MetricsBundle) -> float:
    metrics = bundle.usage
    if metrics is None:
        return CATEGORY_DEFAULTS["usage"]

    requests = _saturating(metrics.total_requests, USAGE_FULL_MARKS["total_requests"])
    clients = _saturating(metrics.unique_clients, USAGE_FULL_MARKS["unique_clients"])
    longevity = _saturating(metrics.longevity_days, USAGE_FULL_MARKS["longevity_days"])

    return (
        requests * USAGE_WEIGHTS["total_requests"]
        + clients * USAGE_WEIGHTS["unique_clients"]
        + longevity * USAGE_WEIGHTS["longevity_days"]
    )


CATEGORY_SCORERS = {
    "performance": score_performance,
    "verification": score_verification,
    "feedback": score_feedback,
    "usage": score_usage,
}
