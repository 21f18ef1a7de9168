"""Math primitives shared by the scorer: clamping, decay, normalization, outliers."""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import UTC, datetime

from nanda_reputation.config import OUTLIER_Z_THRESHOLD
from nanda_reputation.errors import ConfigurationError

SECONDS_PER_DAY = 86400


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest int with .5 going up (round() would go to even)."""
    return math.floor(value + 0.5)


def _as_utc(ts: datetime | str) -> datetime:
    """Coerce a datetime or ISO 8601 string to an offset-aware UTC datetime."""
    if isinstance(ts, str):
        # Handle trailing Z
        ts = datetime.fromisoformat(ts.strip().replace("Z", "+00:00"))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


def age_in_days(recorded_at: datetime | str, now: datetime | None = None) -> float:
    """Fractional days between recorded_at and now, floored at 0."""
    current = _as_utc(now) if now is not None else datetime.now(UTC)
    delta = current - _as_utc(recorded_at)
    return max(delta.total_seconds() / SECONDS_PER_DAY, 0.0)


def apply_time_decay(
    value: float,
    recorded_at: datetime | str,
    half_life_days: float,
    now: datetime | None = None,
) -> float:
    """Exponentially decay value by its age: value * 0.5 ** (age / half_life).

    Age is measured against the wall clock at call time unless ``now`` is
    given, so repeated calls on the same input drift as time passes.
    """
    if half_life_days <= 0:
        raise ConfigurationError(
            f"half_life_days must be positive, got {half_life_days}"
        )
    return value * math.pow(0.5, age_in_days(recorded_at, now) / half_life_days)


def normalize(value: float, min_value: float, max_value: float) -> float:
    """Clamp value to [min_value, max_value] and rescale to 0-100.

    A zero-width range returns 100 when value reaches it and 0 below it.
    """
    if min_value > max_value:
        raise ConfigurationError(
            f"normalization range is inverted: min {min_value} > max {max_value}"
        )
    if min_value == max_value:
        return 100.0 if value >= min_value else 0.0
    clamped = clamp(value, min_value, max_value)
    return (clamped - min_value) / (max_value - min_value) * 100


def detect_outliers(
    values: Sequence[float], z_threshold: float = OUTLIER_Z_THRESHOLD
) -> list[int]:
    """Return indices whose population z-score exceeds z_threshold."""
    if z_threshold <= 0:
        raise ConfigurationError(f"z_threshold must be positive, got {z_threshold}")
    if len(values) < 2:
        return []

    n = len(values)
    mean = sum(values) / n
    variance = sum((v - mean) ** 2 for v in values) / n
    std_dev = math.sqrt(variance)
    if std_dev == 0:
        return []

    return [
        i for i, v in enumerate(values) if abs(v - mean) / std_dev > z_threshold
    ]
