"""Tests for confidence estimation and the pluggable factor estimators."""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from nanda_reputation.models import MetricsBundle, ScoringConfig
from nanda_reputation.scoring.confidence import (
    ConfidenceEstimators,
    ConstantEstimator,
    RecencyEstimator,
    calculate_confidence,
    estimate_consistency,
    estimate_diversity,
)

FIXTURES = Path(__file__).parent / "fixtures"


def _load_fixtures() -> list[dict]:
    with open(FIXTURES / "sample_bundles.json") as f:
        return json.load(f)


def _fixture_bundle(index: int) -> MetricsBundle:
    return MetricsBundle.model_validate(_load_fixtures()[index]["metrics"])


# --- Estimator Tests ---


def test_consistency_prefers_reported_score():
    bundle = MetricsBundle.model_validate(
        {
            "usage": {"consistency_score": 95},
            "feedback": {"rating_distribution": [5, 0, 0, 0, 5]},
        }
    )
    assert estimate_consistency(bundle) == 95


def test_consistency_unanimous_ratings():
    bundle = MetricsBundle.model_validate({"feedback": {"rating_distribution": [0, 0, 0, 0, 10]}})
    assert estimate_consistency(bundle) == pytest.approx(100)


def test_consistency_polarized_ratings():
    bundle = MetricsBundle.model_validate({"feedback": {"rating_distribution": [5, 0, 0, 0, 5]}})
    assert estimate_consistency(bundle) == pytest.approx(0)


def test_consistency_no_signal():
    assert estimate_consistency(MetricsBundle()) == 0
    empty = MetricsBundle.model_validate({"feedback": {"rating_distribution": [0, 0, 0, 0, 0]}})
    assert estimate_consistency(empty) == 0


def test_diversity_scales_with_clients():
    half = MetricsBundle.model_validate({"usage": {"unique_clients": 50}})
    many = MetricsBundle.model_validate({"usage": {"unique_clients": 5000}})
    assert estimate_diversity(half) == pytest.approx(50)
    assert estimate_diversity(many) == 100
    assert estimate_diversity(MetricsBundle()) == 0


def test_recency_fresh_verification():
    bundle = MetricsBundle.model_validate(
        {"verification": {"level": "gold", "verified_at": datetime.now(UTC).isoformat()}}
    )
    assert RecencyEstimator(30)(bundle) == pytest.approx(100, abs=0.01)


def test_recency_one_half_life_old():
    verified_at = datetime.now(UTC) - timedelta(days=30)
    bundle = MetricsBundle.model_validate(
        {"verification": {"level": "gold", "verified_at": verified_at.isoformat()}}
    )
    assert RecencyEstimator(30)(bundle) == pytest.approx(50, abs=0.01)


def test_recency_without_verification_date():
    bundle = MetricsBundle.model_validate({"verification": {"level": "gold"}})
    assert RecencyEstimator(30)(bundle) == 0


def test_constant_estimator():
    estimator = ConstantEstimator(42)
    assert estimator(MetricsBundle()) == 42
    assert repr(estimator) == "ConstantEstimator(42)"


# --- Confidence Level Tests ---


def test_confidence_empty_bundle_is_zero():
    confidence = calculate_confidence(MetricsBundle())
    assert confidence.level == 0
    assert set(confidence.factors) == {
        "sample_size",
        "consistency",
        "diversity",
        "recency",
        "verification_level",
    }


def test_confidence_placeholders_on_empty_bundle():
    confidence = calculate_confidence(
        MetricsBundle(), estimators=ConfidenceEstimators.placeholders()
    )
    # 0.2*70 + 0.1*60 + 0.2*80
    assert confidence.level == 36


def test_confidence_sample_size_and_verification():
    bundle = MetricsBundle.model_validate(
        {"verification": {"level": "silver"}, "feedback": {"rating_count": 20}}
    )
    confidence = calculate_confidence(bundle, ScoringConfig(minimum_data_points=5))

    assert confidence.factors["sample_size"] == pytest.approx(80)
    assert confidence.factors["verification_level"] == 75
    # 0.3*80 + 0.2*75
    assert confidence.level == 39


def test_confidence_sample_size_saturates():
    bundle = MetricsBundle.model_validate({"feedback": {"rating_count": 5000}})
    confidence = calculate_confidence(bundle)
    assert confidence.factors["sample_size"] == 100


def test_confidence_good_server():
    confidence = calculate_confidence(_fixture_bundle(0))
    # sample 100, consistency 0, diversity 100, recency 0, verification 100
    assert confidence.level == 60


def test_confidence_from_rating_spread():
    confidence = calculate_confidence(_fixture_bundle(2))
    assert confidence.factors["sample_size"] == pytest.approx(48)
    assert confidence.factors["diversity"] == pytest.approx(50)
    assert confidence.level == 47


def test_confidence_factors_are_clamped():
    confidence = calculate_confidence(_fixture_bundle(3))  # consistency_score 250
    assert confidence.factors["consistency"] == 100
    assert confidence.level == 20


def test_confidence_custom_estimators():
    estimators = ConfidenceEstimators(
        consistency=ConstantEstimator(100),
        diversity=ConstantEstimator(100),
        recency=ConstantEstimator(100),
    )
    bundle = MetricsBundle.model_validate(
        {"verification": {"level": "gold"}, "feedback": {"rating_count": 25}}
    )
    confidence = calculate_confidence(bundle, estimators=estimators)
    assert confidence.level == 100


def test_confidence_estimator_out_of_range_is_clamped():
    estimators = ConfidenceEstimators(
        consistency=ConstantEstimator(-40),
        diversity=ConstantEstimator(900),
        recency=ConstantEstimator(0),
    )
    confidence = calculate_confidence(MetricsBundle(), estimators=estimators)
    assert confidence.factors["consistency"] == 0
    assert confidence.factors["diversity"] == 100
    assert confidence.level == 10
