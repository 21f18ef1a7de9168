"""In-memory metrics source for fixtures, tests, and offline scoring."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from nanda_reputation.models import MetricsBundle

from .base import MetricsSource

logger = logging.getLogger(__name__)


class StaticMetricsSource(MetricsSource):
    """Serves pre-built bundles keyed by subject id.

    Unknown subjects get an empty bundle, which scores at category defaults
    with zero confidence.
    """

    def __init__(
        self, bundles: Mapping[str, MetricsBundle | dict[str, Any]] | None = None
    ) -> None:
        self._bundles: dict[str, MetricsBundle] = {
            subject_id: MetricsBundle.model_validate(bundle)
            if isinstance(bundle, dict)
            else bundle
            for subject_id, bundle in (bundles or {}).items()
        }

    def add(self, subject_id: str, bundle: MetricsBundle | dict[str, Any]) -> None:
        if isinstance(bundle, dict):
            bundle = MetricsBundle.model_validate(bundle)
        self._bundles[subject_id] = bundle

    async def fetch(self, subject_id: str) -> MetricsBundle:
        bundle = self._bundles.get(subject_id)
        if bundle is None:
            logger.debug("No metrics for %s, returning empty bundle", subject_id)
            return MetricsBundle()
        return bundle
