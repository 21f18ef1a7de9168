"""Exceptions raised by the reputation toolkit.

Missing metrics are never errors; they fall back to category defaults and
show up as low confidence instead.
"""

from __future__ import annotations


class ReputationError(Exception):
    """Base class for all reputation toolkit errors."""


class ConfigurationError(ReputationError, ValueError):
    """Raised when a scoring configuration or primitive argument is invalid."""


class AlgorithmNotFoundError(ReputationError, LookupError):
    """Raised when an algorithm id is not present in a registry."""

    def __init__(self, algorithm_id: str) -> None:
        super().__init__(f"Algorithm with ID {algorithm_id} not found")
        self.algorithm_id = algorithm_id


class MetricsSourceError(ReputationError):
    """Raised when a metrics source cannot produce a bundle for a subject."""
