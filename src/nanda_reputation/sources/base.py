"""Abstract base for metrics sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from nanda_reputation.models import MetricsBundle


class MetricsSource(ABC):
    """Base class for anything that can produce a MetricsBundle.

    A source returns whatever data it has for the subject. Categories it
    knows nothing about are left as None rather than raising.
    """

    @abstractmethod
    async def fetch(self, subject_id: str) -> MetricsBundle:
        ...
