"""HTTP metrics source.

Fetches the four metric categories for a subject from a reputation data API
and assembles them into a MetricsBundle. Each category lives at its own
endpoint:

    GET {base}/reputation/{subject_id}/performance
    GET {base}/reputation/{subject_id}/verification
    GET {base}/reputation/{subject_id}/feedback
    GET {base}/reputation/{subject_id}/usage

A 404 means the API has no data for that category, which leaves it absent in
the bundle. Any other failure raises MetricsSourceError.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from nanda_reputation import config
from nanda_reputation.errors import MetricsSourceError
from nanda_reputation.models import MetricsBundle

from .base import MetricsSource

logger = logging.getLogger(__name__)


class HttpMetricsSource(MetricsSource):
    """Fetches MetricsBundles over HTTP with httpx."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = config.METRICS_REQUEST_TIMEOUT,
    ) -> None:
        self._base_url = (base_url or config.METRICS_API_BASE).rstrip("/")
        self._client = client
        self._timeout = timeout

        token = token or os.environ.get("NANDA_API_TOKEN")
        self._headers: dict[str, str] = {"Accept": "application/json"}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    # ------------------------------------------------------------------
    # Low-level API helpers
    # ------------------------------------------------------------------

    def _url(self, subject_id: str, category: str) -> str:
        return f"{self._base_url}/reputation/{quote(subject_id, safe='')}/{category}"

    async def _get_category(
        self,
        client: httpx.AsyncClient,
        subject_id: str,
        category: str,
    ) -> dict[str, Any] | None:
        """GET one category. Returns None when the API has no data for it."""
        url = self._url(subject_id, category)
        try:
            resp = await client.get(url, headers=self._headers)
        except httpx.HTTPError as exc:
            raise MetricsSourceError(
                f"Request for {category} metrics of {subject_id} failed: {exc}"
            ) from exc

        if resp.status_code == 404:
            return None
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise MetricsSourceError(
                f"{category} metrics for {subject_id} returned HTTP {resp.status_code}"
            ) from exc
        try:
            return resp.json()
        except ValueError as exc:
            raise MetricsSourceError(
                f"{category} metrics for {subject_id} are not valid JSON"
            ) from exc

    async def _fetch_with(
        self, client: httpx.AsyncClient, subject_id: str
    ) -> MetricsBundle:
        # Fire all four requests concurrently.
        results = await asyncio.gather(
            *(
                self._get_category(client, subject_id, category)
                for category in config.METRICS_CATEGORIES
            )
        )
        data = {
            category: payload
            for category, payload in zip(config.METRICS_CATEGORIES, results)
            if payload is not None
        }
        logger.debug(
            "Fetched %d/%d metric categories for %s",
            len(data),
            len(config.METRICS_CATEGORIES),
            subject_id,
        )
        try:
            return MetricsBundle.model_validate(data)
        except ValidationError as exc:
            raise MetricsSourceError(
                f"Malformed metrics payload for {subject_id}: {exc}"
            ) from exc

    # ------------------------------------------------------------------
    # Public entry point
    # ------------------------------------------------------------------

    async def fetch(self, subject_id: str) -> MetricsBundle:
        if self._client is not None:
            return await self._fetch_with(self._client, subject_id)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await self._fetch_with(client, subject_id)
