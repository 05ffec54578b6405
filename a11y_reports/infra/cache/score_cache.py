"""Redis-backed snapshot of the last computed ScoreReport.

Fail-open: every Redis error is logged and treated as a cache miss, so a
Redis outage never blocks score reads.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from redis import Redis
from redis.exceptions import RedisError

from a11y_reports.domain.reports.models import ScoreReport
from a11y_reports.infra.serialization import report_from_dict, report_to_dict

logger = logging.getLogger(__name__)

SCORE_REPORT_KEY = "a11y:score_report"


class ScoreSnapshotCache:
    """Get/set/invalidate the cached ScoreReport."""

    def __init__(
        self,
        client: Optional[Redis],
        *,
        ttl_seconds: int,
        key: str = SCORE_REPORT_KEY,
    ) -> None:
        self._client = client
        self._ttl = ttl_seconds
        self._key = key

    @property
    def enabled(self) -> bool:
        return self._client is not None

    def get(self) -> ScoreReport | None:
        if self._client is None:
            return None
        try:
            raw = self._client.get(self._key)
        except RedisError as e:
            logger.warning("Score cache read failed: %s", e)
            return None
        if raw is None:
            return None
        try:
            return report_from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError):
            logger.warning("Discarding malformed score snapshot", exc_info=True)
            self.invalidate()
            return None

    def set(self, report: ScoreReport) -> None:
        if self._client is None:
            return
        try:
            self._client.setex(self._key, self._ttl, json.dumps(report_to_dict(report)))
        except RedisError as e:
            logger.warning("Score cache write failed: %s", e)

    def invalidate(self) -> None:
        if self._client is None:
            return
        try:
            self._client.delete(self._key)
        except RedisError as e:
            logger.warning("Score cache invalidate failed: %s", e)
