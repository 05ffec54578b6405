"""Dependency injection bootstrap — the single place that binds ports to adapters.

Every factory function here can be used as a FastAPI ``Depends()`` target.
Routers never import concrete implementations directly; they depend on
the abstractions returned by these factories.

Example usage in a router::

    from a11y_reports.wiring.bootstrap import get_reports_facade

    @router.get("/score")
    async def score(facade: ReportsFacade = Depends(get_reports_facade)):
        return facade.get_score()
"""

from __future__ import annotations

from typing import Iterator

from fastapi import Depends

from a11y_reports.config import settings
from a11y_reports.database import SessionLocal
from a11y_reports.domain.reports.compliance import get_threshold_table
from a11y_reports.domain.reports.ports import IssueStore
from a11y_reports.infra.cache.redis_pool import get_redis_client
from a11y_reports.infra.cache.score_cache import ScoreSnapshotCache
from a11y_reports.infra.db.repositories.issue_store import SqlIssueStore
from a11y_reports.use_cases.reports.export_issues import ExportIssuesCsvUseCase
from a11y_reports.use_cases.reports.facade import ReportsFacade


# ── Issue store ──────────────────────────────────────────────────────────


def get_issue_store() -> Iterator[IssueStore]:
    """Yield a SqlIssueStore bound to a fresh session; close it afterwards."""
    session = SessionLocal()
    try:
        yield SqlIssueStore(session)
    finally:
        session.close()


# ── Use cases ────────────────────────────────────────────────────────────


def get_reports_facade(
    store: IssueStore = Depends(get_issue_store),
) -> ReportsFacade:
    return ReportsFacade(
        store, default_table=get_threshold_table(settings.default_threshold_table)
    )


def get_export_issues_use_case() -> ExportIssuesCsvUseCase:
    return ExportIssuesCsvUseCase()


# ── Cache ────────────────────────────────────────────────────────────────

_score_cache: ScoreSnapshotCache | None = None


def get_score_cache() -> ScoreSnapshotCache:
    """Return the shared ScoreSnapshotCache.

    Only a connected cache is kept; while Redis is unreachable a disabled
    cache is returned and the connection is retried on the next call.
    """
    global _score_cache
    if _score_cache is None or not _score_cache.enabled:
        client = get_redis_client() if settings.score_cache_enabled else None
        _score_cache = ScoreSnapshotCache(
            client, ttl_seconds=settings.score_cache_ttl_seconds
        )
    return _score_cache
