"""ReportsFacade — read-side entry point for scores and issue reports.

The facade owns no state: every call is a read-through to the injected
IssueStore plus the pure scoring/compliance functions.  It never writes;
issue ingestion belongs to the scanner.

The facade depends ONLY on domain ports — never on SQLAlchemy,
FastAPI, or any other infrastructure.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from a11y_reports.domain.common.errors import ValidationError
from a11y_reports.domain.common.types import UNAVAILABLE, ScoreResult, is_available
from a11y_reports.domain.reports.compliance import (
    DISPLAY,
    ENGINE,
    ThresholdTable,
    classify,
)
from a11y_reports.domain.reports.models import (
    ComplianceAssessment,
    IssueAggregate,
    IssueFilter,
    IssueRecord,
    ScanSession,
    ScoreReport,
    WcagCriteriaBreakdown,
)
from a11y_reports.domain.reports.ports import IssueStore
from a11y_reports.domain.reports.scoring import calculate_score, score_from_summary

logger = logging.getLogger(__name__)

MAX_LIMIT = 1000


def _check_limit(limit: int) -> None:
    if not 1 <= limit <= MAX_LIMIT:
        raise ValidationError(f"limit must be between 1 and {MAX_LIMIT}")


class ReportsFacade:
    """Scores, compliance tiers and issue listings over one IssueStore."""

    def __init__(
        self, store: IssueStore, *, default_table: ThresholdTable = ENGINE
    ) -> None:
        self._store = store
        self._default_table = default_table

    # ── Core queries ────────────────────────────────────────────────────

    def get_issue_summary(self) -> tuple[IssueAggregate, ...]:
        if not self._store.exists():
            return ()
        return tuple(self._store.unresolved_summary())

    def get_last_scan_date(self) -> datetime | None:
        if not self._store.exists():
            return None
        return self._store.max_scan_timestamp()

    def calculate_accessibility_score(self) -> ScoreResult:
        score = calculate_score(self._store)
        if is_available(score):
            logger.info("Accessibility score computed: %d", score)
        else:
            logger.info("No scan recorded yet; score unavailable")
        return score

    def calculate_compliance_assessment(
        self, table: ThresholdTable | None = None
    ) -> ComplianceAssessment | None:
        return classify(
            self.calculate_accessibility_score(), table or self._default_table
        )

    # Names used by API callers
    get_score = calculate_accessibility_score
    get_compliance = calculate_compliance_assessment

    # ── Issue listings ──────────────────────────────────────────────────

    def get_scan_results(self, limit: int = 100) -> tuple[IssueRecord, ...]:
        _check_limit(limit)
        if not self._store.exists():
            return ()
        return tuple(self._store.recent_issues(limit))

    def get_detailed_manual_issues(self, limit: int = 100) -> tuple[IssueRecord, ...]:
        """Unresolved issues needing manual attention, most severe first."""
        _check_limit(limit)
        if not self._store.exists():
            return ()
        return tuple(self._store.unresolved_issues(limit))

    def get_wcag_compliance_breakdown(self) -> tuple[WcagCriteriaBreakdown, ...]:
        if not self._store.exists():
            return ()
        return tuple(self._store.wcag_breakdown())

    def get_scan_sessions(self, limit: int = 10) -> tuple[ScanSession, ...]:
        _check_limit(limit)
        if not self._store.exists():
            return ()
        return tuple(self._store.scan_sessions(limit))

    def get_filtered_results(
        self, issue_filter: IssueFilter | None = None, limit: int = 200
    ) -> tuple[IssueRecord, ...]:
        _check_limit(limit)
        if not self._store.exists():
            return ()
        return tuple(
            self._store.filtered_issues(issue_filter or IssueFilter(), limit)
        )

    # ── Snapshot ────────────────────────────────────────────────────────

    def build_report(self, now: datetime | None = None) -> ScoreReport:
        """Assemble a cacheable snapshot of the current score state.

        The score is computed once and classified against both threshold
        tables so the two views are always consistent.  Score and
        unresolved total come from the same summary read.
        """
        summary: tuple[IssueAggregate, ...] = ()
        score: ScoreResult = UNAVAILABLE
        last_scan_date = None
        if self._store.exists():
            last_scan_date = self._store.max_scan_timestamp()
            if self._store.total_row_count() > 0:
                summary = tuple(self._store.unresolved_summary())
                score = score_from_summary(summary)
        return ScoreReport(
            score=score,
            compliance=classify(score, ENGINE),
            display_compliance=classify(score, DISPLAY),
            last_scan_date=last_scan_date,
            unresolved_total=sum(a.count for a in summary),
            generated_at=now or datetime.now(timezone.utc),
        )
