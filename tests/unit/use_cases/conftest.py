"""Shared test fakes and fixtures for reports use case tests.

The fake store keeps real rows in memory and derives every query from
them — verifying actual behavior, not just "was method X called?".

Other test files outside this directory can import these fakes directly::

    from tests.unit.use_cases.conftest import FakeIssueStore, make_row
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime

import pytest

from a11y_reports.domain.common.errors import StoreUnavailableError
from a11y_reports.domain.reports.models import (
    SEVERITY_RANK,
    UNKNOWN_SEVERITY_RANK,
    IssueAggregate,
    IssueFilter,
    IssueRecord,
    ScanSession,
    WcagCriteriaBreakdown,
)
from a11y_reports.domain.reports.ports import IssueStore


# ---------------------------------------------------------------------------
# Test rows
# ---------------------------------------------------------------------------


@dataclass
class FakeIssueRow:
    """Mutable in-memory scan result row (mimics the ORM model)."""

    id: int
    issue_type: str
    issue_severity: str
    fixed: bool = False
    scan_date: datetime = datetime(2026, 3, 1, 12, 0, 0)
    page_url: str = "https://example.com/"
    issue_description: str | None = None
    element_selector: str | None = None
    wcag_criteria: str | None = None
    session_id: str | None = None

    def to_record(self) -> IssueRecord:
        return IssueRecord(
            id=self.id,
            page_url=self.page_url,
            issue_type=self.issue_type,
            issue_severity=self.issue_severity,
            issue_description=self.issue_description,
            element_selector=self.element_selector,
            wcag_criteria=self.wcag_criteria,
            fixed=self.fixed,
            scan_date=self.scan_date,
            session_id=self.session_id,
        )


_next_id = 0


def make_row(issue_type: str = "missing-alt-text", severity: str = "medium", **fields) -> FakeIssueRow:
    global _next_id
    _next_id += 1
    return FakeIssueRow(id=_next_id, issue_type=issue_type, issue_severity=severity, **fields)


def rows_for(severity: str, n: int, **fields) -> list[FakeIssueRow]:
    """*n* unresolved rows of one severity."""
    return [make_row(f"type-{severity}", severity, **fields) for _ in range(n)]


# ---------------------------------------------------------------------------
# Fake store
# ---------------------------------------------------------------------------


class FakeIssueStore(IssueStore):
    """In-memory IssueStore.

    ``provisioned=False`` mimics a table that was never created;
    ``failing=True`` makes every query raise StoreUnavailableError.
    """

    def __init__(
        self,
        rows: list[FakeIssueRow] | None = None,
        *,
        provisioned: bool = True,
        failing: bool = False,
    ) -> None:
        self.rows = list(rows or [])
        self.provisioned = provisioned
        self.failing = failing
        self.calls: list[str] = []

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if self.failing:
            raise StoreUnavailableError(operation, "connection refused")

    def add(self, *rows: FakeIssueRow) -> None:
        self.rows.extend(rows)

    def exists(self) -> bool:
        self._check("exists")
        return self.provisioned

    def total_row_count(self) -> int:
        self._check("total_row_count")
        return len(self.rows)

    def unresolved_summary(self) -> list[IssueAggregate]:
        self._check("unresolved_summary")
        counts = Counter(
            (r.issue_type, r.issue_severity) for r in self.rows if not r.fixed
        )
        return [
            IssueAggregate(issue_type=t, issue_severity=s, count=c)
            for (t, s), c in sorted(counts.items())
        ]

    def max_scan_timestamp(self) -> datetime | None:
        self._check("max_scan_timestamp")
        return max((r.scan_date for r in self.rows), default=None)

    def _newest_first(self, rows):
        return sorted(rows, key=lambda r: (r.scan_date, r.id), reverse=True)

    def recent_issues(self, limit: int) -> list[IssueRecord]:
        self._check("recent_issues")
        return [r.to_record() for r in self._newest_first(self.rows)[:limit]]

    def unresolved_issues(self, limit: int) -> list[IssueRecord]:
        self._check("unresolved_issues")
        open_rows = self._newest_first(r for r in self.rows if not r.fixed)
        open_rows.sort(
            key=lambda r: SEVERITY_RANK.get(r.issue_severity, UNKNOWN_SEVERITY_RANK)
        )
        return [r.to_record() for r in open_rows[:limit]]

    def wcag_breakdown(self) -> list[WcagCriteriaBreakdown]:
        self._check("wcag_breakdown")
        totals: dict[str, list[int]] = {}
        for r in self.rows:
            bucket = totals.setdefault(r.wcag_criteria or "uncategorized", [0, 0])
            bucket[0] += 1
            bucket[1] += int(r.fixed)
        return [
            WcagCriteriaBreakdown(criteria=c, total=t, fixed_count=f)
            for c, (t, f) in sorted(totals.items())
        ]

    def scan_sessions(self, limit: int) -> list[ScanSession]:
        self._check("scan_sessions")
        by_day: dict = {}
        for r in self.rows:
            by_day.setdefault(r.scan_date.date(), []).append(r.scan_date)
        return [
            ScanSession(
                session_date=day,
                issue_count=len(stamps),
                start_time=min(stamps),
                end_time=max(stamps),
            )
            for day, stamps in sorted(by_day.items(), reverse=True)[:limit]
        ]

    def filtered_issues(self, issue_filter: IssueFilter, limit: int) -> list[IssueRecord]:
        self._check("filtered_issues")
        f = issue_filter
        matched = [
            r
            for r in self.rows
            if (not f.severity or r.issue_severity == f.severity)
            and (not f.issue_type or r.issue_type == f.issue_type)
            and (not f.page_url or f.page_url in r.page_url)
            and (f.fixed is None or r.fixed == f.fixed)
        ]
        return [r.to_record() for r in self._newest_first(matched)[:limit]]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def store() -> FakeIssueStore:
    return FakeIssueStore()
