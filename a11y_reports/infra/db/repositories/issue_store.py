"""SQLAlchemy implementation of IssueStore."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, datetime

from sqlalchemy import case, desc, func, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from a11y_reports.domain.common.errors import StoreUnavailableError
from a11y_reports.domain.common.types import IssueId
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
from a11y_reports.infra.db.models.scan_result import (
    SCAN_RESULTS_TABLE,
    ScanResultRecord,
)

logger = logging.getLogger(__name__)

UNCATEGORIZED = "uncategorized"


def _to_record(row: ScanResultRecord) -> IssueRecord:
    return IssueRecord(
        id=IssueId(row.id),
        page_url=row.page_url,
        issue_type=row.issue_type,
        issue_severity=row.issue_severity,
        issue_description=row.issue_description,
        element_selector=row.element_selector,
        wcag_criteria=row.wcag_criteria,
        fixed=bool(row.fixed),
        scan_date=row.scan_date,
        session_id=row.session_id,
    )


def _as_date(value: object) -> date:
    """DATE() comes back as a string on SQLite and a date elsewhere."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


class SqlIssueStore(IssueStore):
    """Read ScanResultRecord rows via SQLAlchemy.

    Any SQLAlchemyError is logged and re-raised as StoreUnavailableError.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            logger.exception("Issue store query failed: %s", operation)
            raise StoreUnavailableError(operation, exc) from exc

    def exists(self) -> bool:
        with self._guard("exists"):
            return inspect(self._session.get_bind()).has_table(SCAN_RESULTS_TABLE)

    def total_row_count(self) -> int:
        with self._guard("total_row_count"):
            return (
                self._session.query(func.count(ScanResultRecord.id)).scalar()
                or 0
            )

    def unresolved_summary(self) -> list[IssueAggregate]:
        with self._guard("unresolved_summary"):
            rows = (
                self._session.query(
                    ScanResultRecord.issue_type,
                    ScanResultRecord.issue_severity,
                    func.count(ScanResultRecord.id),
                )
                .filter(ScanResultRecord.fixed.is_(False))
                .group_by(ScanResultRecord.issue_type, ScanResultRecord.issue_severity)
                .order_by(ScanResultRecord.issue_type, ScanResultRecord.issue_severity)
                .all()
            )
        return [
            IssueAggregate(issue_type=t, issue_severity=s, count=c)
            for t, s, c in rows
        ]

    def max_scan_timestamp(self) -> datetime | None:
        with self._guard("max_scan_timestamp"):
            return self._session.query(func.max(ScanResultRecord.scan_date)).scalar()

    def recent_issues(self, limit: int) -> list[IssueRecord]:
        with self._guard("recent_issues"):
            rows = (
                self._session.query(ScanResultRecord)
                .order_by(desc(ScanResultRecord.scan_date), desc(ScanResultRecord.id))
                .limit(limit)
                .all()
            )
        return [_to_record(r) for r in rows]

    def unresolved_issues(self, limit: int) -> list[IssueRecord]:
        severity_rank = case(
            SEVERITY_RANK,
            value=ScanResultRecord.issue_severity,
            else_=UNKNOWN_SEVERITY_RANK,
        )
        with self._guard("unresolved_issues"):
            rows = (
                self._session.query(ScanResultRecord)
                .filter(ScanResultRecord.fixed.is_(False))
                .order_by(
                    severity_rank,
                    desc(ScanResultRecord.scan_date),
                    desc(ScanResultRecord.id),
                )
                .limit(limit)
                .all()
            )
        return [_to_record(r) for r in rows]

    def wcag_breakdown(self) -> list[WcagCriteriaBreakdown]:
        fixed_count = func.sum(case((ScanResultRecord.fixed.is_(True), 1), else_=0))
        with self._guard("wcag_breakdown"):
            rows = (
                self._session.query(
                    ScanResultRecord.wcag_criteria,
                    func.count(ScanResultRecord.id),
                    fixed_count,
                )
                .group_by(ScanResultRecord.wcag_criteria)
                .all()
            )

        # NULL and "" (the column default) both mean uncategorized
        totals: dict[str, list[int]] = {}
        for criteria, total, fixed in rows:
            bucket = totals.setdefault(criteria or UNCATEGORIZED, [0, 0])
            bucket[0] += total
            bucket[1] += fixed or 0
        return [
            WcagCriteriaBreakdown(criteria=c, total=t, fixed_count=f)
            for c, (t, f) in sorted(totals.items())
        ]

    def scan_sessions(self, limit: int) -> list[ScanSession]:
        session_date = func.date(ScanResultRecord.scan_date).label("session_date")
        with self._guard("scan_sessions"):
            rows = (
                self._session.query(
                    session_date,
                    func.count(ScanResultRecord.id),
                    func.min(ScanResultRecord.scan_date),
                    func.max(ScanResultRecord.scan_date),
                )
                .filter(ScanResultRecord.scan_date.isnot(None))
                .group_by(session_date)
                .order_by(desc(session_date))
                .limit(limit)
                .all()
            )
        return [
            ScanSession(
                session_date=_as_date(d),
                issue_count=count,
                start_time=start,
                end_time=end,
            )
            for d, count, start, end in rows
        ]

    def filtered_issues(
        self, issue_filter: IssueFilter, limit: int
    ) -> list[IssueRecord]:
        query = self._session.query(ScanResultRecord)
        if not issue_filter.is_empty:
            query = self._apply_filter(query, issue_filter)

        with self._guard("filtered_issues"):
            rows = (
                query.order_by(desc(ScanResultRecord.scan_date), desc(ScanResultRecord.id))
                .limit(limit)
                .all()
            )
        return [_to_record(r) for r in rows]

    @staticmethod
    def _apply_filter(query, issue_filter: IssueFilter):
        if issue_filter.severity:
            query = query.filter(ScanResultRecord.issue_severity == issue_filter.severity)
        if issue_filter.issue_type:
            query = query.filter(ScanResultRecord.issue_type == issue_filter.issue_type)
        if issue_filter.page_url:
            query = query.filter(
                ScanResultRecord.page_url.contains(issue_filter.page_url, autoescape=True)
            )
        if issue_filter.fixed is not None:
            query = query.filter(ScanResultRecord.fixed.is_(issue_filter.fixed))
        return query
