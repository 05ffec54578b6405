"""Reports API endpoints.

Read-only views over recorded accessibility issues:
- GET /reports/score — current score
- GET /reports/compliance — compliance tier (engine or display table)
- GET /reports/summary — unresolved issues grouped by type and severity
- GET /reports/report — cached snapshot of all of the above
- GET /reports/issues, /issues/manual, /wcag-breakdown, /sessions — listings
- GET /reports/export.csv — CSV download of filtered issues
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from ...domain.common.errors import (
    EntityNotFoundError,
    StoreUnavailableError,
    ValidationError as DomainValidationError,
)
from ...domain.common.types import UNAVAILABLE, is_available
from ...domain.reports.compliance import get_threshold_table
from ...domain.reports.models import (
    ComplianceAssessment,
    IssueFilter,
    IssueRecord,
    ScoreReport,
)
from ...domain.reports.ports import IssueStore
from ...infra.cache.score_cache import ScoreSnapshotCache
from ...schemas.reports import (
    ComplianceResponse,
    IssueAggregateResponse,
    IssueListResponse,
    IssueRecordResponse,
    LastScanResponse,
    ScanSessionResponse,
    ScoreReportResponse,
    ScoreResponse,
    WcagBreakdownResponse,
)
from ...use_cases.reports.export_issues import (
    ExportIssuesCsvUseCase,
    ExportIssuesQuery,
)
from ...use_cases.reports.facade import ReportsFacade
from ...wiring.bootstrap import (
    get_export_issues_use_case,
    get_issue_store,
    get_reports_facade,
    get_score_cache,
)

logger = logging.getLogger(__name__)
router = APIRouter()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@contextmanager
def _domain_errors() -> Iterator[None]:
    """Translate domain errors into HTTP responses."""
    try:
        yield
    except StoreUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except DomainValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _compliance(a: Optional[ComplianceAssessment]) -> Optional[ComplianceResponse]:
    if a is None:
        return None
    return ComplianceResponse(level=a.level.value, label=a.label, description=a.description)


def _issue(r: IssueRecord) -> IssueRecordResponse:
    return IssueRecordResponse(
        id=r.id,
        page_url=r.page_url,
        issue_type=r.issue_type,
        issue_severity=r.issue_severity,
        issue_description=r.issue_description,
        element_selector=r.element_selector,
        wcag_criteria=r.wcag_criteria,
        fixed=r.fixed,
        scan_date=r.scan_date,
        session_id=r.session_id,
    )


def _issue_list(records) -> IssueListResponse:
    return IssueListResponse(issues=[_issue(r) for r in records], total=len(records))


def _is_stale(cached: ScoreReport, last_scan: Optional[datetime]) -> bool:
    if last_scan is None:
        return False
    return cached.last_scan_date is None or last_scan > cached.last_scan_date


def _report(report: ScoreReport, *, cached: bool) -> ScoreReportResponse:
    score = report.score
    return ScoreReportResponse(
        score=int(score) if is_available(score) else UNAVAILABLE.value,
        compliance=_compliance(report.compliance),
        display_compliance=_compliance(report.display_compliance),
        last_scan_date=report.last_scan_date,
        unresolved_total=report.unresolved_total,
        generated_at=report.generated_at,
        cached=cached,
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/score", response_model=ScoreResponse)
async def get_score(facade: ReportsFacade = Depends(get_reports_facade)):
    """Current accessibility score (100 minus severity-weighted penalties)."""
    with _domain_errors():
        score = facade.get_score()
    if is_available(score):
        return ScoreResponse(score=int(score), available=True)
    return ScoreResponse(score=UNAVAILABLE.value, available=False)


@router.get("/compliance", response_model=Optional[ComplianceResponse])
async def get_compliance(
    table: Optional[Literal["engine", "display"]] = Query(
        None, description="Threshold table; defaults to the configured table"
    ),
    facade: ReportsFacade = Depends(get_reports_facade),
):
    """Compliance tier, or null before the first scan."""
    with _domain_errors():
        threshold_table = get_threshold_table(table) if table else None
        return _compliance(facade.get_compliance(threshold_table))


@router.get("/summary", response_model=List[IssueAggregateResponse])
async def get_issue_summary(facade: ReportsFacade = Depends(get_reports_facade)):
    """Unresolved issues grouped by (issue_type, issue_severity)."""
    with _domain_errors():
        summary = facade.get_issue_summary()
    return [
        IssueAggregateResponse(
            issue_type=a.issue_type, issue_severity=a.issue_severity, count=a.count
        )
        for a in summary
    ]


@router.get("/last-scan", response_model=LastScanResponse)
async def get_last_scan(facade: ReportsFacade = Depends(get_reports_facade)):
    with _domain_errors():
        return LastScanResponse(last_scan_date=facade.get_last_scan_date())


@router.get("/report", response_model=ScoreReportResponse)
async def get_report(
    refresh: bool = Query(False, description="Recompute instead of using the cache"),
    facade: ReportsFacade = Depends(get_reports_facade),
    cache: ScoreSnapshotCache = Depends(get_score_cache),
):
    """Score snapshot; served from the Redis cache when available.

    A snapshot older than the latest recorded scan is discarded.
    """
    if not refresh:
        cached = cache.get()
        if cached is not None:
            with _domain_errors():
                last_scan = facade.get_last_scan_date()
            if not _is_stale(cached, last_scan):
                return _report(cached, cached=True)
            cache.invalidate()
            logger.info("Score snapshot superseded by scan at %s", last_scan)

    with _domain_errors():
        report = facade.build_report()
    cache.set(report)
    logger.info("Score report rebuilt (refresh=%s)", refresh)
    return _report(report, cached=False)


@router.get("/issues", response_model=IssueListResponse)
async def list_issues(
    severity: Optional[str] = Query(None, description="Exact severity match"),
    issue_type: Optional[str] = Query(None, description="Exact issue type match"),
    page_url: Optional[str] = Query(None, description="Substring of the page URL"),
    fixed: Optional[bool] = Query(None, description="Filter by resolution state"),
    limit: int = Query(200, ge=1, le=1000, description="Max issues to return"),
    facade: ReportsFacade = Depends(get_reports_facade),
):
    """Issues matching the filters, newest first."""
    issue_filter = IssueFilter(
        severity=severity, issue_type=issue_type, page_url=page_url, fixed=fixed
    )
    with _domain_errors():
        return _issue_list(facade.get_filtered_results(issue_filter, limit))


@router.get("/issues/manual", response_model=IssueListResponse)
async def list_manual_issues(
    limit: int = Query(100, ge=1, le=1000),
    facade: ReportsFacade = Depends(get_reports_facade),
):
    """Unresolved issues, most severe first."""
    with _domain_errors():
        return _issue_list(facade.get_detailed_manual_issues(limit))


@router.get("/wcag-breakdown", response_model=List[WcagBreakdownResponse])
async def get_wcag_breakdown(facade: ReportsFacade = Depends(get_reports_facade)):
    with _domain_errors():
        breakdown = facade.get_wcag_compliance_breakdown()
    return [
        WcagBreakdownResponse(
            criteria=b.criteria,
            total=b.total,
            fixed_count=b.fixed_count,
            open_count=b.open_count,
        )
        for b in breakdown
    ]


@router.get("/sessions", response_model=List[ScanSessionResponse])
async def list_sessions(
    limit: int = Query(10, ge=1, le=1000),
    facade: ReportsFacade = Depends(get_reports_facade),
):
    """Issue counts per scan day, newest first."""
    with _domain_errors():
        sessions = facade.get_scan_sessions(limit)
    return [
        ScanSessionResponse(
            session_date=s.session_date,
            issue_count=s.issue_count,
            start_time=s.start_time,
            end_time=s.end_time,
        )
        for s in sessions
    ]


@router.get("/export.csv")
async def export_csv(
    severity: Optional[str] = Query(None),
    issue_type: Optional[str] = Query(None),
    page_url: Optional[str] = Query(None),
    fixed: Optional[bool] = Query(None),
    limit: int = Query(200, ge=1, le=10_000),
    store: IssueStore = Depends(get_issue_store),
    use_case: ExportIssuesCsvUseCase = Depends(get_export_issues_use_case),
):
    """Download filtered issues as CSV."""
    with _domain_errors():
        query = ExportIssuesQuery(
            issue_filter=IssueFilter(
                severity=severity, issue_type=issue_type, page_url=page_url, fixed=fixed
            ),
            limit=limit,
        )
        result = use_case.execute(store, query)

    return Response(
        content=result.content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )
