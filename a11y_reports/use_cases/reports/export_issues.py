"""ExportIssuesCsvUseCase — render filtered issue records as CSV.

Produces the CSV text in memory; the interface layer decides whether to
stream it as a download or write it somewhere.
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from datetime import datetime

from a11y_reports.domain.common.errors import EntityNotFoundError, ValidationError
from a11y_reports.domain.reports.models import IssueFilter, IssueRecord
from a11y_reports.domain.reports.ports import IssueStore

logger = logging.getLogger(__name__)

CSV_HEADERS = (
    "Page URL",
    "Issue Type",
    "Severity",
    "Description",
    "Element",
    "Fixed",
    "Scan Date",
)


# ── Query (input) ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class ExportIssuesQuery:
    """Immutable value object describing which issues to export."""

    issue_filter: IssueFilter = field(default_factory=IssueFilter)
    limit: int = 200

    def __post_init__(self) -> None:
        if not 1 <= self.limit <= 10_000:
            raise ValidationError("limit must be between 1 and 10000")


# ── Result (output) ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class ExportIssuesResult:
    """What the use case returns to the caller."""

    content: str
    filename: str
    row_count: int


# ── Helpers ─────────────────────────────────────────────────────────────


def _format_value(value: object) -> str:
    """Format a single cell; None becomes an empty string."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    return str(value)


def _row(record: IssueRecord) -> list[str]:
    return [
        _format_value(record.page_url),
        _format_value(record.issue_type),
        _format_value(record.issue_severity),
        _format_value(record.issue_description),
        _format_value(record.element_selector),
        _format_value(record.fixed),
        _format_value(record.scan_date),
    ]


def build_filename(now: datetime) -> str:
    return f"accessibility-report-{now:%Y-%m-%d-%H%M%S}.csv"


# ── Use Case ────────────────────────────────────────────────────────────


class ExportIssuesCsvUseCase:
    """Export issues matching a filter to CSV text."""

    def execute(
        self,
        store: IssueStore,
        query: ExportIssuesQuery,
        *,
        now: datetime | None = None,
    ) -> ExportIssuesResult:
        records = ()
        if store.exists():
            records = tuple(store.filtered_issues(query.issue_filter, query.limit))

        if not records:
            raise EntityNotFoundError("Issue results", query.issue_filter)

        buf = io.StringIO()
        writer = csv.writer(buf)
        writer.writerow(CSV_HEADERS)
        for record in records:
            writer.writerow(_row(record))

        filename = build_filename(now or datetime.now())
        logger.info("Exported %d issues to %s", len(records), filename)
        return ExportIssuesResult(
            content=buf.getvalue(),
            filename=filename,
            row_count=len(records),
        )
