"""Domain models for the accessibility reports bounded context.

Pure value objects and enums describing recorded issues, their
aggregates, and compliance assessments — independently of any
infrastructure (ORM, HTTP, caching).  All dataclasses use frozen=True
for immutability.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from ..common.errors import ValidationError
from ..common.types import IssueId, ScoreResult


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Severity(str, Enum):
    """Known issue severities, most severe first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Lower rank sorts first; unknown severities sort last.
SEVERITY_RANK: dict[str, int] = {
    Severity.CRITICAL.value: 0,
    Severity.HIGH.value: 1,
    Severity.MEDIUM.value: 2,
    Severity.LOW.value: 3,
}
UNKNOWN_SEVERITY_RANK = len(SEVERITY_RANK)


class ComplianceLevel(str, Enum):
    """Compliance tiers across all threshold tables."""

    EXCELLENT = "excellent"
    GOOD = "good"
    NEEDS_WORK = "needs-work"  # engine table
    NEEDS_IMPROVEMENT = "needs-improvement"  # display table
    POOR = "poor"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IssueAggregate:
    """Count of unresolved issues sharing one (type, severity) pair."""

    issue_type: str
    issue_severity: str
    count: int

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValidationError(
                f"Aggregate count must be >= 1, got {self.count} "
                f"for ({self.issue_type!r}, {self.issue_severity!r})"
            )


@dataclass(frozen=True)
class IssueRecord:
    """A single recorded accessibility issue."""

    id: IssueId
    page_url: str
    issue_type: str
    issue_severity: str
    issue_description: str | None
    element_selector: str | None
    wcag_criteria: str | None
    fixed: bool
    scan_date: datetime | None
    session_id: str | None = None


@dataclass(frozen=True)
class WcagCriteriaBreakdown:
    """Issue totals for one WCAG success criterion."""

    criteria: str
    total: int
    fixed_count: int

    @property
    def open_count(self) -> int:
        return self.total - self.fixed_count


@dataclass(frozen=True)
class ScanSession:
    """Issues recorded on a single calendar day."""

    session_date: date
    issue_count: int
    start_time: datetime
    end_time: datetime


@dataclass(frozen=True)
class IssueFilter:
    """Optional criteria for narrowing issue listings.

    ``page_url`` is a substring match; ``fixed=None`` matches both
    resolved and unresolved issues.
    """

    severity: str | None = None
    issue_type: str | None = None
    page_url: str | None = None
    fixed: bool | None = None

    @property
    def is_empty(self) -> bool:
        return (
            not self.severity
            and not self.issue_type
            and not self.page_url
            and self.fixed is None
        )


@dataclass(frozen=True)
class ComplianceAssessment:
    """Compliance tier derived from a score."""

    level: ComplianceLevel
    label: str
    description: str


@dataclass(frozen=True)
class ScoreReport:
    """Point-in-time snapshot of the score and its assessments."""

    score: ScoreResult
    compliance: ComplianceAssessment | None
    display_compliance: ComplianceAssessment | None
    last_scan_date: datetime | None
    unresolved_total: int
    generated_at: datetime
