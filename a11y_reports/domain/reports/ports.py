"""Ports (abstract interfaces) for the reports domain.

These define WHAT the domain needs from the outside world without
specifying HOW it's provided.  Concrete implementations live in infra/.

Every read method raises StoreUnavailableError when the backing store
cannot be queried.  A store that was never provisioned is not an error:
``exists()`` returns False and callers short-circuit.
"""

from __future__ import annotations

import abc
from collections.abc import Sequence
from datetime import datetime

from .models import (
    IssueAggregate,
    IssueFilter,
    IssueRecord,
    ScanSession,
    WcagCriteriaBreakdown,
)


class IssueStore(abc.ABC):
    """Read-only access to recorded accessibility issues."""

    @abc.abstractmethod
    def exists(self) -> bool:
        """Whether the issue record store has been provisioned."""

    @abc.abstractmethod
    def total_row_count(self) -> int:
        """Total issues ever recorded, fixed or not."""

    @abc.abstractmethod
    def unresolved_summary(self) -> Sequence[IssueAggregate]:
        """Unresolved issues grouped by (issue_type, issue_severity)."""

    @abc.abstractmethod
    def max_scan_timestamp(self) -> datetime | None:
        """Most recent scan_date across all rows."""

    @abc.abstractmethod
    def recent_issues(self, limit: int) -> Sequence[IssueRecord]:
        """All issues, newest first."""

    @abc.abstractmethod
    def unresolved_issues(self, limit: int) -> Sequence[IssueRecord]:
        """Unresolved issues, most severe first, then newest first."""

    @abc.abstractmethod
    def wcag_breakdown(self) -> Sequence[WcagCriteriaBreakdown]:
        ...

    @abc.abstractmethod
    def scan_sessions(self, limit: int) -> Sequence[ScanSession]:
        """Per-day issue counts, newest day first."""

    @abc.abstractmethod
    def filtered_issues(
        self, issue_filter: IssueFilter, limit: int
    ) -> Sequence[IssueRecord]:
        """Issues matching *issue_filter*, newest first."""
