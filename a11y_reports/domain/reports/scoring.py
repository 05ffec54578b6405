"""Accessibility score calculation.

The score starts at 100 and loses a fixed penalty per unresolved issue,
weighted by severity, floored at 0.  All functions except
``calculate_score`` are pure; ``calculate_score`` only reads from the
store it is given.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..common.types import UNAVAILABLE, Score, ScoreResult
from .models import IssueAggregate, Severity
from .ports import IssueStore

MAX_SCORE = 100
MIN_SCORE = 0

SEVERITY_WEIGHTS: dict[str, int] = {
    Severity.CRITICAL.value: 10,
    Severity.HIGH.value: 5,
    Severity.MEDIUM.value: 3,
    Severity.LOW.value: 1,
}
DEFAULT_SEVERITY_WEIGHT = 1


def severity_weight(severity: str) -> int:
    """Penalty per issue for *severity*; unrecognized values weigh 1."""
    return SEVERITY_WEIGHTS.get(severity, DEFAULT_SEVERITY_WEIGHT)


def calculate_penalty(summary: Iterable[IssueAggregate]) -> int:
    return sum(severity_weight(a.issue_severity) * a.count for a in summary)


def score_from_summary(summary: Iterable[IssueAggregate]) -> Score:
    """Score an unresolved-issue summary.  An empty summary scores 100."""
    return Score(max(MIN_SCORE, MAX_SCORE - calculate_penalty(summary)))


def calculate_score(store: IssueStore) -> ScoreResult:
    """Score the current contents of *store*.

    Returns UNAVAILABLE when the store was never provisioned or has never
    recorded a single issue (no scan has run).  Store failures propagate
    as StoreUnavailableError.
    """
    if not store.exists():
        return UNAVAILABLE
    if store.total_row_count() == 0:
        return UNAVAILABLE
    return score_from_summary(store.unresolved_summary())


__all__ = [
    "DEFAULT_SEVERITY_WEIGHT",
    "MAX_SCORE",
    "MIN_SCORE",
    "SEVERITY_WEIGHTS",
    "calculate_penalty",
    "calculate_score",
    "score_from_summary",
    "severity_weight",
]
