"""Shared serialization helpers for the infrastructure layer.

Convert domain report snapshots to and from JSON-safe dicts for caching.
"""

from __future__ import annotations

from datetime import datetime

from a11y_reports.domain.common.types import UNAVAILABLE, Score, ScoreResult
from a11y_reports.domain.reports.models import (
    ComplianceAssessment,
    ComplianceLevel,
    ScoreReport,
)


def _assessment_to_dict(a: ComplianceAssessment | None) -> dict | None:
    if a is None:
        return None
    return {"level": a.level.value, "label": a.label, "description": a.description}


def _assessment_from_dict(d: dict | None) -> ComplianceAssessment | None:
    if d is None:
        return None
    return ComplianceAssessment(
        level=ComplianceLevel(d["level"]),
        label=d["label"],
        description=d["description"],
    )


def _score_from_json(value: object) -> ScoreResult:
    if value == UNAVAILABLE.value:
        return UNAVAILABLE
    return Score(int(value))


def _dt(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def report_to_dict(report: ScoreReport) -> dict:
    """Flatten a ScoreReport; datetimes become ISO strings."""
    score = report.score
    return {
        "score": score.value if score is UNAVAILABLE else int(score),
        "compliance": _assessment_to_dict(report.compliance),
        "display_compliance": _assessment_to_dict(report.display_compliance),
        "last_scan_date": (
            report.last_scan_date.isoformat() if report.last_scan_date else None
        ),
        "unresolved_total": report.unresolved_total,
        "generated_at": report.generated_at.isoformat(),
    }


def report_from_dict(data: dict) -> ScoreReport:
    return ScoreReport(
        score=_score_from_json(data["score"]),
        compliance=_assessment_from_dict(data.get("compliance")),
        display_compliance=_assessment_from_dict(data.get("display_compliance")),
        last_scan_date=_dt(data.get("last_scan_date")),
        unresolved_total=int(data.get("unresolved_total", 0)),
        generated_at=datetime.fromisoformat(data["generated_at"]),
    )
