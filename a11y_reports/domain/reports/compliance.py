"""Compliance classification — score to tier.

Two threshold tables exist and are kept separate:

* ``ENGINE`` (90/70/50) is the canonical classification.
* ``DISPLAY`` (95/85/70) is the stricter table used by the admin
  dashboard for WCAG/ADA/EAA badges.

Bands are evaluated high to low; the lower bound is inclusive and the
first matching band wins.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..common.errors import ValidationError
from ..common.types import ScoreResult, is_available
from .models import ComplianceAssessment, ComplianceLevel


@dataclass(frozen=True)
class ComplianceBand:
    """Scores ``>= min_score`` (and below the next band up) map here."""

    min_score: int
    assessment: ComplianceAssessment


@dataclass(frozen=True)
class ThresholdTable:
    name: str
    bands: tuple[ComplianceBand, ...]  # descending min_score, last is 0

    def __post_init__(self) -> None:
        floors = [b.min_score for b in self.bands]
        if not floors or floors != sorted(floors, reverse=True) or floors[-1] != 0:
            raise ValidationError(
                f"Threshold table {self.name!r} must have descending bands ending at 0"
            )


ENGINE = ThresholdTable(
    name="engine",
    bands=(
        ComplianceBand(90, ComplianceAssessment(
            level=ComplianceLevel.EXCELLENT,
            label="Excellent",
            description="Your site meets high accessibility standards.",
        )),
        ComplianceBand(70, ComplianceAssessment(
            level=ComplianceLevel.GOOD,
            label="Good",
            description="Your site has good accessibility with some areas for improvement.",
        )),
        ComplianceBand(50, ComplianceAssessment(
            level=ComplianceLevel.NEEDS_WORK,
            label="Needs Work",
            description="Your site has accessibility issues that should be addressed.",
        )),
        ComplianceBand(0, ComplianceAssessment(
            level=ComplianceLevel.POOR,
            label="Poor",
            description="Your site has significant accessibility issues requiring attention.",
        )),
    ),
)

DISPLAY = ThresholdTable(
    name="display",
    bands=(
        ComplianceBand(95, ComplianceAssessment(
            level=ComplianceLevel.EXCELLENT,
            label="Excellent",
            description="Meets WCAG, ADA and EAA expectations.",
        )),
        ComplianceBand(85, ComplianceAssessment(
            level=ComplianceLevel.GOOD,
            label="Good",
            description="Largely compliant; a few issues remain.",
        )),
        ComplianceBand(70, ComplianceAssessment(
            level=ComplianceLevel.NEEDS_IMPROVEMENT,
            label="Needs Improvement",
            description="Several issues put compliance at risk.",
        )),
        ComplianceBand(0, ComplianceAssessment(
            level=ComplianceLevel.POOR,
            label="Poor",
            description="Not compliant; significant issues require attention.",
        )),
    ),
)

THRESHOLD_TABLES: dict[str, ThresholdTable] = {
    ENGINE.name: ENGINE,
    DISPLAY.name: DISPLAY,
}


def get_threshold_table(name: str) -> ThresholdTable:
    """Look up a threshold table by name ("engine" or "display")."""
    try:
        return THRESHOLD_TABLES[name]
    except KeyError:
        raise ValidationError(
            f"Unknown threshold table {name!r}; "
            f"expected one of {sorted(THRESHOLD_TABLES)}"
        ) from None


def classify(
    score: ScoreResult, table: ThresholdTable = ENGINE
) -> ComplianceAssessment | None:
    """Return the compliance assessment for *score*, or None if unavailable."""
    if not is_available(score):
        return None
    for band in table.bands:
        if score >= band.min_score:
            return band.assessment
    # Bands end at 0 and scores are never negative
    return table.bands[-1].assessment


__all__ = [
    "DISPLAY",
    "ENGINE",
    "THRESHOLD_TABLES",
    "ComplianceBand",
    "ThresholdTable",
    "classify",
    "get_threshold_table",
]
