"""Reports domain — issue aggregates, scoring, compliance classification."""

from .compliance import DISPLAY, ENGINE, classify  # noqa: F401 – re-export for convenience
from .scoring import calculate_score, score_from_summary  # noqa: F401
