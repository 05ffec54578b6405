"""Shared value types used across domain sub-packages.

These are thin wrappers that make function signatures self-documenting
and prevent primitive obsession (passing raw ints/strings everywhere).
"""

from __future__ import annotations

from enum import Enum
from typing import NewType, Union

# Identifiers
IssueId = NewType("IssueId", int)

# Scores are always 0-100 ints
Score = NewType("Score", int)


class ScoreUnavailable(str, Enum):
    """Marker for "no scan has ever been recorded".

    A single-member enum so it compares unequal to every int and
    serializes as ``"unavailable"``.
    """

    UNAVAILABLE = "unavailable"


UNAVAILABLE = ScoreUnavailable.UNAVAILABLE

ScoreResult = Union[Score, ScoreUnavailable]


def is_available(score: ScoreResult) -> bool:
    """Return True if *score* is a real 0-100 value."""
    return score != UNAVAILABLE
