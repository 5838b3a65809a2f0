"""Preference matching engine.

- PreferenceMatcher: scores a job posting against a user's preferences
- MatchResult: score, reasons and notify decision for one (job, user) pair
- MatchBreakdown: per-criterion flags for testing preferences
"""

from .engine import PreferenceMatcher
from .models import MATCH_THRESHOLD, MatchBreakdown, MatchResult

__all__ = [
    "PreferenceMatcher",
    "MatchResult",
    "MatchBreakdown",
    "MATCH_THRESHOLD",
]
