"""Data models for match results."""

from dataclasses import dataclass, field
from typing import List, Optional

MATCH_THRESHOLD = 3

TITLE_WEIGHT = 3
TYPE_WEIGHT = 2
LOCATION_WEIGHT = 2
REMOTE_WEIGHT = 1

REASON_TITLE = "Job title matches your preferences"
REASON_TYPE = "Job type matches your preferences"
REASON_LOCATION = "Location matches your preferences"
REASON_SKILLS_PREFIX = "Skills match: "
REASON_REMOTE = "Remote preference matches"


@dataclass
class MatchResult:
    """Outcome of scoring one job posting against one user's preferences.

    Created per (job, user) pair and discarded once the notification, if any,
    has been composed.

    Attributes:
        should_notify: True when match_score reaches MATCH_THRESHOLD
        match_score: Sum of the weights of every stage that matched
        match_reasons: Reason per matched stage, in stage order
            (title, type, location, skills, remote)
    """

    should_notify: bool
    match_score: int = 0
    match_reasons: List[str] = field(default_factory=list)

    @property
    def reason(self) -> str:
        """One-line summary for logs."""
        if self.should_notify:
            return "Job matches your preferences"
        return "Job does not match your preferences"


@dataclass
class MatchBreakdown:
    """Per-criterion view used when a student tests their preferences.

    Unlike MatchResult this carries no score; ``overall_match`` follows the
    title check alone.
    """

    title_match: bool = False
    type_match: bool = False
    location_match: bool = False
    skills_match: bool = False
    overall_match: bool = False
    reason: Optional[str] = None
