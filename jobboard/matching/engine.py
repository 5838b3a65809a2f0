"""Preference matching engine.

Scores a job posting against one student's preferences with additive,
case-insensitive substring rules:

| stage    | points            | rule                                             |
|----------|-------------------|--------------------------------------------------|
| title    | 3                 | substring either way, or any word pair overlaps  |
| type     | 2                 | job type is one of the preferred types           |
| location | 2                 | substring either way                             |
| skills   | 1 per skill       | preferred skill overlaps any job skill           |
| remote   | 1                 | remote/onsite/hybrid wish agrees with location   |

A notification is due when the total reaches MATCH_THRESHOLD. An empty title
list switches matching off for that user. Otherwise the threshold is the only
gate: there is no separate "title must match" check, so a type plus location
hit (4 points) qualifies even when the title misses.
"""

from typing import List, Optional, Sequence

from jobboard.domain.models import JobPosting, RemotePreference, UserPreferences

from .models import (
    LOCATION_WEIGHT,
    MATCH_THRESHOLD,
    REASON_LOCATION,
    REASON_REMOTE,
    REASON_SKILLS_PREFIX,
    REASON_TITLE,
    REASON_TYPE,
    REMOTE_WEIGHT,
    TITLE_WEIGHT,
    TYPE_WEIGHT,
    MatchBreakdown,
    MatchResult,
)
from .text import lowered, mutual_substring, words_overlap

REMOTE_MARKERS = ("remote", "work from home")
HYBRID_MARKER = "hybrid"


class PreferenceMatcher:
    """Evaluates job postings against user preferences.

    Stateless; one instance can be shared between threads.
    """

    def __init__(self, threshold: int = MATCH_THRESHOLD):
        self.threshold = threshold

    def score(self, job: JobPosting, prefs: UserPreferences) -> MatchResult:
        """Score ``job`` against ``prefs``.

        Empty preference lists switch their stage off. Missing job fields
        (no location, no skills) simply contribute nothing.

        Args:
            job: Posting being evaluated
            prefs: One user's preferences

        Returns:
            MatchResult with the total score and one reason per matched stage
        """
        title = (job.title or "").lower()
        location = (job.location or "").lower()
        job_skills = lowered(job.skills or [])

        match_score = 0
        reasons: List[str] = []

        if prefs.preferred_job_titles and self._title_matches(title, prefs.preferred_job_titles):
            match_score += TITLE_WEIGHT
            reasons.append(REASON_TITLE)

        if prefs.preferred_job_types and self._type_matches(job.type, prefs):
            match_score += TYPE_WEIGHT
            reasons.append(REASON_TYPE)

        if prefs.preferred_locations and any(
            mutual_substring(location, preferred)
            for preferred in lowered(prefs.preferred_locations)
        ):
            match_score += LOCATION_WEIGHT
            reasons.append(REASON_LOCATION)

        matched_skills = self._matched_skills(job_skills, prefs.skill_preferences)
        if matched_skills:
            match_score += len(matched_skills)
            reasons.append(REASON_SKILLS_PREFIX + ", ".join(matched_skills))

        if self._remote_matches(location, prefs.remote_preference):
            match_score += REMOTE_WEIGHT
            reasons.append(REASON_REMOTE)

        return MatchResult(
            should_notify=bool(prefs.preferred_job_titles) and match_score >= self.threshold,
            match_score=match_score,
            match_reasons=reasons,
        )

    def check(
        self,
        prefs: Optional[UserPreferences],
        title: str,
        job_type: Optional[str] = None,
        location: Optional[str] = None,
        skills: Optional[Sequence[str]] = None,
    ) -> MatchBreakdown:
        """Report which criteria a hypothetical job would satisfy.

        Backs the "test my preferences" feature. Titles are compared by
        substring only (no word overlap) and the overall verdict is the title
        verdict.

        Args:
            prefs: Stored preferences, or None when the user has none
            title: Job title to test
            job_type: Optional job type
            location: Optional location text
            skills: Optional list of job skills

        Returns:
            MatchBreakdown with one flag per criterion
        """
        if prefs is None:
            return MatchBreakdown(reason="No job preferences set")

        breakdown = MatchBreakdown()
        title_lower = (title or "").lower()
        location_lower = (location or "").lower()

        # A blank title would be a substring of every preferred title
        if prefs.preferred_job_titles and title_lower.strip():
            breakdown.title_match = any(
                mutual_substring(title_lower, preferred)
                for preferred in lowered(prefs.preferred_job_titles)
            )
        if prefs.preferred_job_types and job_type:
            breakdown.type_match = self._type_matches(job_type, prefs)
        if prefs.preferred_locations:
            breakdown.location_match = any(
                mutual_substring(location_lower, preferred)
                for preferred in lowered(prefs.preferred_locations)
            )
        if skills:
            breakdown.skills_match = bool(
                self._matched_skills(lowered(skills), prefs.skill_preferences)
            )

        breakdown.overall_match = breakdown.title_match
        return breakdown

    @staticmethod
    def _title_matches(title: str, preferred_titles: Sequence[str]) -> bool:
        """Check a lower-cased job title against the preferred titles.

        Args:
            title: Lower-cased job title
            preferred_titles: Titles as the user entered them

        Returns:
            True on a substring hit either way or any shared word
        """
        for preferred in lowered(preferred_titles):
            if mutual_substring(title, preferred) or words_overlap(title, preferred):
                return True
        return False

    @staticmethod
    def _type_matches(job_type: Optional[str], prefs: UserPreferences) -> bool:
        """Case-insensitive membership of ``job_type`` in the preferred types."""
        if not job_type:
            return False
        wanted = {preferred.value.lower() for preferred in prefs.preferred_job_types}
        return str(job_type).lower() in wanted

    @staticmethod
    def _matched_skills(job_skills: Sequence[str], skill_preferences: Sequence[str]) -> List[str]:
        """Preferred skills (as entered, in order) hitting any job skill."""
        if not job_skills or not skill_preferences:
            return []
        return [
            preferred
            for preferred in skill_preferences
            if any(mutual_substring(skill, preferred.lower()) for skill in job_skills)
        ]

    @staticmethod
    def _remote_matches(location: str, preference: RemotePreference) -> bool:
        """Check the remote/onsite/hybrid wish against a lower-cased location.

        Args:
            location: Lower-cased job location
            preference: Stored remote preference

        Returns:
            False for "any"; otherwise whether the location agrees
        """
        # "any" never earns the point
        if preference is None or preference == RemotePreference.ANY:
            return False

        job_is_remote = any(marker in location for marker in REMOTE_MARKERS)
        job_is_hybrid = HYBRID_MARKER in location

        return (
            (preference == RemotePreference.REMOTE and job_is_remote)
            or (preference == RemotePreference.ONSITE and not job_is_remote)
            or (preference == RemotePreference.HYBRID and job_is_hybrid)
        )
