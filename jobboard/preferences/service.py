"""Preference settings management for students."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from jobboard.domain.models import NotificationChannels, UserPreferences, UserSettings
from jobboard.logging import get_logger
from jobboard.matching.engine import PreferenceMatcher
from jobboard.matching.models import MatchBreakdown
from jobboard.notifications.models import JOB_MATCH_TYPES
from jobboard.persistence.database import get_session
from jobboard.persistence.repositories import NotificationRepository, SettingsRepository
from jobboard.utils.timestamps import utc_now

logger = get_logger(__name__, component="preferences")

TITLE_REQUIRED_MESSAGE = "At least one preferred job title is required to receive notifications"
TEST_TITLE_REQUIRED_MESSAGE = "Job title is required for testing"


class PreferenceValidationError(ValueError):
    """Raised when submitted preferences cannot be saved."""

    pass


@dataclass
class NotificationStats:
    """Notification counters shown on a student's preference page."""

    total: int
    unread: int
    job_match: int
    preferences_set: bool


class PreferenceService:
    """Reads and writes a student's job preferences.

    Every method opens its own session scope.
    """

    def __init__(self, matcher: Optional[PreferenceMatcher] = None):
        self.matcher = matcher or PreferenceMatcher()

    def get_preferences(self, user_id: str) -> UserSettings:
        """Return stored settings, creating the default record on first access."""
        with get_session() as session:
            repo = SettingsRepository(session)
            settings = repo.get(user_id)
            if settings is None:
                settings = repo.upsert(UserSettings(user_id=user_id, updated_at=utc_now()))
                logger.info(
                    f"Created default settings for user {user_id}",
                    extra={"event": "preferences.created", "user_id": user_id},
                )
            return settings

    def update_preferences(
        self,
        user_id: str,
        preferences: Union[UserPreferences, Mapping[str, Any]],
        notifications: Optional[Union[NotificationChannels, Mapping[str, Any]]] = None,
    ) -> UserSettings:
        """Replace the job preferences and optionally merge channel flags.

        Args:
            user_id: Owner of the settings
            preferences: Complete new preferences
            notifications: Channel flags to change; omitted flags keep their value

        Raises:
            PreferenceValidationError: If the preferences are invalid or name no job title
        """
        try:
            prefs = (
                preferences
                if isinstance(preferences, UserPreferences)
                else UserPreferences.model_validate(dict(preferences))
            )
        except ValidationError as e:
            raise PreferenceValidationError(f"Invalid preferences: {e}") from e

        if not prefs.has_titles:
            raise PreferenceValidationError(TITLE_REQUIRED_MESSAGE)

        with get_session() as session:
            repo = SettingsRepository(session)
            current = repo.get(user_id) or UserSettings(user_id=user_id)

            channels = current.notifications
            if notifications is not None:
                changes = (
                    notifications.model_dump()
                    if isinstance(notifications, NotificationChannels)
                    else dict(notifications)
                )
                channels = NotificationChannels.model_validate({**channels.model_dump(), **changes})

            saved = repo.upsert(
                UserSettings(
                    user_id=user_id,
                    job_preferences=prefs,
                    notifications=channels,
                    updated_at=utc_now(),
                )
            )

        logger.info(
            f"Updated preferences for user {user_id}",
            extra={
                "event": "preferences.updated",
                "user_id": user_id,
                "titles": len(prefs.preferred_job_titles),
            },
        )
        return saved

    def test_match(
        self,
        user_id: str,
        title: str,
        job_type: Optional[str] = None,
        location: Optional[str] = None,
        skills: Optional[Sequence[str]] = None,
    ) -> MatchBreakdown:
        """Check a hypothetical job against the stored preferences.

        Raises:
            PreferenceValidationError: If the title is blank
        """
        if not (title or "").strip():
            raise PreferenceValidationError(TEST_TITLE_REQUIRED_MESSAGE)

        with get_session() as session:
            settings = SettingsRepository(session).get(user_id)

        prefs = settings.job_preferences if settings else None
        return self.matcher.check(prefs, title, job_type=job_type, location=location, skills=skills)

    def notification_stats(self, user_id: str) -> NotificationStats:
        """Count a student's notifications; all zeros until settings exist."""
        with get_session() as session:
            settings = SettingsRepository(session).get(user_id)
            if settings is None:
                return NotificationStats(total=0, unread=0, job_match=0, preferences_set=False)

            notifications = NotificationRepository(session)
            return NotificationStats(
                total=notifications.count_for_user(user_id),
                unread=notifications.count_for_user(user_id, is_read=False),
                job_match=notifications.count_for_user(user_id, types=JOB_MATCH_TYPES),
                preferences_set=settings.job_preferences.has_titles,
            )
