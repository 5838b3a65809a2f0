"""Tests for preference settings management."""

import pytest

from jobboard.domain.models import UserPreferences
from jobboard.notifications.models import NotificationType
from jobboard.persistence import NotificationRepository, SettingsRepository, UserRepository, get_session
from jobboard.preferences import PreferenceService, PreferenceValidationError
from tests.helpers import make_draft as draft, make_student


@pytest.fixture
def service(database):
    """Preference service over a database holding one student, u1.

    Returns:
        PreferenceService using the default matcher
    """
    with get_session() as session:
        UserRepository(session).add(make_student("u1"))
    return PreferenceService()


class TestGetPreferences:
    def test_creates_defaults_on_first_access(self, service):
        settings = service.get_preferences("u1")

        assert settings.job_preferences.preferred_job_titles == []
        assert settings.notifications.notify_on_new_posting is True
        with get_session() as session:
            assert SettingsRepository(session).get("u1") is not None

    def test_returns_stored_settings(self, service):
        service.update_preferences("u1", {"preferred_job_titles": ["Data Analyst"]})

        assert service.get_preferences("u1").job_preferences.preferred_job_titles == ["Data Analyst"]


class TestUpdatePreferences:
    def test_titles_required(self, service):
        with pytest.raises(PreferenceValidationError, match="At least one preferred job title"):
            service.update_preferences("u1", {"preferred_job_titles": []})

    def test_blank_titles_count_as_missing(self, service):
        with pytest.raises(PreferenceValidationError):
            service.update_preferences("u1", UserPreferences(preferred_job_titles=["  "]))

    def test_invalid_payload(self, service):
        with pytest.raises(PreferenceValidationError):
            service.update_preferences(
                "u1", {"preferred_job_titles": ["Dev"], "salary_range": {"currency": "DOLLARS"}}
            )

    def test_channel_flags_merged(self, service):
        service.update_preferences(
            "u1", {"preferred_job_titles": ["Dev"]}, notifications={"email_new_postings": False}
        )

        settings = service.get_preferences("u1")
        assert settings.notifications.email_new_postings is False
        assert settings.notifications.push_new_postings is True

    def test_channel_flags_kept_when_omitted(self, service):
        service.update_preferences(
            "u1", {"preferred_job_titles": ["Dev"]}, notifications={"push_new_postings": False}
        )
        service.update_preferences("u1", {"preferred_job_titles": ["Designer"]})

        settings = service.get_preferences("u1")
        assert settings.notifications.push_new_postings is False
        assert settings.job_preferences.preferred_job_titles == ["Designer"]


class TestTestMatch:
    def test_without_preferences(self, service):
        breakdown = service.test_match("u1", "Software Engineer")
        assert breakdown.reason == "No job preferences set"

    def test_with_preferences(self, service):
        service.update_preferences(
            "u1",
            {"preferred_job_titles": ["software engineer"], "preferred_job_types": ["Internship"]},
        )

        breakdown = service.test_match("u1", "Software Engineer Intern", job_type="Internship")

        assert breakdown.title_match is True
        assert breakdown.type_match is True
        assert breakdown.overall_match is True

    @pytest.mark.parametrize("title", ["", "   ", None])
    def test_blank_title_rejected(self, service, title):
        service.update_preferences("u1", {"preferred_job_titles": ["software engineer"]})

        with pytest.raises(PreferenceValidationError, match="Job title is required for testing"):
            service.test_match("u1", title)


class TestNotificationStats:
    def test_counts(self, service):
        service.update_preferences("u1", {"preferred_job_titles": ["Dev"]})
        with get_session() as session:
            NotificationRepository(session).insert_many(
                [
                    draft("u1"),
                    draft("u1", type=NotificationType.JOB_MATCH),
                    draft("u1", type=NotificationType.SYSTEM),
                ]
            )
        with get_session() as session:
            repo = NotificationRepository(session)
            repo.mark_read(repo.list_for_user("u1")[0].id)

        stats = service.notification_stats("u1")

        assert stats.total == 3
        assert stats.unread == 2
        assert stats.job_match == 2
        assert stats.preferences_set is True

    def test_no_preferences(self, service):
        stats = service.notification_stats("u1")

        assert stats.total == 0
        assert stats.preferences_set is False

    def test_zeros_without_settings_record(self, service):
        with get_session() as session:
            NotificationRepository(session).insert_many([draft("u1"), draft("u1", job_id="job-2")])

        stats = service.notification_stats("u1")

        assert stats.total == 0
        assert stats.unread == 0
        assert stats.job_match == 0
        assert stats.preferences_set is False
