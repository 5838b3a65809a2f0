"""Unit tests for domain models."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from jobboard.domain.models import (
    JobPosting,
    JobType,
    NotificationChannels,
    RemotePreference,
    Student,
    UserPreferences,
    UserRole,
    UserSettings,
)


class TestUserPreferences:
    def test_defaults(self):
        prefs = UserPreferences()

        assert prefs.preferred_job_titles == []
        assert prefs.preferred_job_types == []
        assert prefs.remote_preference == RemotePreference.ANY
        assert prefs.salary_range.currency == "USD"
        assert prefs.has_titles is False

    def test_null_fields_normalised(self):
        prefs = UserPreferences(
            preferred_job_titles=None,
            preferred_locations=None,
            skill_preferences=None,
            preferred_job_types=None,
            remote_preference=None,
            salary_range=None,
        )

        assert prefs.preferred_job_titles == []
        assert prefs.preferred_locations == []
        assert prefs.skill_preferences == []
        assert prefs.preferred_job_types == []
        assert prefs.remote_preference == RemotePreference.ANY
        assert prefs.salary_range.min == 0

    def test_blank_titles_dropped(self):
        prefs = UserPreferences(preferred_job_titles=["  ", "Data Analyst ", ""])
        assert prefs.preferred_job_titles == ["Data Analyst"]

    def test_comma_string_accepted(self):
        prefs = UserPreferences(skill_preferences="Python, SQL")
        assert prefs.skill_preferences == ["Python", "SQL"]

    def test_unknown_job_types_dropped(self):
        prefs = UserPreferences(preferred_job_types=["Internship", "Gig", JobType.CONTRACT])
        assert prefs.preferred_job_types == [JobType.INTERNSHIP, JobType.CONTRACT]

    def test_unknown_remote_preference_falls_back_to_any(self):
        assert UserPreferences(remote_preference="moon").remote_preference == RemotePreference.ANY

    def test_remote_preference_case_insensitive(self):
        assert UserPreferences(remote_preference="Remote").remote_preference == RemotePreference.REMOTE


class TestNotificationChannels:
    def test_enabled_by_default(self):
        assert NotificationChannels().notify_on_new_posting is True

    def test_either_channel_is_enough(self):
        channels = NotificationChannels(email_new_postings=False, push_new_postings=True)
        assert channels.notify_on_new_posting is True

    def test_both_disabled(self):
        channels = NotificationChannels(email_new_postings=False, push_new_postings=False)
        assert channels.notify_on_new_posting is False

    def test_missing_flag_defaults_to_enabled(self):
        assert NotificationChannels(email_new_postings=None).email_new_postings is True


class TestUserSettings:
    def test_missing_sections_default(self):
        settings = UserSettings(user_id="u1", job_preferences=None, notifications=None)

        assert settings.job_preferences == UserPreferences()
        assert settings.notifications.notify_on_new_posting is True

    def test_naive_timestamp_treated_as_utc(self):
        settings = UserSettings(user_id="u1", updated_at=datetime(2024, 1, 1, 12, 0))
        assert settings.updated_at.tzinfo == timezone.utc

    def test_aware_timestamp_converted_to_utc(self):
        tz = timezone(timedelta(hours=2))
        settings = UserSettings(user_id="u1", updated_at=datetime(2024, 1, 1, 12, 0, tzinfo=tz))
        assert settings.updated_at.hour == 10


class TestStudent:
    def test_defaults(self):
        student = Student(email="ada@example.com", name=" Ada ")

        assert student.name == "Ada"
        assert student.role == UserRole.STUDENT
        assert student.is_active is True
        assert len(student.id) == 32

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            Student(email="not-an-email", name="Ada")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            Student(email="ada@example.com", name="   ")


class TestJobPosting:
    def test_minimal_posting(self):
        posting = JobPosting(title=" Data Analyst ", company="Acme", type="Full-time")

        assert posting.title == "Data Analyst"
        assert posting.location == ""
        assert posting.skills == []
        assert posting.description == ""

    def test_enum_type_accepted(self):
        posting = JobPosting(title="Dev", company="Acme", type=JobType.FREELANCE)
        assert posting.type == "Freelance"

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            JobPosting(title="Dev", company="Acme", type="Gig")

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            JobPosting(title="  ", company="Acme", type="Contract")

    def test_title_length_limit(self):
        with pytest.raises(ValidationError):
            JobPosting(title="x" * 101, company="Acme", type="Contract")

    def test_skills_split_from_string(self):
        posting = JobPosting(title="Dev", company="Acme", type="Contract", skills="Go, Rust,")
        assert posting.skills == ["Go", "Rust"]

    def test_none_location_becomes_empty(self):
        posting = JobPosting(title="Dev", company="Acme", type="Contract", location=None)
        assert posting.location == ""

    def test_frozen(self):
        posting = JobPosting(title="Dev", company="Acme", type="Contract")
        with pytest.raises(ValidationError):
            posting.title = "Other"
