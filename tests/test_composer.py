"""Unit tests for notification composition."""

import pytest

from jobboard.config.models import NotificationConfig
from jobboard.domain.models import JobPosting
from jobboard.matching.models import MatchResult
from jobboard.notifications import NotificationComposer, NotificationTemplateError, NotificationType

THREE_REASONS = [
    "Job title matches your preferences",
    "Job type matches your preferences",
    "Location matches your preferences",
]


@pytest.fixture
def composer():
    return NotificationComposer(base_url="https://jobs.example.com/")


@pytest.fixture
def posting():
    return JobPosting(id="abc123", title="Data Analyst", company="Acme", type="Full-time")


class TestMessage:
    def test_first_two_reasons_only(self, composer, posting):
        match = MatchResult(should_notify=True, match_score=7, match_reasons=THREE_REASONS)

        message = composer.build_message(posting, match)

        assert message == (
            "A new Full-time position at Acme matches your preferences! "
            "(Job title matches your preferences, Job type matches your preferences)"
        )
        assert "Location matches your preferences" not in message

    def test_single_reason_not_quoted(self, composer, posting):
        match = MatchResult(should_notify=True, match_score=3, match_reasons=THREE_REASONS[:1])

        message = composer.build_message(posting, match)

        assert message == "A new Full-time position at Acme matches your preferences!"

    def test_custom_template(self, posting):
        config = NotificationConfig(message_template="{{ job_title }} @ {{ company }}")
        composer = NotificationComposer(config=config)
        match = MatchResult(should_notify=True, match_score=3)

        assert composer.build_message(posting, match) == "Data Analyst @ Acme"

    def test_long_message_truncated(self, posting):
        config = NotificationConfig(message_template="{{ company }} " + "word " * 200)
        composer = NotificationComposer(config=config)

        message = composer.build_message(posting, MatchResult(should_notify=True, match_score=3))

        assert len(message) <= 500
        assert message.endswith("...")

    def test_unknown_template_variable_raises(self, posting):
        config = NotificationConfig(message_template="{{ salary }}")
        composer = NotificationComposer(config=config)

        with pytest.raises(NotificationTemplateError):
            composer.build_message(posting, MatchResult(should_notify=True, match_score=3))

    def test_invalid_template_syntax_raises(self):
        config = NotificationConfig(message_template="{% if %}")
        with pytest.raises(NotificationTemplateError):
            NotificationComposer(config=config)


class TestCompose:
    def test_draft_fields(self, composer, posting):
        match = MatchResult(should_notify=True, match_score=7, match_reasons=THREE_REASONS)

        draft = composer.compose(posting, match, user_id="u1")

        assert draft.user_id == "u1"
        assert draft.type == NotificationType.NEW_POSTING.value
        assert draft.title == "🎯 New Job Match!"
        assert draft.job_id == "abc123"
        assert draft.is_important is True
        assert draft.action_url == "https://jobs.example.com/jobs/abc123"
        assert draft.action_text == "View Job"
        assert draft.metadata.match_score == 7
        assert draft.metadata.match_reasons == THREE_REASONS
        assert draft.metadata.job_title == "Data Analyst"
        assert draft.metadata.company == "Acme"

    def test_default_base_url(self, posting):
        composer = NotificationComposer()
        assert composer.action_url(posting) == "http://localhost:5173/jobs/abc123"

    def test_metadata_reasons_are_copied(self, composer, posting):
        reasons = list(THREE_REASONS)
        match = MatchResult(should_notify=True, match_score=7, match_reasons=reasons)

        draft = composer.compose(posting, match, user_id="u1")
        reasons.append("mutated")

        assert draft.metadata.match_reasons == THREE_REASONS

    def test_custom_wording(self, posting):
        config = NotificationConfig(title="New role for you", action_text="Open")
        composer = NotificationComposer(config=config)

        draft = composer.compose(posting, MatchResult(should_notify=True, match_score=3), "u1")

        assert draft.title == "New role for you"
        assert draft.action_text == "Open"
