"""Small builders for domain objects used across tests."""

from jobboard.domain.models import Student, UserPreferences, UserSettings
from jobboard.notifications.models import NotificationDraft, NotificationMetadata


def make_student(user_id: str, **overrides) -> Student:
    data = {"id": user_id, "email": f"{user_id}@example.com", "name": user_id.title()}
    data.update(overrides)
    return Student(**data)


def make_settings(user_id: str, titles=("software engineer",), **prefs) -> UserSettings:
    return UserSettings(
        user_id=user_id,
        job_preferences=UserPreferences(preferred_job_titles=list(titles), **prefs),
    )


def make_draft(user_id: str, job_id: str = "job-1", **overrides) -> NotificationDraft:
    data = {
        "user_id": user_id,
        "title": "🎯 New Job Match!",
        "message": "A new Internship position at Acme matches your preferences!",
        "job_id": job_id,
        "action_url": f"http://localhost:5173/jobs/{job_id}",
        "action_text": "View Job",
        "metadata": NotificationMetadata(
            match_score=3, match_reasons=["x"], job_title="Dev", company="Acme"
        ),
    }
    data.update(overrides)
    return NotificationDraft(**data)
