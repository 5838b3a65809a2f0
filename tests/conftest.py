"""Shared fixtures."""

import pytest

from jobboard.domain.models import JobPosting, UserPreferences
from jobboard.persistence.database import close_database, init_database

ENV_VARS = ("FRONTEND_URL", "DATABASE_URL", "LOG_LEVEL", "ENVIRONMENT")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every environment variable the app reads."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def database(tmp_path):
    """File-backed SQLite database, initialised for the duration of a test."""
    db_url = f"sqlite:///{tmp_path / 'test.db'}"
    init_database(db_url)
    yield db_url
    close_database()


@pytest.fixture
def intern_job():
    """Remote internship requiring Python and SQL."""
    return JobPosting(
        id="job-1",
        title="Software Engineer Intern",
        company="Acme",
        type="Internship",
        location="Remote, USA",
        skills=["Python", "SQL"],
    )


@pytest.fixture
def full_preferences():
    """Preferences that hit every stage against ``intern_job`` (score 9)."""
    return UserPreferences(
        preferred_job_titles=["software engineer"],
        preferred_job_types=["Internship"],
        preferred_locations=["Remote"],
        skill_preferences=["python"],
        remote_preference="remote",
    )

