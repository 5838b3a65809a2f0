"""Core domain models for students, preferences and job postings.

This module defines the data structures shared across the application:
- JobPosting: read-only snapshot of a posted job, as seen by the matcher
- UserPreferences: a student's job-matching preferences
- NotificationChannels: opt-in flags for new-posting notifications
- UserSettings: preferences and channels owned by one user
- Student: user directory record
"""

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional
from uuid import uuid4

from pydantic import BaseModel, EmailStr, Field, field_validator

from jobboard.utils.timestamps import ensure_utc


class JobType(str, Enum):
    """Employment types a job can be posted with."""

    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    INTERNSHIP = "Internship"
    CONTRACT = "Contract"
    FREELANCE = "Freelance"


class RemotePreference(str, Enum):
    """Where a student is willing to work."""

    REMOTE = "remote"
    ONSITE = "onsite"
    HYBRID = "hybrid"
    ANY = "any"


class UserRole(str, Enum):
    """Account roles."""

    STUDENT = "student"
    ADMIN = "admin"


def _as_string_list(v: Any) -> List[str]:
    """Coerce stored list-ish values to a list of non-blank strings."""
    if v is None:
        return []
    if isinstance(v, str):
        v = v.split(",")
    items = [item.value if isinstance(item, Enum) else item for item in v if item is not None]
    return [str(item).strip() for item in items if str(item).strip()]


class SalaryRange(BaseModel):
    """Desired salary band. Stored with the preferences; not used for scoring."""

    min: float = Field(0, ge=0)
    max: float = Field(0, ge=0)
    currency: str = Field("USD", min_length=3, max_length=3)

    @field_validator("min", "max", mode="before")
    @classmethod
    def default_missing_amount(cls, v):
        return 0 if v is None else v


class UserPreferences(BaseModel):
    """Job-matching preferences for one user.

    Records written by older clients may be missing fields or hold nulls. Those
    are normalised to the "no filter" defaults instead of failing validation,
    so a sparse record just contributes nothing at the matching stage.
    """

    preferred_job_types: List[JobType] = Field(default_factory=list)
    preferred_job_titles: List[str] = Field(default_factory=list)
    preferred_locations: List[str] = Field(default_factory=list)
    skill_preferences: List[str] = Field(default_factory=list)
    remote_preference: RemotePreference = RemotePreference.ANY
    salary_range: SalaryRange = Field(default_factory=SalaryRange)

    @field_validator("preferred_job_titles", "preferred_locations", "skill_preferences", mode="before")
    @classmethod
    def normalize_text_lists(cls, v):
        return _as_string_list(v)

    @field_validator("preferred_job_types", mode="before")
    @classmethod
    def drop_unknown_job_types(cls, v):
        known = {job_type.value for job_type in JobType}
        return [item for item in _as_string_list(v) if item in known]

    @field_validator("remote_preference", mode="before")
    @classmethod
    def default_remote_preference(cls, v):
        if v is None:
            return RemotePreference.ANY
        value = v.value if isinstance(v, Enum) else str(v).strip().lower()
        known = {pref.value for pref in RemotePreference}
        return value if value in known else RemotePreference.ANY

    @field_validator("salary_range", mode="before")
    @classmethod
    def default_salary_range(cls, v):
        return {} if v is None else v

    @property
    def has_titles(self) -> bool:
        """Title preferences are what enables new-posting matching at all."""
        return bool(self.preferred_job_titles)


class NotificationChannels(BaseModel):
    """Per-channel opt-in flags for new-posting notifications."""

    email_new_postings: bool = True
    push_new_postings: bool = True

    @field_validator("email_new_postings", "push_new_postings", mode="before")
    @classmethod
    def default_missing_flag(cls, v):
        return True if v is None else v

    @property
    def notify_on_new_posting(self) -> bool:
        return self.email_new_postings or self.push_new_postings


class UserSettings(BaseModel):
    """Preferences and notification channels owned by a single user."""

    user_id: str
    job_preferences: UserPreferences = Field(default_factory=UserPreferences)
    notifications: NotificationChannels = Field(default_factory=NotificationChannels)
    updated_at: Optional[datetime] = None

    @field_validator("job_preferences", "notifications", mode="before")
    @classmethod
    def default_missing_section(cls, v):
        return {} if v is None else v

    @field_validator("updated_at")
    @classmethod
    def normalize_timestamp(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v)


class Student(BaseModel):
    """User directory entry."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    email: EmailStr
    name: str = Field(..., min_length=1)
    role: UserRole = UserRole.STUDENT
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Name cannot be empty or whitespace-only")
        return stripped


class JobPosting(BaseModel):
    """Snapshot of a posted job.

    Frozen so the matcher and composer can share one instance across worker
    threads for the duration of a broadcast.
    """

    id: str = Field(default_factory=lambda: uuid4().hex)
    title: str = Field(..., max_length=100)
    company: str = Field(..., max_length=100)
    type: str = Field(..., description="One of the JobType values")
    location: str = Field("", max_length=100)
    skills: List[str] = Field(default_factory=list)
    category: Optional[str] = None
    description: str = ""
    posted_by: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "title": "Software Engineer Intern",
                "company": "Acme",
                "type": "Internship",
                "location": "Remote, USA",
                "skills": ["Python", "SQL"],
            }
        },
    }

    @field_validator("title", "company")
    @classmethod
    def strip_required_text(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, v):
        value = v.value if isinstance(v, JobType) else v
        known = {job_type.value for job_type in JobType}
        if value not in known:
            raise ValueError(f"type must be one of {sorted(known)}, got: {v}")
        return value

    @field_validator("location", mode="before")
    @classmethod
    def default_location(cls, v):
        return "" if v is None else str(v).strip()

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, v):
        # Accept "Python, SQL" as well as ["Python", "SQL"].
        return _as_string_list(v)

    @field_validator("created_at")
    @classmethod
    def normalize_timestamp(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v)
