"""Database schema definition and ORM models.

ORM models mirror the domain models and convert with ``to_domain`` /
``from_domain``. Timestamps are stored as ISO 8601 strings, preference lists
as JSON.
"""

from sqlalchemy import JSON, Boolean, Column, Float, ForeignKey, Index, Integer, String, Text, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from jobboard.domain.models import JobPosting, Student, UserSettings
from jobboard.logging import get_logger
from jobboard.notifications.models import Notification, NotificationDraft
from jobboard.utils.timestamps import format_timestamp, parse_timestamp, utc_now

logger = get_logger(__name__, component="database")

Base = declarative_base()


class UserModel(Base):
    """ORM model for users table."""

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="student")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(String(50), nullable=False)

    __table_args__ = (Index("idx_users_role_active", "role", "is_active"),)

    def to_domain(self) -> Student:
        return Student(
            id=self.id,
            email=self.email,
            name=self.name,
            role=self.role,
            is_active=self.is_active,
        )

    @classmethod
    def from_domain(cls, student: Student) -> "UserModel":
        return cls(
            id=student.id,
            email=student.email,
            name=student.name,
            role=getattr(student.role, "value", student.role),
            is_active=student.is_active,
            created_at=format_timestamp(utc_now()),
        )


class UserSettingsModel(Base):
    """ORM model for user_settings table.

    One row per user. Preference lists are JSON arrays; older rows may hold
    NULL in any of them, which the domain model reads as "no filter".
    """

    __tablename__ = "user_settings"

    user_id = Column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, nullable=False
    )

    # Job preferences
    preferred_job_types = Column(JSON, nullable=True)
    preferred_job_titles = Column(JSON, nullable=True)
    preferred_locations = Column(JSON, nullable=True)
    skill_preferences = Column(JSON, nullable=True)
    remote_preference = Column(String(20), nullable=True)
    salary_min = Column(Float, nullable=True)
    salary_max = Column(Float, nullable=True)
    salary_currency = Column(String(3), nullable=True)

    # Channel flags
    email_new_postings = Column(Boolean, nullable=True, default=True)
    push_new_postings = Column(Boolean, nullable=True, default=True)

    updated_at = Column(String(50), nullable=True)

    def to_domain(self) -> UserSettings:
        return UserSettings(
            user_id=self.user_id,
            job_preferences={
                "preferred_job_types": self.preferred_job_types,
                "preferred_job_titles": self.preferred_job_titles,
                "preferred_locations": self.preferred_locations,
                "skill_preferences": self.skill_preferences,
                "remote_preference": self.remote_preference,
                "salary_range": {
                    "min": self.salary_min,
                    "max": self.salary_max,
                    "currency": self.salary_currency or "USD",
                },
            },
            notifications={
                "email_new_postings": self.email_new_postings,
                "push_new_postings": self.push_new_postings,
            },
            updated_at=parse_timestamp(self.updated_at),
        )

    def apply(self, settings: UserSettings) -> None:
        """Copy every field of ``settings`` onto this row."""
        prefs = settings.job_preferences
        self.preferred_job_types = [getattr(t, "value", t) for t in prefs.preferred_job_types]
        self.preferred_job_titles = list(prefs.preferred_job_titles)
        self.preferred_locations = list(prefs.preferred_locations)
        self.skill_preferences = list(prefs.skill_preferences)
        self.remote_preference = getattr(prefs.remote_preference, "value", prefs.remote_preference)
        self.salary_min = prefs.salary_range.min
        self.salary_max = prefs.salary_range.max
        self.salary_currency = prefs.salary_range.currency
        self.email_new_postings = settings.notifications.email_new_postings
        self.push_new_postings = settings.notifications.push_new_postings
        self.updated_at = format_timestamp(settings.updated_at or utc_now())

    @classmethod
    def from_domain(cls, settings: UserSettings) -> "UserSettingsModel":
        model = cls(user_id=settings.user_id)
        model.apply(settings)
        return model


class JobModel(Base):
    """ORM model for jobs table."""

    __tablename__ = "jobs"

    id = Column(String(32), primary_key=True, nullable=False)
    title = Column(String(100), nullable=False)
    company = Column(String(100), nullable=False)
    type = Column(String(20), nullable=False)
    location = Column(String(100), nullable=False, default="")
    skills = Column(JSON, nullable=False, default=list)
    category = Column(String(100), nullable=True)
    description = Column(Text, nullable=False, default="")
    posted_by = Column(String(32), nullable=True)
    created_at = Column(String(50), nullable=False)

    __table_args__ = (Index("idx_jobs_created_at", "created_at"),)

    def to_domain(self) -> JobPosting:
        return JobPosting(
            id=self.id,
            title=self.title,
            company=self.company,
            type=self.type,
            location=self.location,
            skills=self.skills,
            category=self.category,
            description=self.description or "",
            posted_by=self.posted_by,
            created_at=parse_timestamp(self.created_at),
        )

    @classmethod
    def from_domain(cls, job: JobPosting) -> "JobModel":
        return cls(
            id=job.id,
            title=job.title,
            company=job.company,
            type=job.type,
            location=job.location,
            skills=list(job.skills),
            category=job.category,
            description=job.description,
            posted_by=job.posted_by,
            created_at=format_timestamp(job.created_at or utc_now()),
        )


class NotificationModel(Base):
    """ORM model for notifications table.

    ``job_id`` carries no foreign key; notifications for a job are removed
    explicitly when the job is deleted.
    """

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    type = Column(String(30), nullable=False)
    title = Column(String(100), nullable=False)
    message = Column(String(500), nullable=False)
    job_id = Column(String(32), nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    is_important = Column(Boolean, nullable=False, default=False)
    action_url = Column(Text, nullable=True)
    action_text = Column(String(50), nullable=True)
    # "metadata" is reserved on declarative classes
    extra_data = Column("metadata", JSON, nullable=True)
    created_at = Column(String(50), nullable=False)

    __table_args__ = (
        Index("idx_notifications_user_read", "user_id", "is_read"),
        Index("idx_notifications_user_created", "user_id", "created_at"),
        Index("idx_notifications_type", "type"),
        Index("idx_notifications_job", "job_id"),
    )

    def to_domain(self) -> Notification:
        return Notification(
            id=self.id,
            user_id=self.user_id,
            type=self.type,
            title=self.title,
            message=self.message,
            job_id=self.job_id,
            is_read=self.is_read,
            is_important=self.is_important,
            action_url=self.action_url,
            action_text=self.action_text,
            metadata=self.extra_data,
            created_at=parse_timestamp(self.created_at),
        )

    @classmethod
    def from_draft(cls, draft: NotificationDraft) -> "NotificationModel":
        return cls(
            user_id=draft.user_id,
            type=getattr(draft.type, "value", draft.type),
            title=draft.title,
            message=draft.message,
            job_id=draft.job_id,
            is_read=False,
            is_important=draft.is_important,
            action_url=draft.action_url,
            action_text=draft.action_text,
            extra_data=draft.metadata.model_dump() if draft.metadata else None,
            created_at=format_timestamp(utc_now()),
        )


def create_schema(engine: Engine) -> None:
    """Create all tables and indexes that don't exist yet. Idempotent."""
    logger.info("Creating database schema if not exists")

    try:
        Base.metadata.create_all(engine, checkfirst=True)
        tables = inspect(engine).get_table_names()
        logger.info(f"Database schema ready. Tables: {', '.join(tables)}")
    except Exception as e:
        logger.error(f"Failed to create database schema: {e}", exc_info=True)
        raise
