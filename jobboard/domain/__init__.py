"""Domain models."""

from .models import (
    JobPosting,
    JobType,
    NotificationChannels,
    RemotePreference,
    SalaryRange,
    Student,
    UserPreferences,
    UserRole,
    UserSettings,
)

__all__ = [
    "JobPosting",
    "JobType",
    "NotificationChannels",
    "RemotePreference",
    "SalaryRange",
    "Student",
    "UserPreferences",
    "UserRole",
    "UserSettings",
]
