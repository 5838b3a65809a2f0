"""Notification records, broadcast results and notification exceptions."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from jobboard.utils.timestamps import ensure_utc

TITLE_MAX_LENGTH = 100
MESSAGE_MAX_LENGTH = 500
ACTION_TEXT_MAX_LENGTH = 50


class NotificationError(Exception):
    """Base exception for notification errors."""

    pass


class NotificationTemplateError(NotificationError):
    """Raised when a notification message template cannot be rendered."""

    pass


class BroadcastTimeoutError(NotificationError):
    """Raised internally when a broadcast runs past its deadline."""

    pass


class NotificationType(str, Enum):
    """Kinds of notification a user can receive."""

    JOB_MATCH = "job_match"
    NEW_POSTING = "new_posting"
    APPLICATION_UPDATE = "application_update"
    SYSTEM = "system"
    PROFILE_UPDATE = "profile_update"
    DEADLINE_REMINDER = "deadline_reminder"
    APPLICATION_STATUS = "application_status"


JOB_MATCH_TYPES = (NotificationType.JOB_MATCH, NotificationType.NEW_POSTING)


class NotificationMetadata(BaseModel):
    """Match details stored alongside a new-posting notification."""

    match_score: int = Field(..., ge=0)
    match_reasons: List[str] = Field(default_factory=list)
    job_title: str
    company: str


class NotificationDraft(BaseModel):
    """A composed notification that has not been stored yet."""

    user_id: str
    type: NotificationType = NotificationType.NEW_POSTING
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    message: str = Field(..., min_length=1, max_length=MESSAGE_MAX_LENGTH)
    job_id: Optional[str] = None
    is_important: bool = False
    action_url: Optional[str] = Field(None, pattern=r"^https?://.+")
    action_text: Optional[str] = Field(None, max_length=ACTION_TEXT_MAX_LENGTH)
    metadata: Optional[NotificationMetadata] = None

    model_config = {"use_enum_values": True}


class Notification(NotificationDraft):
    """A stored notification."""

    id: int
    is_read: bool = False
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        return ensure_utc(v)


@dataclass
class BroadcastResult:
    """Outcome of broadcasting one job posting to all eligible students.

    Attributes:
        job_id: Posting that was broadcast
        students_checked: Active students returned by the user directory
        matched: Students whose score cleared the threshold
        notifications_sent: Notifications actually persisted (0 on any failure)
        skipped: Count of students skipped per reason
            (no_settings, notifications_disabled, no_preferences, no_match)
        errors: Students whose evaluation raised
        timed_out: Whether the deadline expired before scoring finished
        failed: Whether a collaborator read or write failed
        error_message: Description of the failure, if any
        duration_seconds: Wall time spent in the broadcast
    """

    job_id: str
    students_checked: int = 0
    matched: int = 0
    notifications_sent: int = 0
    skipped: Dict[str, int] = field(default_factory=dict)
    errors: int = 0
    timed_out: bool = False
    failed: bool = False
    error_message: Optional[str] = None
    duration_seconds: float = 0.0

    def record_skip(self, reason: str) -> None:
        self.skipped[reason] = self.skipped.get(reason, 0) + 1

    @property
    def total_skipped(self) -> int:
        return sum(self.skipped.values())
