"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_NOTIFICATION_TITLE = "🎯 New Job Match!"
DEFAULT_ACTION_TEXT = "View Job"
DEFAULT_MESSAGE_TEMPLATE = (
    "A new {{ job_type }} position at {{ company }} matches your preferences!"
    "{% if highlights %} ({{ highlights | join(', ') }}){% endif %}"
)


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class NotificationConfig(BaseModel):
    """Text used when composing new-posting notifications.

    ``message_template`` is a Jinja2 template rendered with ``job_type``,
    ``company``, ``job_title`` and ``highlights`` (the leading match reasons
    shown in parentheses).
    """

    title: str = Field(DEFAULT_NOTIFICATION_TITLE, min_length=1, max_length=100)
    action_text: str = Field(DEFAULT_ACTION_TEXT, min_length=1, max_length=50)
    message_template: str = Field(DEFAULT_MESSAGE_TEMPLATE, min_length=1)

    @field_validator("title", "action_text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Strip surrounding whitespace; reject blank values."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped


class BroadcastConfig(BaseModel):
    """Fan-out settings for the notification broadcaster."""

    max_workers: int = Field(8, ge=1, le=64, description="Thread pool size for scoring")
    timeout_seconds: Optional[float] = Field(
        None, gt=0, description="Deadline for the scoring phase of one broadcast (None = no deadline)"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(LogFormat.KEY_VALUE, description="json or key-value")

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object. Every section has defaults."""

    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    broadcast: BroadcastConfig = Field(default_factory=BroadcastConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
