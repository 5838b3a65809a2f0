"""Student preference settings: read, update, test and summarise."""

from .service import NotificationStats, PreferenceService, PreferenceValidationError

__all__ = ["PreferenceService", "PreferenceValidationError", "NotificationStats"]
