"""New-posting notifications.

- NotificationComposer: match result -> NotificationDraft
- NotificationBroadcaster: evaluates a posting against every student and
  stores the resulting batch
- UserDirectory / PreferenceStore / NotificationStore: collaborator interfaces
"""

from .broadcaster import NotificationBroadcaster
from .collaborators import NotificationStore, PreferenceStore, UserDirectory
from .composer import NotificationComposer
from .models import (
    BroadcastResult,
    BroadcastTimeoutError,
    Notification,
    NotificationDraft,
    NotificationError,
    NotificationMetadata,
    NotificationTemplateError,
    NotificationType,
)

__all__ = [
    "NotificationBroadcaster",
    "NotificationComposer",
    "UserDirectory",
    "PreferenceStore",
    "NotificationStore",
    "BroadcastResult",
    "Notification",
    "NotificationDraft",
    "NotificationMetadata",
    "NotificationType",
    "NotificationError",
    "NotificationTemplateError",
    "BroadcastTimeoutError",
]
