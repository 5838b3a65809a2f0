"""SQL-backed broadcaster collaborators.

Each call opens its own ``get_session()`` scope, so the final bulk insert
commits or rolls back as a unit independently of the reads before it.
"""

from typing import Dict, List, Sequence, Set

from jobboard.domain.models import Student, UserSettings
from jobboard.notifications.models import NotificationDraft

from .database import get_session
from .repositories import NotificationRepository, SettingsRepository, UserRepository


class SqlUserDirectory:
    def list_active_students(self) -> List[Student]:
        with get_session() as session:
            return UserRepository(session).list_active_students()


class SqlPreferenceStore:
    def get_preferences(self, user_ids: Set[str]) -> Dict[str, UserSettings]:
        with get_session() as session:
            return SettingsRepository(session).get_for_users(user_ids)


class SqlNotificationStore:
    def insert_many(self, drafts: Sequence[NotificationDraft]) -> int:
        with get_session() as session:
            return NotificationRepository(session).insert_many(drafts)
