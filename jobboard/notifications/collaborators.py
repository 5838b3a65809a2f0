"""Interfaces the broadcaster depends on.

The broadcaster only reads students and preferences and writes one batch of
notifications. SQL-backed implementations live in
``jobboard.persistence.stores``; tests pass simple fakes.
"""

from typing import Mapping, Protocol, Sequence, Set

from jobboard.domain.models import Student, UserSettings

from .models import NotificationDraft


class UserDirectory(Protocol):
    def list_active_students(self) -> Sequence[Student]:
        """All users with role=student and is_active=True."""
        ...


class PreferenceStore(Protocol):
    def get_preferences(self, user_ids: Set[str]) -> Mapping[str, UserSettings]:
        """Settings for the given users; users without a record are absent."""
        ...


class NotificationStore(Protocol):
    def insert_many(self, drafts: Sequence[NotificationDraft]) -> int:
        """Persist every draft in one operation; return how many were stored.

        Must be all-or-nothing: on failure nothing is stored and an exception
        is raised.
        """
        ...
