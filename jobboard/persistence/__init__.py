"""Persistence layer on SQLAlchemy.

Public API:
    - init_database(database_url) / get_session() / get_engine() / close_database()
    - UserRepository, SettingsRepository, JobRepository, NotificationRepository
    - SqlUserDirectory, SqlPreferenceStore, SqlNotificationStore: broadcaster
      collaborators that open a session per call
    - PersistenceError and subclasses

Example usage:
    >>> from jobboard.persistence import init_database, get_session, JobRepository
    >>> init_database("sqlite:///./data/job_board.db")
    >>> with get_session() as session:
    ...     job = JobRepository(session).get("abc123")
"""

from .database import close_database, get_engine, get_session, init_database
from .exceptions import (
    DatabaseConnectionError,
    DataIntegrityError,
    PersistenceError,
    RecordNotFoundError,
)
from .repositories import (
    JobRepository,
    NotificationRepository,
    SettingsRepository,
    UserRepository,
)
from .stores import SqlNotificationStore, SqlPreferenceStore, SqlUserDirectory

__all__ = [
    "init_database",
    "get_session",
    "close_database",
    "get_engine",
    "UserRepository",
    "SettingsRepository",
    "JobRepository",
    "NotificationRepository",
    "SqlUserDirectory",
    "SqlPreferenceStore",
    "SqlNotificationStore",
    "PersistenceError",
    "DatabaseConnectionError",
    "RecordNotFoundError",
    "DataIntegrityError",
]
