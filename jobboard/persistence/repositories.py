"""Repositories for users, settings, jobs and notifications.

Repositories take an open session, return domain models and translate
SQLAlchemy errors into persistence exceptions. They flush but never commit;
the caller's ``get_session()`` block owns the transaction.
"""

from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from jobboard.domain.models import JobPosting, Student, UserRole, UserSettings
from jobboard.logging import get_logger
from jobboard.notifications.models import Notification, NotificationDraft, NotificationType

from .exceptions import DataIntegrityError, PersistenceError, RecordNotFoundError
from .schema import JobModel, NotificationModel, UserModel, UserSettingsModel

logger = get_logger(__name__, component="repository")


class UserRepository:
    """Repository for the user directory."""

    def __init__(self, session: Session):
        self.session = session

    def add(self, student: Student) -> Student:
        """Insert a new user.

        Raises:
            DataIntegrityError: If the id or email already exists
            PersistenceError: If database error occurs
        """
        try:
            model = UserModel.from_domain(student)
            self.session.add(model)
            self.session.flush()
            return model.to_domain()
        except IntegrityError as e:
            logger.error(f"Integrity error adding user {student.email}: {e}", exc_info=True)
            raise DataIntegrityError(f"Failed to add user due to constraint violation: {e}") from e
        except SQLAlchemyError as e:
            logger.error(f"Error adding user {student.email}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to add user: {e}") from e

    def get(self, user_id: str) -> Optional[Student]:
        try:
            model = self.session.get(UserModel, user_id)
            return model.to_domain() if model else None
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving user {user_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve user: {e}") from e

    def list_active_students(self) -> List[Student]:
        """All users with role=student and is_active=True, oldest first."""
        try:
            stmt = (
                select(UserModel)
                .where(
                    UserModel.role == UserRole.STUDENT.value,
                    UserModel.is_active.is_(True),
                )
                .order_by(UserModel.created_at.asc(), UserModel.id.asc())
            )
            return [model.to_domain() for model in self.session.execute(stmt).scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Error listing active students: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list active students: {e}") from e


class SettingsRepository:
    """Repository for per-user preferences and notification channels."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: str) -> Optional[UserSettings]:
        try:
            model = self.session.get(UserSettingsModel, user_id)
            return model.to_domain() if model else None
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving settings for user {user_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve settings: {e}") from e

    def get_for_users(self, user_ids: Iterable[str]) -> Dict[str, UserSettings]:
        """Settings for many users in a single query.

        Users without a settings row are absent from the result.
        """
        ids = list(user_ids)
        if not ids:
            return {}
        try:
            stmt = select(UserSettingsModel).where(UserSettingsModel.user_id.in_(ids))
            models = self.session.execute(stmt).scalars().all()
            return {model.user_id: model.to_domain() for model in models}
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving settings for {len(ids)} users: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve settings: {e}") from e

    def upsert(self, settings: UserSettings) -> UserSettings:
        """Insert or replace the settings row for ``settings.user_id``.

        Raises:
            DataIntegrityError: If the user does not exist
            PersistenceError: If database error occurs
        """
        try:
            existing = self.session.get(UserSettingsModel, settings.user_id)
            if existing:
                existing.apply(settings)
                self.session.flush()
                return existing.to_domain()

            model = UserSettingsModel.from_domain(settings)
            self.session.add(model)
            self.session.flush()
            return model.to_domain()
        except IntegrityError as e:
            logger.error(
                f"Integrity error saving settings for user {settings.user_id}: {e}", exc_info=True
            )
            raise DataIntegrityError(
                f"Failed to save settings due to constraint violation: {e}"
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Error saving settings for user {settings.user_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to save settings: {e}") from e


class JobRepository:
    """Repository for posted jobs."""

    def __init__(self, session: Session):
        self.session = session

    def add(self, job: JobPosting) -> JobPosting:
        """Insert a new job, stamping ``created_at`` when it is missing."""
        try:
            model = JobModel.from_domain(job)
            self.session.add(model)
            self.session.flush()
            return model.to_domain()
        except IntegrityError as e:
            logger.error(f"Integrity error adding job {job.id}: {e}", exc_info=True)
            raise DataIntegrityError(f"Failed to add job due to constraint violation: {e}") from e
        except SQLAlchemyError as e:
            logger.error(f"Error adding job {job.id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to add job: {e}") from e

    def get(self, job_id: str) -> Optional[JobPosting]:
        try:
            model = self.session.get(JobModel, job_id)
            return model.to_domain() if model else None
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving job {job_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve job: {e}") from e

    def delete(self, job_id: str) -> None:
        """Delete a job.

        Raises:
            RecordNotFoundError: If the job does not exist
            PersistenceError: If database error occurs
        """
        try:
            result = self.session.execute(delete(JobModel).where(JobModel.id == job_id))
            self.session.flush()
            if result.rowcount == 0:
                raise RecordNotFoundError(f"Job with id {job_id} not found")
        except RecordNotFoundError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Error deleting job {job_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to delete job: {e}") from e


class NotificationRepository:
    """Repository for stored notifications."""

    def __init__(self, session: Session):
        self.session = session

    def insert_many(self, drafts: Sequence[NotificationDraft]) -> int:
        """Add every draft in one flush and return how many were added.

        Nothing is stored if any row violates a constraint, as long as the
        caller lets the session roll back.

        Raises:
            DataIntegrityError: If a draft references an unknown user
            PersistenceError: If database error occurs
        """
        if not drafts:
            return 0
        try:
            self.session.add_all([NotificationModel.from_draft(draft) for draft in drafts])
            self.session.flush()
            return len(drafts)
        except IntegrityError as e:
            logger.error(f"Integrity error inserting {len(drafts)} notifications: {e}", exc_info=True)
            raise DataIntegrityError(
                f"Failed to insert notifications due to constraint violation: {e}"
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Error inserting {len(drafts)} notifications: {e}", exc_info=True)
            raise PersistenceError(f"Failed to insert notifications: {e}") from e

    def list_for_user(
        self, user_id: str, unread_only: bool = False, limit: Optional[int] = None
    ) -> List[Notification]:
        """Notifications for one user, newest first."""
        try:
            stmt = select(NotificationModel).where(NotificationModel.user_id == user_id)
            if unread_only:
                stmt = stmt.where(NotificationModel.is_read.is_(False))
            stmt = stmt.order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            if limit is not None:
                stmt = stmt.limit(limit)
            return [model.to_domain() for model in self.session.execute(stmt).scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Error listing notifications for user {user_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list notifications: {e}") from e

    def count_for_user(
        self,
        user_id: str,
        is_read: Optional[bool] = None,
        types: Optional[Iterable[NotificationType]] = None,
    ) -> int:
        """Count a user's notifications, optionally filtered by read state and type."""
        try:
            stmt = select(func.count(NotificationModel.id)).where(
                NotificationModel.user_id == user_id
            )
            if is_read is not None:
                stmt = stmt.where(NotificationModel.is_read.is_(is_read))
            if types is not None:
                values = [getattr(t, "value", t) for t in types]
                stmt = stmt.where(NotificationModel.type.in_(values))
            return self.session.execute(stmt).scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"Error counting notifications for user {user_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to count notifications: {e}") from e

    def mark_read(self, notification_id: int) -> None:
        """Mark one notification as read.

        Raises:
            RecordNotFoundError: If the notification does not exist
        """
        try:
            result = self.session.execute(
                update(NotificationModel)
                .where(NotificationModel.id == notification_id)
                .values(is_read=True)
            )
            self.session.flush()
            if result.rowcount == 0:
                raise RecordNotFoundError(f"Notification with id {notification_id} not found")
        except RecordNotFoundError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Error marking notification {notification_id} read: {e}", exc_info=True)
            raise PersistenceError(f"Failed to mark notification read: {e}") from e

    def delete_for_job(self, job_id: str) -> int:
        """Delete every notification that points at ``job_id``; return the count."""
        try:
            result = self.session.execute(
                delete(NotificationModel).where(NotificationModel.job_id == job_id)
            )
            self.session.flush()
            return result.rowcount
        except SQLAlchemyError as e:
            logger.error(f"Error deleting notifications for job {job_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to delete notifications: {e}") from e
