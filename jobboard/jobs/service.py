"""Job creation and deletion.

Creating a job stores it first and then hands it to the broadcaster exactly
once. The broadcast never raises, so a stored job is never rolled back
because notifying students went wrong.
"""

from dataclasses import dataclass

from jobboard.domain.models import JobPosting
from jobboard.logging import get_logger
from jobboard.logging.context import log_context
from jobboard.notifications.broadcaster import NotificationBroadcaster
from jobboard.notifications.models import BroadcastResult
from jobboard.persistence.database import get_session
from jobboard.persistence.exceptions import RecordNotFoundError
from jobboard.persistence.repositories import JobRepository, NotificationRepository

logger = get_logger(__name__, component="jobs")


@dataclass
class JobCreationResult:
    job: JobPosting
    broadcast: BroadcastResult


class JobService:
    """Creates and deletes job postings."""

    def __init__(self, broadcaster: NotificationBroadcaster):
        self.broadcaster = broadcaster

    def create_job(self, posting: JobPosting) -> JobCreationResult:
        """Store ``posting`` and broadcast it to matching students.

        Raises:
            PersistenceError: If the job itself cannot be stored (no broadcast happens)
        """
        with get_session() as session:
            job = JobRepository(session).add(posting)

        with log_context(job_id=job.id):
            logger.info(
                f"Job created: {job.title} at {job.company}",
                extra={"event": "job.created", "job_type": job.type},
            )

        broadcast = self.broadcaster.broadcast(job)
        return JobCreationResult(job=job, broadcast=broadcast)

    def delete_job(self, job_id: str) -> int:
        """Delete a job and every notification pointing at it.

        Returns:
            Number of notifications removed

        Raises:
            RecordNotFoundError: If the job does not exist
        """
        with get_session() as session:
            jobs = JobRepository(session)
            if jobs.get(job_id) is None:
                raise RecordNotFoundError(f"Job with id {job_id} not found")
            removed = NotificationRepository(session).delete_for_job(job_id)
            jobs.delete(job_id)

        with log_context(job_id=job_id):
            logger.info(
                f"Job deleted along with {removed} notifications",
                extra={"event": "job.deleted", "notifications_removed": removed},
            )
        return removed
