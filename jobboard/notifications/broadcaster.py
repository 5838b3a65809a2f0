"""Fan-out of a new job posting to every eligible student.

For one posting the broadcaster:
1. Loads active students from the user directory
2. Loads their settings from the preference store in one batch
3. Scores the posting against each student's preferences on a thread pool
4. Composes a draft for each student whose score clears the threshold
5. Stores all drafts with a single bulk insert

It is best-effort: collaborator failures, template failures and deadline
overruns are logged and reported as zero notifications sent. ``broadcast``
never raises, so creating a job can never fail because of it.

The optional deadline covers scoring. Collaborator calls are not interrupted;
a slow read or insert completes and the overrun is reported after it returns.
"""

import contextvars
import logging
import time
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

from jobboard.domain.models import JobPosting, Student, UserSettings
from jobboard.logging import get_logger
from jobboard.logging.context import log_context
from jobboard.matching.engine import PreferenceMatcher
from jobboard.matching.models import MatchResult

from .collaborators import NotificationStore, PreferenceStore, UserDirectory
from .composer import NotificationComposer
from .models import BroadcastResult, BroadcastTimeoutError, NotificationDraft

logger = get_logger(__name__, component="broadcaster")

SKIP_NO_SETTINGS = "no_settings"
SKIP_NOTIFICATIONS_DISABLED = "notifications_disabled"
SKIP_NO_PREFERENCES = "no_preferences"
SKIP_NO_MATCH = "no_match"


@dataclass
class StudentOutcome:
    """What happened for one student during a broadcast."""

    user_id: str
    draft: Optional[NotificationDraft] = None
    match: Optional[MatchResult] = None
    skip_reason: Optional[str] = None
    error: Optional[str] = None


class NotificationBroadcaster:
    """Evaluates a new posting against every student and stores the matches.

    Per-student evaluation shares no mutable state, so it runs concurrently;
    the only write is the final bulk insert.
    """

    def __init__(
        self,
        user_directory: UserDirectory,
        preference_store: PreferenceStore,
        notification_store: NotificationStore,
        matcher: Optional[PreferenceMatcher] = None,
        composer: Optional[NotificationComposer] = None,
        max_workers: int = 8,
        timeout_seconds: Optional[float] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize the broadcaster.

        Args:
            user_directory: Source of active students
            preference_store: Batched settings lookup
            notification_store: Bulk notification writer
            matcher: Scoring engine (default PreferenceMatcher())
            composer: Draft builder (default NotificationComposer())
            max_workers: Upper bound on scoring threads
            timeout_seconds: Scoring deadline; None disables it
            logger_instance: Logger override (module logger when None)
        """
        self.user_directory = user_directory
        self.preference_store = preference_store
        self.notification_store = notification_store
        self.matcher = matcher or PreferenceMatcher()
        self.composer = composer or NotificationComposer()
        self.max_workers = max(1, max_workers)
        self.timeout_seconds = timeout_seconds
        self.logger = logger_instance or logger

    def broadcast(self, job: JobPosting) -> BroadcastResult:
        """Notify every student whose preferences match ``job``.

        Args:
            job: The newly created posting (treated as read-only)

        Returns:
            BroadcastResult; ``notifications_sent`` is 0 when nothing matched
            or when any collaborator failed or the deadline passed
        """
        # Deadline runs from the start of the broadcast, reads included
        started = time.monotonic()
        deadline = started + self.timeout_seconds if self.timeout_seconds else None
        result = BroadcastResult(job_id=job.id)

        with log_context(job_id=job.id):
            self.logger.info(
                f"Broadcasting new posting: {job.title} at {job.company}",
                extra={"event": "broadcast.started", "job_title": job.title},
            )
            try:
                drafts = self._collect_drafts(job, result, deadline)
                if drafts:
                    self._check_deadline(deadline)
                    result.notifications_sent = self.notification_store.insert_many(drafts)
            except BroadcastTimeoutError as e:
                result.timed_out = True
                result.notifications_sent = 0
                result.error_message = str(e)
                self.logger.warning(
                    f"Broadcast for job {job.id} timed out; no notifications stored",
                    extra={"event": "broadcast.timed_out", "timeout_seconds": self.timeout_seconds},
                )
            except Exception as e:
                result.failed = True
                result.notifications_sent = 0
                result.error_message = str(e)
                self.logger.error(
                    f"Broadcast for job {job.id} failed: {e}",
                    extra={"event": "broadcast.failed", "error_type": type(e).__name__},
                    exc_info=True,
                )

            result.duration_seconds = time.monotonic() - started
            self.logger.info(
                f"Created {result.notifications_sent} notifications for {job.title}",
                extra={
                    "event": "broadcast.completed",
                    "students_checked": result.students_checked,
                    "matched": result.matched,
                    "notifications_sent": result.notifications_sent,
                    "skipped": result.total_skipped,
                    "errors": result.errors,
                    "duration_ms": int(result.duration_seconds * 1000),
                },
            )

        return result

    def _collect_drafts(
        self, job: JobPosting, result: BroadcastResult, deadline: Optional[float]
    ) -> List[NotificationDraft]:
        """Load students and settings, then score and compose.

        Args:
            job: Posting being broadcast
            result: Counters updated in place (checked, matched, skipped, errors)
            deadline: Monotonic deadline for scoring, or None

        Returns:
            Drafts for matching students, in directory order

        Raises:
            BroadcastTimeoutError: If scoring does not finish before the deadline
        """
        # Step 1: active students
        students = list(self.user_directory.list_active_students())
        result.students_checked = len(students)

        if not students:
            self.logger.info("No active students found", extra={"event": "broadcast.no_students"})
            return []

        # Step 2: one batched settings read for all of them
        settings_by_user = self.preference_store.get_preferences({s.id for s in students})
        self.logger.debug(
            f"Checking {len(students)} students for job matches",
            extra={"event": "broadcast.evaluating", "settings_found": len(settings_by_user)},
        )

        # Step 3: tally per-student outcomes
        drafts = []
        for outcome in self._evaluate_all(job, students, settings_by_user, deadline):
            if outcome.error is not None:
                result.errors += 1
            elif outcome.skip_reason is not None:
                result.record_skip(outcome.skip_reason)
            elif outcome.draft is not None:
                result.matched += 1
                drafts.append(outcome.draft)
        return drafts

    def _evaluate_all(
        self,
        job: JobPosting,
        students: Sequence[Student],
        settings_by_user: Mapping[str, UserSettings],
        deadline: Optional[float],
    ) -> List[StudentOutcome]:
        """Evaluate every student, preserving the directory order in the output.

        On timeout, queued evaluations are cancelled but threads already
        scoring are not joined. They finish in the background and their
        outcomes are discarded.

        Args:
            job: Posting being broadcast
            students: Active students from the directory
            settings_by_user: Settings keyed by user id (missing users absent)
            deadline: Monotonic deadline, or None to wait indefinitely

        Returns:
            One StudentOutcome per student

        Raises:
            BroadcastTimeoutError: If any evaluation is still pending at the deadline
        """
        workers = min(self.max_workers, len(students))
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="broadcast")
        try:
            futures = [
                executor.submit(
                    contextvars.copy_context().run,
                    self._evaluate_safely,
                    job,
                    student,
                    settings_by_user.get(student.id),
                )
                for student in students
            ]
            timeout = None if deadline is None else max(0.0, deadline - time.monotonic())
            _, pending = wait(futures, timeout=timeout)
            if pending:
                raise BroadcastTimeoutError(
                    f"{len(pending)} of {len(futures)} students not evaluated before the deadline"
                )
            return [future.result() for future in futures]
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def _evaluate_safely(
        self, job: JobPosting, student: Student, settings: Optional[UserSettings]
    ) -> StudentOutcome:
        """Run ``_evaluate`` and turn any exception into an error outcome."""
        with log_context(user_id=student.id):
            try:
                return self._evaluate(job, student, settings)
            except Exception as e:
                self.logger.error(
                    f"Error evaluating job for student {student.email}: {e}",
                    extra={"event": "broadcast.student.error", "error_type": type(e).__name__},
                    exc_info=True,
                )
                return StudentOutcome(user_id=student.id, error=str(e))

    def _evaluate(
        self, job: JobPosting, student: Student, settings: Optional[UserSettings]
    ) -> StudentOutcome:
        """Decide whether one student gets a notification.

        Args:
            job: Posting being broadcast
            student: Student being evaluated
            settings: Their stored settings, or None

        Returns:
            StudentOutcome with a draft, or with the reason it was skipped
        """
        if settings is None:
            return self._skip(student, SKIP_NO_SETTINGS)

        if not settings.notifications.notify_on_new_posting:
            return self._skip(student, SKIP_NOTIFICATIONS_DISABLED)

        # Empty title list switches matching off entirely
        prefs = settings.job_preferences
        if not prefs.preferred_job_titles:
            return self._skip(student, SKIP_NO_PREFERENCES)

        match = self.matcher.score(job, prefs)
        if not match.should_notify:
            return self._skip(student, SKIP_NO_MATCH, match)

        draft = self.composer.compose(job, match, student.id)
        self.logger.debug(
            f"Match found for {student.email}: {', '.join(match.match_reasons)}",
            extra={"event": "broadcast.student.matched", "match_score": match.match_score},
        )
        return StudentOutcome(user_id=student.id, draft=draft, match=match)

    def _skip(
        self, student: Student, reason: str, match: Optional[MatchResult] = None
    ) -> StudentOutcome:
        """Log and record a skipped student."""
        self.logger.debug(
            f"Skipping student {student.email}: {reason}",
            extra={"event": "broadcast.student.skipped", "reason": reason},
        )
        return StudentOutcome(user_id=student.id, match=match, skip_reason=reason)

    @staticmethod
    def _check_deadline(deadline: Optional[float]) -> None:
        """Raise BroadcastTimeoutError once ``deadline`` has passed."""
        if deadline is not None and time.monotonic() > deadline:
            raise BroadcastTimeoutError("Deadline passed before notifications were stored")
