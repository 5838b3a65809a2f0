"""Turns positive match results into notification drafts."""

from typing import Dict, Optional

from jinja2 import Environment, StrictUndefined, Template, TemplateError

from jobboard.config.environment import DEFAULT_FRONTEND_URL
from jobboard.config.models import NotificationConfig
from jobboard.domain.models import JobPosting
from jobboard.matching.models import MATCH_THRESHOLD, MatchResult
from jobboard.utils.text import truncate_text

from .models import (
    MESSAGE_MAX_LENGTH,
    NotificationDraft,
    NotificationMetadata,
    NotificationTemplateError,
    NotificationType,
)

# Number of match reasons quoted in the message.
HIGHLIGHT_COUNT = 2


class NotificationComposer:
    """Builds the notification a student sees for a matching job.

    Pure: the same job and match always compose the same draft. The message
    is rendered from a Jinja2 template so the wording can be changed in
    config without touching code.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_FRONTEND_URL,
        config: Optional[NotificationConfig] = None,
    ):
        """Initialize the composer.

        Args:
            base_url: Frontend base URL used for the "View Job" link
            config: Notification wording (defaults when None)
        """
        self.base_url = (base_url or DEFAULT_FRONTEND_URL).rstrip("/")
        self.config = config or NotificationConfig()
        self._env = Environment(undefined=StrictUndefined, autoescape=False)
        self._message_template: Template = self._compile(self.config.message_template)

    def compose(self, job: JobPosting, match: MatchResult, user_id: str) -> NotificationDraft:
        """Compose the new-posting notification for one student.

        Args:
            job: The posting that matched
            match: The student's match result (score and reasons are reused)
            user_id: Recipient

        Returns:
            NotificationDraft ready for bulk insertion

        Raises:
            NotificationTemplateError: If the configured template fails to render
        """
        return NotificationDraft(
            user_id=user_id,
            type=NotificationType.NEW_POSTING,
            title=self.config.title,
            message=self.build_message(job, match),
            job_id=job.id,
            is_important=match.match_score >= MATCH_THRESHOLD,
            action_url=self.action_url(job),
            action_text=self.config.action_text,
            metadata=NotificationMetadata(
                match_score=match.match_score,
                match_reasons=list(match.match_reasons),
                job_title=job.title,
                company=job.company,
            ),
        )

    def build_message(self, job: JobPosting, match: MatchResult) -> str:
        """Render the message body.

        With the default template:
        ``A new Internship position at Acme matches your preferences! (r1, r2)``
        where the parenthesised part appears only when there are at least two
        reasons and never quotes more than the first two.
        """
        reasons = match.match_reasons
        highlights = reasons[:HIGHLIGHT_COUNT] if len(reasons) > 1 else []
        context: Dict[str, object] = {
            "job_type": job.type,
            "company": job.company,
            "job_title": job.title,
            "highlights": highlights,
        }
        try:
            message = self._message_template.render(context)
        except TemplateError as e:
            raise NotificationTemplateError(f"Message template rendering failed: {e}") from e
        return truncate_text(message, MESSAGE_MAX_LENGTH)

    def action_url(self, job: JobPosting) -> str:
        return f"{self.base_url}/jobs/{job.id}"

    def _compile(self, source: str) -> Template:
        try:
            return self._env.from_string(source)
        except TemplateError as e:
            raise NotificationTemplateError(f"Invalid message template: {e}") from e
