"""FeedbackService: Orchestrate feedback submission and listing.

Submission order is fixed: persist first, then notify. Persistence is
best-effort (a StorageError is logged and the submission still succeeds);
a mail failure propagates to the caller and never rolls back the stored entry.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from feedback_service.lib.exceptions import StorageError, ValidationError
from feedback_service.lib.feedback.email_notifier import EmailNotifier
from feedback_service.lib.feedback.models import FeedbackEntry
from feedback_service.lib.feedback.store import FeedbackStore

logger = logging.getLogger(__name__)


@dataclass
class SubmissionResult:
    """Outcome of a feedback submission."""

    entry: FeedbackEntry
    stored: bool
    emailed: bool
    info: Optional[Dict[str, Any]] = None


class FeedbackService:
    """Coordinates the feedback store and the email notifier."""

    def __init__(self, store: FeedbackStore, notifier: EmailNotifier):
        """Initialize FeedbackService.

        Args:
            store: Flat-file feedback store
            notifier: Alert email notifier
        """
        self.store = store
        self.notifier = notifier

    def submit(
        self,
        name: Optional[str],
        feedback: Optional[str],
        email: Optional[str] = None,
    ) -> SubmissionResult:
        """Store a feedback entry and send the alert email when mail is configured.

        Args:
            name: Submitter name (required)
            feedback: Feedback text (required)
            email: Submitter email (optional, stored as "" when absent)

        Returns:
            SubmissionResult describing what happened

        Raises:
            ValidationError: If name or feedback is missing
            MailError: If mail is configured and the send fails
        """
        if not name or not feedback:
            raise ValidationError("name and feedback required")

        entry = FeedbackEntry.create(name=name, feedback=feedback, email=email or "")

        stored = True
        try:
            self.store.append(entry)
            logger.info('Stored feedback %s from %s', entry.id, entry.name)
        except StorageError as e:
            stored = False
            logger.error('Failed to save feedback %s: %s', entry.id, e.details.get("error", e))

        if not self.notifier.configured:
            logger.warning('SMTP not configured - skipping email for feedback %s', entry.id)
            return SubmissionResult(entry=entry, stored=stored, emailed=False)

        info = self.notifier.send_feedback_notification(entry)
        return SubmissionResult(entry=entry, stored=stored, emailed=True, info=info)

    def list_feedbacks(self) -> List[FeedbackEntry]:
        """Return stored entries, most recently submitted first.

        Raises:
            StorageError: If the store cannot be read
        """
        return list(reversed(self.store.read()))
