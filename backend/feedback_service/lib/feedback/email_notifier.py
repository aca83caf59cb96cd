"""EmailNotifier: Send an alert email for each new feedback entry.

Builds a plaintext + HTML message with the submitter's name, optional email
and feedback text, and sends it over SMTP. There is no retry: a failed send
raises MailError and the caller reports it.
"""

import html
import logging
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid
from typing import Any, Dict, Optional

from feedback_service.config import MailSettings, get_mail_settings
from feedback_service.lib.exceptions import MailError
from feedback_service.lib.feedback.models import FeedbackEntry

logger = logging.getLogger(__name__)

SMTP_SSL_PORT = 465


class EmailNotifier:
    """Sends feedback alert emails via the configured SMTP transport."""

    def __init__(self, settings: Optional[MailSettings] = None):
        """Initialize EmailNotifier with SMTP configuration.

        Args:
            settings: Mail settings; read from the environment when omitted
        """
        self.settings = settings or get_mail_settings()

        if self.configured:
            logger.info(
                'EmailNotifier initialized (host=%s, port=%s, alert_to=%s)',
                self.settings.host, self.settings.port, self.settings.alert_to,
            )
        else:
            logger.warning('SMTP not configured - feedback alerts will not be emailed')

    @property
    def configured(self) -> bool:
        """True iff SMTP host, user and password are all present."""
        return self.settings.configured

    def send_feedback_notification(self, entry: FeedbackEntry) -> Dict[str, Any]:
        """Send the alert email for a feedback entry.

        Args:
            entry: The newly stored feedback entry

        Returns:
            Delivery info: ``messageId``, ``accepted`` and ``rejected`` recipients

        Raises:
            MailError: If SMTP is not configured or the send fails
        """
        if not self.configured:
            raise MailError("SMTP not configured")

        try:
            # header values containing CR/LF are rejected by EmailMessage with ValueError
            message = self._build_email_message(entry)
            refused = self._send_email(message)
        except (smtplib.SMTPException, OSError, ValueError) as e:
            logger.error('Failed to send feedback notification for %s: %s', entry.id, e)
            raise MailError("Failed to send email", details={"error": str(e)}) from e

        recipient = self.settings.alert_to
        rejected = sorted(refused)
        accepted = [recipient] if recipient not in refused else []

        logger.info('Sent feedback notification for %s to %s', entry.id, recipient)
        return {
            "messageId": message["Message-ID"],
            "accepted": accepted,
            "rejected": rejected,
        }

    def _build_email_message(self, entry: FeedbackEntry) -> EmailMessage:
        """Build the plaintext + HTML alert message.

        Args:
            entry: Feedback entry to describe

        Returns:
            EmailMessage ready to send
        """
        message = EmailMessage()
        message["Subject"] = f"New feedback from {entry.name}"
        message["From"] = self.settings.user
        message["To"] = self.settings.alert_to
        message["Message-ID"] = make_msgid(domain=self._message_id_domain())
        if entry.email:
            message["Reply-To"] = entry.email

        sender_line = f"{entry.name} ({entry.email})" if entry.email else entry.name
        message.set_content(f"{sender_line}\n\n{entry.feedback}")
        message.add_alternative(self._render_html(entry), subtype="html")
        return message

    def _message_id_domain(self) -> str:
        # make_msgid() without a domain resolves the local FQDN on every call
        user = self.settings.user or ""
        if "@" in user:
            return user.rsplit("@", 1)[1]
        return self.settings.host or "localhost"

    @staticmethod
    def _render_html(entry: FeedbackEntry) -> str:
        parts = [f"<p><strong>Name:</strong> {html.escape(entry.name)}</p>"]
        if entry.email:
            parts.append(f"<p><strong>Email:</strong> {html.escape(entry.email)}</p>")
        parts.append("<p><strong>Feedback:</strong></p>")
        parts.append(f"<p>{html.escape(entry.feedback)}</p>")
        return "\n".join(parts)

    def _send_email(self, message: EmailMessage) -> Dict[str, Any]:
        """Send email via SMTP (implicit TLS on port 465, STARTTLS otherwise when offered).

        Args:
            message: EmailMessage to send

        Returns:
            Mapping of refused recipients to their SMTP error

        Raises:
            smtplib.SMTPException: On SMTP errors
            OSError: On connection errors
        """
        settings = self.settings
        if settings.port == SMTP_SSL_PORT:
            with smtplib.SMTP_SSL(settings.host, settings.port) as server:
                server.login(settings.user, settings.password)
                return dict(server.send_message(message) or {})

        with smtplib.SMTP(settings.host, settings.port) as server:
            server.ehlo()
            if server.has_extn("starttls"):
                server.starttls()
                server.ehlo()
            server.login(settings.user, settings.password)
            return dict(server.send_message(message) or {})
