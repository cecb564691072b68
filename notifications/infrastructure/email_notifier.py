"""
Email implementation of the Notifier port.

Uses Django's mail framework, so the transport is whatever EMAIL_BACKEND
is configured (SMTP in production, locmem in tests).
"""
import logging
from typing import Optional

from asgiref.sync import sync_to_async
from django.conf import settings
from django.core.mail import send_mail

from core.domain.exceptions import NotificationError
from notifications.ports.notifier import Notifier

logger = logging.getLogger(__name__)


class EmailNotifier(Notifier):
    """Sends notifications through django.core.mail."""

    def __init__(self, from_email: Optional[str] = None):
        self.from_email = from_email or settings.DEFAULT_FROM_EMAIL

    async def send(self, to: str, subject: str, body: str) -> None:
        # Runs on a worker thread; the request thread never blocks on SMTP
        try:
            await sync_to_async(send_mail, thread_sensitive=False)(
                subject,
                body,
                self.from_email,
                [to],
                fail_silently=False,
            )
        except Exception as e:
            raise NotificationError(f"Failed to send email to {to}: {e}") from e

        logger.info("Email sent", extra={"recipient": to, "subject": subject})
