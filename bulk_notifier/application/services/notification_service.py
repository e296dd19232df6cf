"""
Application service for bulk notifications.

Entry point for callers (HTTP handlers, the CLI). It depends on the
per-channel dispatchers, not on concrete transports.
"""

from collections.abc import Sequence

import structlog

from ...domain.errors import NotificationError
from ...domain.models import BatchSummary, Recipient
from .bulk_dispatcher import BulkDispatcher

logger = structlog.get_logger()

TEST_SUBJECT_PREFIX = "[TEST] "
DEFAULT_RECIPIENT_NAME = "Customer"


class NotificationService:
    """Sends bulk email and SMS through the channel dispatchers."""

    def __init__(self, email_dispatcher: BulkDispatcher, sms_dispatcher: BulkDispatcher) -> None:
        self._email = email_dispatcher
        self._sms = sms_dispatcher

    async def send_bulk_email(
        self,
        recipients: Sequence[Recipient],
        subject: str,
        message: str,
    ) -> BatchSummary:
        logger.info("Sending bulk email", recipients=len(recipients))
        return await self._email.dispatch_bulk(recipients, message, subject)

    async def send_bulk_sms(self, recipients: Sequence[Recipient], message: str) -> BatchSummary:
        logger.info("Sending bulk SMS", recipients=len(recipients))
        return await self._sms.dispatch_bulk(recipients, message)

    async def send_test_email(self, recipient: Recipient, subject: str, message: str) -> BatchSummary:
        """Send a single email to an operator with a [TEST] subject."""
        return await self._email.dispatch_bulk([recipient], message, f"{TEST_SUBJECT_PREFIX}{subject}")

    async def send_single_sms(self, phone: str, message: str, name: str = DEFAULT_RECIPIENT_NAME) -> bool:
        """
        Send one SMS, e.g. an order notification.

        Returns:
            True if the message was reported as sent
        """
        try:
            summary = await self._sms.dispatch_bulk([Recipient(name=name, address=phone)], message)
        except (NotificationError, ValueError) as e:
            logger.error("Single SMS rejected", error=str(e))
            return False
        return summary.successful > 0
