"""
Console mailer adapter - Implements ConfirmationMailer protocol.

This module provides a console-based implementation of the domain's
mailer port, logging the rendered confirmation instead of sending it.
Selected with ``backend = console`` in the [EMail] section.
"""

import logging

from confreg.domain.confirmation import render_confirmation
from confreg.domain.registration import Registration

logger = logging.getLogger(__name__)


class ConsoleConfirmationMailer:
    """
    Implements ConfirmationMailer protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For development - never fails.
    """

    def __init__(self, sender: str) -> None:
        self._sender = sender

    def send_confirmation(self, registration: Registration) -> None:
        """
        Log the confirmation mail at INFO level (simulates delivery).

        Args:
            registration: Persisted registration
        """
        message = render_confirmation(registration, self._sender)
        logger.info(
            "[CONFIRMATION] From: %s To: %s Subject: %s\n%s",
            message.sender,
            message.recipient,
            message.subject,
            message.body,
        )
