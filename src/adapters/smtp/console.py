"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging notifications to stdout for development.
"""

import logging

from src.domain.ports import MemberSignup

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Used when SMTP credentials are not configured.
    """

    def send_confirmation(self, email: str, first_name: str, last_name: str) -> None:
        """
        Log the welcome message (simulates email delivery).

        Args:
            email: Recipient email address
            first_name: Member first name
            last_name: Member last name
        """
        logger.info("[WELCOME] Email: %s Name: %s %s", email, first_name, last_name)

    def send_staff_notification(self, signup: MemberSignup) -> None:
        """Log the staff notification (simulates email delivery)."""
        logger.info(
            "[NEW MEMBER] Name: %s %s Email: %s Phone: %s Type: %s",
            signup.first_name,
            signup.last_name,
            signup.email,
            signup.phone,
            signup.membership_type.value,
        )
