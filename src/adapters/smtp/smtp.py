"""
SMTP email sender adapter - Implements EmailSender protocol.

Delivers the member welcome message and the staff notification through
an authenticated SMTP relay (STARTTLS). Errors are raised to the caller;
the signup service decides that they are non-fatal.
"""

import logging
import smtplib
from email.message import EmailMessage
from html import escape

from src.domain.ports import MemberSignup

logger = logging.getLogger(__name__)

WELCOME_SUBJECT = "Welcome to Our Church Family!"


class SmtpEmailSender:
    """
    Implements EmailSender protocol via smtplib.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        staff_email: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.staff_email = staff_email or username
        self.timeout = timeout

    def send_confirmation(self, email: str, first_name: str, last_name: str) -> None:
        text_body = (
            f"Welcome, {first_name}!\n\n"
            "Thank you for joining our church family. We're excited to have you!\n\n"
            "What's next?\n"
            "- A member of our welcome team will reach out within the week.\n"
            "- Join us this Sunday and stop by the welcome center.\n"
            "- Watch your inbox for ministry updates.\n"
        )
        html_body = (
            '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
            f'<h2 style="color: #7c3aed;">Welcome, {escape(first_name)}!</h2>'
            "<p>Thank you for joining our church family. We're excited to have you!</p>"
            "</div>"
        )
        message = self._build_message(email, WELCOME_SUBJECT, text_body, html_body)
        self._deliver(message)
        logger.info("Welcome email sent")

    def send_staff_notification(self, signup: MemberSignup) -> None:
        if not self.staff_email:
            logger.warning("Staff notification skipped, no staff address configured")
            return

        subject = f"New Member Signup: {signup.first_name} {signup.last_name}"
        details = [
            ("Name", f"{signup.first_name} {signup.last_name}"),
            ("Email", signup.email),
            ("Phone", signup.phone),
            ("Membership Type", signup.membership_type.value),
        ]
        text_body = "A new member has signed up.\n\n" + "\n".join(
            f"{label}: {value}" for label, value in details
        )
        html_body = (
            "<h2>New Member Signup</h2><ul>"
            + "".join(f"<li><strong>{label}:</strong> {escape(str(value))}</li>" for label, value in details)
            + "</ul>"
        )
        message = self._build_message(self.staff_email, subject, text_body, html_body)
        self._deliver(message)
        logger.info("Staff notified of new signup")

    def _build_message(self, to: str, subject: str, text_body: str, html_body: str) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.username
        message["To"] = to
        message.set_content(text_body)
        message.add_alternative(html_body, subtype="html")
        return message

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            smtp.ehlo()
            smtp.starttls()
            smtp.ehlo()
            smtp.login(self.username, self.password)
            smtp.send_message(message)
