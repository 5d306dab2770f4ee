"""
Signup domain service - Member signup transaction contract.

This module contains the business logic for church member signup.

Per invocation the transaction moves through:

    Idle -> TransactionOpen -> Committed   (terminal success)
                            -> RolledBack  (terminal failure)

- Required fields are checked first; an incomplete payload raises
  MissingRequiredFields and never reaches the store.
- The repository owns the unit of work: member insert, batched ministry
  insert, commit, or rollback of everything.
- A uniqueness violation on email surfaces as DuplicateEmail; every other
  store failure surfaces as SignupFailed.

Notifications are a second, independent step. The caller runs notify()
after signup() has returned; its outcome is informational only and can
never undo or alter the committed signup.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .exceptions import DuplicateEmail, MissingRequiredFields, SignupFailed
from .ports import (
    EmailSender,
    MemberRecord,
    MemberRepository,
    MemberSignup,
    NotificationOutcome,
    SignupResult,
)

logger = logging.getLogger(__name__)


@dataclass
class SignupService:
    """
    Domain service for member signup and lookup.

    Orchestrates the signup flow: required-field check, atomic
    persistence, and best-effort notification.
    """

    repository: MemberRepository
    email_sender: EmailSender

    def signup(self, signup: MemberSignup) -> SignupResult:
        """
        Persist a member and its ministry interests atomically.

        Args:
            signup: Signup payload

        Returns:
            SignupResult carrying the generated member identifier

        Raises:
            MissingRequiredFields: A required field is absent (no store access)
            DuplicateEmail: The email is already registered
            SignupFailed: Any other failure; nothing was persisted
        """
        missing = signup.missing_fields()
        if missing:
            raise MissingRequiredFields(missing)

        try:
            member_id = self.repository.create_member(signup)
        except (DuplicateEmail, SignupFailed):
            raise
        except Exception as e:
            logger.exception("Unexpected error during signup")
            raise SignupFailed("Signup failed") from e

        logger.info("Member %s signed up with %d ministries", member_id, len(signup.ministries))
        return SignupResult(member_id=member_id)

    def notify(self, signup: MemberSignup, member_id: int) -> NotificationOutcome:
        """
        Send the welcome email and the staff notification.

        Each message is attempted independently. Failures are logged and
        reported in the outcome, never raised.
        """
        confirmation_sent = self._attempt(
            "confirmation",
            member_id,
            lambda: self.email_sender.send_confirmation(
                signup.email, signup.first_name, signup.last_name
            ),
        )
        staff_notified = self._attempt(
            "staff notification",
            member_id,
            lambda: self.email_sender.send_staff_notification(signup),
        )
        return NotificationOutcome(
            confirmation_sent=confirmation_sent,
            staff_notified=staff_notified,
        )

    def list_members(self) -> list[MemberRecord]:
        return self.repository.list_members()

    def get_member(self, member_id: int) -> MemberRecord:
        return self.repository.get_member(member_id)

    def _attempt(self, kind: str, member_id: int, send: Callable[[], None]) -> bool:
        try:
            send()
        except Exception:
            logger.exception("Sending %s for member %s failed", kind, member_id)
            return False
        return True
