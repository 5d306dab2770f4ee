"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure, plus the value types that cross them. Adapters
implement these protocols.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Protocol


class MembershipType(str, Enum):
    """Membership category recorded for each member."""

    VISITOR = "visitor"
    MEMBER = "member"
    VOLUNTEER = "volunteer"


@dataclass(frozen=True)
class MemberSignup:
    """
    Signup payload for one registrant.

    Required fields are typed optional so that an incomplete payload can
    be represented and rejected by the signup service before any store
    interaction.
    """

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    birth_date: date | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    membership_type: MembershipType = MembershipType.MEMBER
    attendance_preference: str | None = None
    baptized: str | None = None
    salvation: str | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None
    prayer_request: str | None = None
    how_did_you_hear: str | None = None
    ministries: tuple[str, ...] = field(default_factory=tuple)

    def missing_fields(self) -> list[str]:
        """Return the wire names of required fields that are absent or blank."""
        required = (
            ("firstName", self.first_name),
            ("lastName", self.last_name),
            ("email", self.email),
            ("phone", self.phone),
            ("birthDate", self.birth_date),
        )
        missing = []
        for name, value in required:
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)
        return missing


@dataclass(frozen=True)
class MemberRecord:
    """A persisted member with its ministry names joined in insertion order."""

    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    birth_date: date
    address: str | None
    city: str | None
    state: str | None
    zip_code: str | None
    membership_type: str
    attendance_preference: str | None
    baptized: str | None
    salvation: str | None
    emergency_contact_name: str | None
    emergency_contact_phone: str | None
    prayer_request: str | None
    how_did_you_hear: str | None
    created_at: datetime
    updated_at: datetime
    ministries: str | None


@dataclass(frozen=True)
class SignupResult:
    """Outcome of a committed signup transaction."""

    member_id: int


@dataclass(frozen=True)
class NotificationOutcome:
    """
    Best-effort delivery report for post-signup notifications.

    Callers may inspect or discard it; it never affects the signup result.
    """

    confirmation_sent: bool
    staff_notified: bool


class MemberRepository(Protocol):
    """Port interface for member persistence."""

    def create_member(self, signup: MemberSignup) -> int:
        """
        Atomically insert a member and its ministry interests.

        Member row and ministry rows are written in one transaction;
        on any failure nothing is persisted.

        Args:
            signup: Payload with all required fields present

        Returns:
            Generated member identifier

        Raises:
            DuplicateEmail: The email uniqueness constraint was violated
            SignupFailed: Any other store failure (including timeouts)
        """
        ...

    def list_members(self) -> list[MemberRecord]:
        """
        Return all members, most recently created first.

        Raises:
            MemberQueryFailed: The store could not be read
        """
        ...

    def get_member(self, member_id: int) -> MemberRecord:
        """
        Return one member by identifier.

        Raises:
            MemberNotFound: No member has this identifier
            MemberQueryFailed: The store could not be read
        """
        ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    def send_confirmation(self, email: str, first_name: str, last_name: str) -> None:
        """
        Send the welcome message to a new member.

        Args:
            email: Recipient email address
            first_name: Member first name used in the greeting
            last_name: Member last name
        """
        ...

    def send_staff_notification(self, signup: MemberSignup) -> None:
        """
        Tell church staff that a new member signed up.

        Args:
            signup: The committed signup payload
        """
        ...
