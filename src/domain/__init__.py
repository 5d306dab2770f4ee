"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for the church member
signup system. It defines its own port interfaces for infrastructure
abstraction, ensuring true hexagonal architecture decoupling.
"""

from .exceptions import (
    DuplicateEmail,
    MemberNotFound,
    MemberQueryFailed,
    MissingRequiredFields,
    SignupError,
    SignupFailed,
)
from .ports import (
    EmailSender,
    MemberRecord,
    MemberRepository,
    MembershipType,
    MemberSignup,
    NotificationOutcome,
    SignupResult,
)
from .signup import SignupService
from .validation import FormVariant, SignupForm, clear_field_error, validate_signup_form

__all__ = [
    "DuplicateEmail",
    "EmailSender",
    "FormVariant",
    "MemberNotFound",
    "MemberQueryFailed",
    "MemberRecord",
    "MemberRepository",
    "MemberSignup",
    "MembershipType",
    "MissingRequiredFields",
    "NotificationOutcome",
    "SignupError",
    "SignupFailed",
    "SignupForm",
    "SignupResult",
    "SignupService",
    "clear_field_error",
    "validate_signup_form",
]
