"""
Domain exceptions - Semantic error types for member signup.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""

REQUIRED_FIELDS = ("firstName", "lastName", "email", "phone", "birthDate")


class SignupError(Exception):
    """Base class for signup domain errors."""

    pass


class MissingRequiredFields(SignupError):
    """One or more of the five required signup fields is absent."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(", ".join(missing))
        self.missing = missing
        self.required = list(REQUIRED_FIELDS)


class DuplicateEmail(SignupError):
    """The email address already belongs to a member."""

    def __init__(self, email: str) -> None:
        super().__init__(email)
        self.email = email


class SignupFailed(SignupError):
    """The signup transaction was rolled back for a non-duplicate reason."""

    pass


class MemberNotFound(SignupError):
    """No member exists with the requested identifier."""

    def __init__(self, member_id: int) -> None:
        super().__init__(str(member_id))
        self.member_id = member_id


class MemberQueryFailed(SignupError):
    """A read against the member store failed."""

    pass
