"""
Signup form validation - Pure field-level rules.

The rule set maps a candidate form (wire field names to string/boolean
values) to a mapping of field name -> human readable problem. An empty
mapping means the form is acceptable to submit.

Two variants exist:
- CHURCH: the rules enforced for the church signup API (canonical)
- MEMBERSHIP: the generic membership form, which adds password,
  terms-of-service and minimum age rules

Every field is checked independently of the others. Nothing here performs
I/O, so the rules are safe to run on every keystroke.
"""

import re
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields, replace
from datetime import date
from enum import Enum

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_SEPARATORS = re.compile(r"[\s\-()]")
PHONE_DIGITS = re.compile(r"[0-9]{10,}")

MIN_PASSWORD_LENGTH = 8
MINIMUM_AGE = 18


class FormVariant(Enum):
    """Which rule set applies to a form."""

    CHURCH = "church"
    MEMBERSHIP = "membership"


@dataclass(frozen=True)
class SignupForm:
    """
    Immutable form state as collected from the browser.

    Field updates produce a new form via with_field(); the original is
    never modified.
    """

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    birth_date: str = ""
    password: str = ""
    confirm_password: str = ""
    agree_to_terms: bool = False

    def with_field(self, name: str, value: str | bool) -> "SignupForm":
        """Return a copy with one field (given by its wire name) replaced."""
        attribute = _WIRE_TO_ATTRIBUTE.get(name)
        if attribute is None:
            raise KeyError(f"Unknown form field: {name}")
        return replace(self, **{attribute: value})

    def as_mapping(self) -> dict[str, str | bool]:
        """Return the form keyed by wire field names."""
        return {_ATTRIBUTE_TO_WIRE[key]: value for key, value in asdict(self).items()}


def _to_wire(attribute: str) -> str:
    head, *rest = attribute.split("_")
    return head + "".join(part.capitalize() for part in rest)


_ATTRIBUTE_TO_WIRE = {f.name: _to_wire(f.name) for f in fields(SignupForm)}
_WIRE_TO_ATTRIBUTE = {wire: attribute for attribute, wire in _ATTRIBUTE_TO_WIRE.items()}


def validate_signup_form(
    form: Mapping[str, object],
    variant: FormVariant = FormVariant.CHURCH,
    today: date | None = None,
) -> dict[str, str]:
    """
    Validate a signup form.

    Args:
        form: Field values keyed by wire name (firstName, email, ...)
        variant: Which rule set to apply
        today: Reference date for the age rule (defaults to date.today())

    Returns:
        Field name -> problem description; empty when the form is valid
    """
    errors: dict[str, str] = {}

    if not _text(form, "firstName").strip():
        errors["firstName"] = "First name is required"
    if not _text(form, "lastName").strip():
        errors["lastName"] = "Last name is required"

    email = _text(form, "email")
    if not email:
        errors["email"] = "Email is required"
    elif not is_valid_email(email):
        errors["email"] = "Please enter a valid email address"

    phone = _text(form, "phone")
    if not phone:
        errors["phone"] = "Phone number is required"
    elif not is_valid_phone(phone):
        errors["phone"] = "Please enter a valid phone number"

    birth_date_error = _check_birth_date(form.get("birthDate"), variant, today or date.today())
    if birth_date_error:
        errors["birthDate"] = birth_date_error

    if variant is FormVariant.MEMBERSHIP:
        password = _text(form, "password")
        if not password:
            errors["password"] = "Password is required"
        elif len(password) < MIN_PASSWORD_LENGTH:
            errors["password"] = "Password must be at least 8 characters long"

        if password != _text(form, "confirmPassword"):
            errors["confirmPassword"] = "Passwords do not match"

        if form.get("agreeToTerms") is not True:
            errors["agreeToTerms"] = "You must agree to the terms and conditions"

    return errors


def clear_field_error(errors: Mapping[str, str], field: str) -> dict[str, str]:
    """Return a new error mapping without the entry for the field being edited."""
    return {name: message for name, message in errors.items() if name != field}


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_phone(phone: str) -> bool:
    """At least 10 digits once separators and a leading + are removed."""
    candidate = phone.strip()
    if candidate.startswith("+"):
        candidate = candidate[1:]
    candidate = PHONE_SEPARATORS.sub("", candidate)
    return PHONE_DIGITS.fullmatch(candidate) is not None


def age_on(birth_date: date, today: date) -> int:
    """Age in whole years on the given day."""
    had_birthday = (today.month, today.day) >= (birth_date.month, birth_date.day)
    return today.year - birth_date.year - (0 if had_birthday else 1)


def _check_birth_date(value: object, variant: FormVariant, today: date) -> str | None:
    if not value:
        return "Birth date is required"
    if variant is FormVariant.CHURCH:
        return None

    if isinstance(value, date):
        birth_date = value
    else:
        try:
            birth_date = date.fromisoformat(str(value))
        except ValueError:
            return "Please enter a valid birth date"

    if age_on(birth_date, today) < MINIMUM_AGE:
        return "You must be at least 18 years old to join"
    return None


def _text(form: Mapping[str, object], name: str) -> str:
    value = form.get(name)
    if value is None or isinstance(value, bool):
        return ""
    return str(value)
