"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Wire names are camelCase; Python attributes are snake_case.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.domain.ports import MemberRecord, MembershipType, MemberSignup


class CamelModel(BaseModel):
    """Base model exposing camelCase aliases while accepting field names too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SignupRequest(CamelModel):
    """
    Request model for member signup.

    Required fields are optional here on purpose: their absence is reported
    by the signup service as a 400 listing the required fields rather than
    as a schema validation error.
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
    membership_type: MembershipType | None = None
    ministry: list[str] = Field(default_factory=list, description="Ministry interest names")
    attendance_preference: str | None = None
    baptized: str | None = None
    salvation: str | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None
    prayer: str | None = Field(None, description="Free-text prayer request")
    how_did_you_hear: str | None = None

    @field_validator("birth_date", "membership_type", mode="before")
    @classmethod
    def blank_as_missing(cls, value: object) -> object:
        """HTML forms submit untouched inputs as empty strings."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("ministry", mode="before")
    @classmethod
    def null_ministry_as_empty(cls, value: object) -> object:
        return [] if value is None else value

    def to_signup(self) -> MemberSignup:
        """Convert to the domain payload."""
        return MemberSignup(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            phone=self.phone,
            birth_date=self.birth_date,
            address=self.address,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
            membership_type=self.membership_type or MembershipType.MEMBER,
            attendance_preference=self.attendance_preference,
            baptized=self.baptized,
            salvation=self.salvation,
            emergency_contact_name=self.emergency_contact_name,
            emergency_contact_phone=self.emergency_contact_phone,
            prayer_request=self.prayer,
            how_did_you_hear=self.how_did_you_hear,
            ministries=tuple(self.ministry),
        )


class SignupResponse(CamelModel):
    """Response model for successful signup."""

    success: bool = True
    message: str
    member_id: int


class MemberResponse(CamelModel):
    """A member with ministry names joined by commas."""

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

    @classmethod
    def from_record(cls, record: MemberRecord) -> "MemberResponse":
        return cls.model_validate(record, from_attributes=True)


class MembersResponse(CamelModel):
    """Response model for the member listing."""

    success: bool = True
    count: int
    members: list[MemberResponse]


class MemberDetailResponse(CamelModel):
    """Response model for a single member."""

    success: bool = True
    member: MemberResponse


class ValidationResponse(CamelModel):
    """Field-level validation outcome for a signup form."""

    valid: bool
    errors: dict[str, str]


class HealthResponse(BaseModel):
    status: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
    message: str | None = None
    required: list[str] | None = None
