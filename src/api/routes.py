"""
API routes - Signup and member endpoints.

This module defines the HTTP endpoints:
- POST /api/signup           - Atomic member signup
- POST /api/signup/validate  - Field-level form validation
- GET  /api/members          - List members with ministries
- GET  /api/members/{id}     - Fetch one member

Routes are plain ``def`` functions: FastAPI runs them in its threadpool,
so the blocking psycopg pool never stalls the event loop and each request
holds its own pooled connection.
"""

from typing import Any

from fastapi import APIRouter, BackgroundTasks, Body, Depends, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_signup_service
from src.api.models import (
    ErrorResponse,
    MemberDetailResponse,
    MemberResponse,
    MembersResponse,
    SignupRequest,
    SignupResponse,
    ValidationResponse,
)
from src.domain.exceptions import (
    DuplicateEmail,
    MemberNotFound,
    MemberQueryFailed,
    MissingRequiredFields,
    SignupFailed,
)
from src.domain.signup import SignupService
from src.domain.validation import validate_signup_form

router = APIRouter(tags=["members"])


def error_response(status_code: int, error: str, **extra: Any) -> JSONResponse:
    body = ErrorResponse(error=error, **extra)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing required fields"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
        500: {"model": ErrorResponse, "description": "Signup failed"},
    },
    summary="Sign up a new member",
    description="Create a member and their ministry interests in one transaction. "
    "A welcome email and a staff notification are sent afterwards on a best-effort basis.",
)
def signup(
    request_data: SignupRequest,
    background_tasks: BackgroundTasks,
    service: SignupService = Depends(get_signup_service),
) -> SignupResponse | JSONResponse:
    """
    Sign up a new member.

    - **firstName, lastName, email, phone, birthDate**: required
    - **ministry**: list of ministry interest names

    Returns the generated member id on success.
    """
    payload = request_data.to_signup()

    try:
        result = service.signup(payload)
    except MissingRequiredFields as e:
        return error_response(
            status.HTTP_400_BAD_REQUEST, "Missing required fields", required=e.required
        )
    except DuplicateEmail:
        return error_response(
            status.HTTP_409_CONFLICT,
            "Email already registered",
            message="This email is already in our system",
        )
    except SignupFailed:
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Signup failed",
            message="An error occurred during signup. Please try again.",
        )

    # Runs after the response is sent; its outcome is not reported
    background_tasks.add_task(service.notify, payload, result.member_id)

    return SignupResponse(message="Signup successful", member_id=result.member_id)


@router.post(
    "/signup/validate",
    response_model=ValidationResponse,
    summary="Validate a signup form",
    description="Apply the signup form rules without storing anything.",
)
def validate_signup(form: dict[str, Any] = Body(...)) -> ValidationResponse:
    errors = validate_signup_form(form)
    return ValidationResponse(valid=not errors, errors=errors)


@router.get(
    "/members",
    response_model=MembersResponse,
    responses={500: {"model": ErrorResponse, "description": "Failed to fetch members"}},
    summary="List members",
)
def list_members(
    service: SignupService = Depends(get_signup_service),
) -> MembersResponse | JSONResponse:
    """List every member with their ministries, most recent signup first."""
    try:
        records = service.list_members()
    except MemberQueryFailed:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch members")

    members = [MemberResponse.from_record(record) for record in records]
    return MembersResponse(count=len(members), members=members)


@router.get(
    "/members/{member_id}",
    response_model=MemberDetailResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Member not found"},
        500: {"model": ErrorResponse, "description": "Failed to fetch member"},
    },
    summary="Get a member",
)
def get_member(
    member_id: int,
    service: SignupService = Depends(get_signup_service),
) -> MemberDetailResponse | JSONResponse:
    try:
        record = service.get_member(member_id)
    except MemberNotFound:
        return error_response(status.HTTP_404_NOT_FOUND, "Member not found")
    except MemberQueryFailed:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch member")

    return MemberDetailResponse(member=MemberResponse.from_record(record))
