"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Signup payload factories
- Member record factories
"""

from collections.abc import Callable
from datetime import date, datetime, timezone

import pytest

from src.domain.ports import MemberRecord, MemberSignup


@pytest.fixture
def make_signup() -> Callable[..., MemberSignup]:
    """Factory for a complete signup payload with overridable fields."""

    def factory(**overrides: object) -> MemberSignup:
        values: dict[str, object] = {
            "first_name": "John",
            "last_name": "Doe",
            "email": "john@example.com",
            "phone": "555-123-4567",
            "birth_date": date(1985, 5, 15),
            "ministries": ("Worship Team", "Youth Ministry"),
        }
        values.update(overrides)
        return MemberSignup(**values)

    return factory


@pytest.fixture
def make_record() -> Callable[..., MemberRecord]:
    """Factory for a persisted member record."""

    def factory(**overrides: object) -> MemberRecord:
        created = datetime(2024, 1, 7, 10, 30, tzinfo=timezone.utc)
        values: dict[str, object] = {
            "id": 1,
            "first_name": "John",
            "last_name": "Doe",
            "email": "john@example.com",
            "phone": "555-123-4567",
            "birth_date": date(1985, 5, 15),
            "address": "123 Main St",
            "city": "Houston",
            "state": "TX",
            "zip_code": "77001",
            "membership_type": "member",
            "attendance_preference": "sunday-morning",
            "baptized": "yes",
            "salvation": "yes",
            "emergency_contact_name": None,
            "emergency_contact_phone": None,
            "prayer_request": None,
            "how_did_you_hear": "friend",
            "created_at": created,
            "updated_at": created,
            "ministries": "Worship Team,Youth Ministry",
        }
        values.update(overrides)
        return MemberRecord(**values)

    return factory
