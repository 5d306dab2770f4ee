"""
Unit tests for API routes.

Tests endpoint responses with mocked dependencies.
"""

from datetime import date
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_signup_service
from src.api.main import app
from src.domain.exceptions import (
    DuplicateEmail,
    MemberNotFound,
    MemberQueryFailed,
    MissingRequiredFields,
    SignupFailed,
)
from src.domain.ports import MembershipType, NotificationOutcome, SignupResult
from src.domain.signup import SignupService

SIGNUP_BODY = {
    "firstName": "John",
    "lastName": "Doe",
    "email": "john@example.com",
    "phone": "555-123-4567",
    "birthDate": "1985-05-15",
    "ministry": ["Worship Team", "Youth Ministry"],
}


@pytest.fixture
def service() -> MagicMock:
    mock_service = MagicMock(spec=SignupService)
    mock_service.signup.return_value = SignupResult(member_id=1)
    mock_service.notify.return_value = NotificationOutcome(True, True)
    return mock_service


@pytest.fixture
def client(service: MagicMock) -> TestClient:
    """Test client with the signup service overridden; no lifespan, no database."""
    app.dependency_overrides[get_signup_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealthEndpoint:
    """Tests for GET /api/health."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "OK", "message": "Church signup API is running"}


class TestSignupEndpoint:
    """Tests for POST /api/signup."""

    def test_success_returns_201(self, client: TestClient, service: MagicMock) -> None:
        response = client.post("/api/signup", json=SIGNUP_BODY)

        assert response.status_code == 201
        assert response.json() == {
            "success": True,
            "message": "Signup successful",
            "memberId": 1,
        }

    def test_payload_mapped_to_domain(self, client: TestClient, service: MagicMock) -> None:
        body = dict(
            SIGNUP_BODY,
            zipCode="77001",
            membershipType="volunteer",
            prayer="Pray for my family",
            howDidYouHear="friend",
        )

        client.post("/api/signup", json=body)

        signup = service.signup.call_args[0][0]
        assert signup.first_name == "John"
        assert signup.birth_date == date(1985, 5, 15)
        assert signup.zip_code == "77001"
        assert signup.membership_type is MembershipType.VOLUNTEER
        assert signup.prayer_request == "Pray for my family"
        assert signup.how_did_you_hear == "friend"
        assert signup.ministries == ("Worship Team", "Youth Ministry")

    def test_membership_type_defaults_to_member(self, client: TestClient, service: MagicMock) -> None:
        client.post("/api/signup", json=dict(SIGNUP_BODY, membershipType=""))

        assert service.signup.call_args[0][0].membership_type is MembershipType.MEMBER

    def test_notifications_run_after_success(self, client: TestClient, service: MagicMock) -> None:
        """The notification step is scheduled with the committed payload and id."""
        client.post("/api/signup", json=SIGNUP_BODY)

        payload = service.signup.call_args[0][0]
        service.notify.assert_called_once_with(payload, 1)

    def test_notification_outcome_does_not_change_response(
        self, client: TestClient, service: MagicMock
    ) -> None:
        service.notify.return_value = NotificationOutcome(False, False)

        response = client.post("/api/signup", json=SIGNUP_BODY)

        assert response.status_code == 201
        assert response.json()["success"] is True

    def test_missing_fields_returns_400(self, client: TestClient, service: MagicMock) -> None:
        service.signup.side_effect = MissingRequiredFields(["email"])

        response = client.post("/api/signup", json={"firstName": "John"})

        assert response.status_code == 400
        assert response.json() == {
            "error": "Missing required fields",
            "required": ["firstName", "lastName", "email", "phone", "birthDate"],
        }
        service.notify.assert_not_called()

    def test_blank_birth_date_reaches_service_as_missing(
        self, client: TestClient, service: MagicMock
    ) -> None:
        """An empty date input is treated as absent, not as a malformed body."""
        client.post("/api/signup", json=dict(SIGNUP_BODY, birthDate=""))

        assert service.signup.call_args[0][0].birth_date is None

    def test_duplicate_email_returns_409(self, client: TestClient, service: MagicMock) -> None:
        service.signup.side_effect = DuplicateEmail("john@example.com")

        response = client.post("/api/signup", json=SIGNUP_BODY)

        assert response.status_code == 409
        assert response.json() == {
            "error": "Email already registered",
            "message": "This email is already in our system",
        }
        service.notify.assert_not_called()

    def test_signup_failed_returns_500(self, client: TestClient, service: MagicMock) -> None:
        service.signup.side_effect = SignupFailed("rolled back")

        response = client.post("/api/signup", json=SIGNUP_BODY)

        assert response.status_code == 500
        assert response.json() == {
            "error": "Signup failed",
            "message": "An error occurred during signup. Please try again.",
        }

    def test_invalid_membership_type_returns_400(self, client: TestClient, service: MagicMock) -> None:
        response = client.post("/api/signup", json=dict(SIGNUP_BODY, membershipType="premium"))

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"
        service.signup.assert_not_called()

    def test_malformed_json_returns_400(self, client: TestClient) -> None:
        response = client.post(
            "/api/signup", content="{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"


class TestValidateEndpoint:
    """Tests for POST /api/signup/validate."""

    def test_valid_form(self, client: TestClient) -> None:
        response = client.post("/api/signup/validate", json=SIGNUP_BODY)

        assert response.status_code == 200
        assert response.json() == {"valid": True, "errors": {}}

    def test_invalid_form(self, client: TestClient) -> None:
        response = client.post(
            "/api/signup/validate", json=dict(SIGNUP_BODY, email="not-an-email", phone="123")
        )

        assert response.json() == {
            "valid": False,
            "errors": {
                "email": "Please enter a valid email address",
                "phone": "Please enter a valid phone number",
            },
        }

    def test_does_not_touch_service(self, client: TestClient, service: MagicMock) -> None:
        client.post("/api/signup/validate", json={})
        assert service.method_calls == []


class TestMembersEndpoints:
    """Tests for GET /api/members and GET /api/members/{id}."""

    def test_list_members(self, client: TestClient, service: MagicMock, make_record) -> None:
        service.list_members.return_value = [make_record(id=2), make_record(id=1)]

        response = client.get("/api/members")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 2
        assert [m["id"] for m in body["members"]] == [2, 1]

    def test_member_fields_are_camel_case(
        self, client: TestClient, service: MagicMock, make_record
    ) -> None:
        service.list_members.return_value = [make_record()]

        member = client.get("/api/members").json()["members"][0]

        assert member["firstName"] == "John"
        assert member["zipCode"] == "77001"
        assert member["birthDate"] == "1985-05-15"
        assert member["ministries"] == "Worship Team,Youth Ministry"
        assert "first_name" not in member

    def test_list_members_empty(self, client: TestClient, service: MagicMock) -> None:
        service.list_members.return_value = []

        assert client.get("/api/members").json() == {"success": True, "count": 0, "members": []}

    def test_list_members_failure(self, client: TestClient, service: MagicMock) -> None:
        service.list_members.side_effect = MemberQueryFailed("down")

        response = client.get("/api/members")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch members"}

    def test_get_member(self, client: TestClient, service: MagicMock, make_record) -> None:
        service.get_member.return_value = make_record(id=1, ministries=None)

        response = client.get("/api/members/1")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["member"]["id"] == 1
        assert body["member"]["ministries"] is None
        service.get_member.assert_called_once_with(1)

    def test_get_member_not_found(self, client: TestClient, service: MagicMock) -> None:
        service.get_member.side_effect = MemberNotFound(99)

        response = client.get("/api/members/99")

        assert response.status_code == 404
        assert response.json() == {"error": "Member not found"}

    def test_get_member_failure(self, client: TestClient, service: MagicMock) -> None:
        service.get_member.side_effect = MemberQueryFailed("down")

        response = client.get("/api/members/1")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch member"}

    def test_non_integer_id_returns_400(self, client: TestClient) -> None:
        response = client.get("/api/members/abc")

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"
