"""
Integration tests for Beta API endpoints.
"""

import pytest
from django.urls import reverse
from django.utils import timezone

from accounts.infrastructure.models import BetaSignup
from licenses.infrastructure.models import License

SIGNUP = {
    "name": "Ada Lovelace",
    "email": "Ada@Example.com",
    "channel_identifier": "AdaPlays",
    "content_type": "gaming",
    "message": "Hello!",
}


@pytest.mark.django_db
@pytest.mark.integration
class TestBetaSignupAPI:
    """Integration tests for joining the beta."""

    def test_signup(self, api_client):
        response = api_client.post(reverse("beta-signup"), SIGNUP, format="json")

        assert response.status_code == 201
        assert response.json() == {"success": True}
        stored = BetaSignup.objects.get()
        assert stored.email == "ada@example.com"
        assert stored.status == "pending"
        assert stored.license_key is None

    def test_duplicate_email(self, api_client):
        api_client.post(reverse("beta-signup"), SIGNUP, format="json")
        response = api_client.post(
            reverse("beta-signup"), {**SIGNUP, "email": "ADA@example.com"}, format="json"
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "DUPLICATE_SIGNUP"
        assert BetaSignup.objects.count() == 1

    def test_missing_field(self, api_client, db):
        payload = {key: value for key, value in SIGNUP.items() if key != "channel_identifier"}
        response = api_client.post(reverse("beta-signup"), payload, format="json")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_SIGNUP"

    def test_invalid_email(self, api_client, db):
        response = api_client.post(
            reverse("beta-signup"), {**SIGNUP, "email": "not-an-email"}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid email address."
        assert BetaSignup.objects.count() == 0


@pytest.mark.django_db
@pytest.mark.integration
class TestApproveBetaSignupAPI:
    """Integration tests for approving a signup."""

    @pytest.fixture
    def pending_signup(self, db):
        return BetaSignup.objects.create(
            name="Ada Lovelace",
            email="ada@example.com",
            channel_identifier="AdaPlays",
            created_at=timezone.now(),
        )

    def approve(self, api_client, signup_id, payload=None):
        return api_client.post(
            reverse("approve-beta-signup", kwargs={"signup_id": signup_id}),
            payload or {},
            format="json",
        )

    def test_admin_approves(self, api_client, admin_user, pending_signup):
        api_client.force_authenticate(user=admin_user)

        response = self.approve(api_client, pending_signup.pk)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "approved"
        assert data["approved_at"] is not None

        license = License.objects.get(key=data["license_key"])
        assert license.owner_email == "ada@example.com"
        assert license.expires_at is not None
        pending_signup.refresh_from_db()
        assert pending_signup.license_key == data["license_key"]

    def test_explicit_expiry(self, api_client, admin_user, pending_signup):
        api_client.force_authenticate(user=admin_user)

        data = self.approve(
            api_client, pending_signup.pk, {"expires_at": "2031-06-01T00:00:00Z"}
        ).json()

        license = License.objects.get(key=data["license_key"])
        assert license.expires_at.year == 2031

    def test_non_admin_is_forbidden(self, api_client, owner_user, pending_signup):
        api_client.force_authenticate(user=owner_user)

        response = self.approve(api_client, pending_signup.pk)

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "ADMIN_REQUIRED"
        assert License.objects.count() == 0

    def test_unknown_signup(self, api_client, admin_user):
        api_client.force_authenticate(user=admin_user)

        response = self.approve(api_client, 9999)

        assert response.status_code == 404
        assert License.objects.count() == 0


@pytest.mark.django_db
@pytest.mark.integration
class TestTestersAPI:
    """Integration tests for the public tester roster."""

    def test_roster(self, api_client, owner_user):
        now = timezone.now()
        BetaSignup.objects.create(
            name="Grace Hopper",
            email="grace@example.com",
            channel_identifier="",
            status="approved",
            created_at=now,
        )
        BetaSignup.objects.create(
            name="Pending Person",
            email="pending@example.com",
            channel_identifier="PendingTV",
            created_at=now,
        )

        response = api_client.get(reverse("beta-testers"))

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert data["testers"] == [
            {"channel": "OwnerChannel", "display": "OwnerChannel"},
            {"channel": None, "display": "Grace"},
        ]
        assert "grace@example.com" not in response.content.decode()
