"""
Integration tests for Admin API endpoints.
"""

from unittest.mock import patch

import pytest
from django.contrib.auth import get_user_model
from django.urls import reverse
from django.utils import timezone

from accounts.infrastructure.models import BetaSignup, Profile, TokenUsage
from conftest import create_license, create_user
from core.domain.exceptions import UpstreamUnavailableError
from licenses.infrastructure.models import License


@pytest.fixture
def target_user(db):
    """A user with licenses, usage and a beta signup."""
    user = create_user("target@example.com", channel_identifier="TargetTV")
    create_license("VIRI-TGTA-TGTA-TGTA-TGTA", owner_email="target@example.com")
    create_license(
        "VIRI-TGTB-TGTB-TGTB-TGTB", owner_email="target@example.com", status="inactive"
    )
    TokenUsage.objects.create(license_key="VIRI-TGTA-TGTA-TGTA-TGTA", tokens_used=10)
    TokenUsage.objects.create(license_key="VIRI-OLDK-OLDK-OLDK-OLDK", channel="targettv")
    BetaSignup.objects.create(
        name="Target",
        email="target@example.com",
        channel_identifier="TargetTV",
        status="approved",
        created_at=timezone.now(),
    )
    return user


@pytest.mark.django_db
@pytest.mark.integration
class TestListUsersAPI:
    """Integration tests for the admin user listing."""

    def test_lists_users_with_stats(self, api_client, admin_user, target_user):
        api_client.force_authenticate(user=admin_user)

        response = api_client.get(reverse("admin-list-users"))

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        users = {row["email"]: row for row in data["users"]}
        assert users["target@example.com"]["license_count"] == 2
        assert users["target@example.com"]["active_license_count"] == 1
        assert users["target@example.com"]["beta_status"] == "approved"
        assert users["target@example.com"]["channel_identifier"] == "TargetTV"
        assert users["admin@example.com"]["is_admin"] is True
        assert users["admin@example.com"]["license_count"] == 0
        assert users["admin@example.com"]["beta_status"] is None

    def test_limit(self, api_client, admin_user, target_user):
        api_client.force_authenticate(user=admin_user)

        response = api_client.get(reverse("admin-list-users"), {"limit": "1"})

        assert [row["email"] for row in response.json()["users"]] == ["target@example.com"]

    def test_non_admin_is_forbidden(self, api_client, owner_user):
        api_client.force_authenticate(user=owner_user)

        response = api_client.get(reverse("admin-list-users"))

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "ADMIN_REQUIRED"

    def test_requires_authentication(self, api_client, db):
        assert api_client.get(reverse("admin-list-users")).status_code == 403


@pytest.mark.django_db
@pytest.mark.integration
class TestRevokeUserAPI:
    """Integration tests for revoking a user."""

    def revoke(self, api_client, payload):
        return api_client.post(reverse("admin-revoke-user"), payload, format="json")

    def test_revoke_by_id(self, api_client, admin_user, target_user):
        create_license("VIRI-KEEP-KEEP-KEEP-KEEP", owner_email="admin@example.com")
        api_client.force_authenticate(user=admin_user)

        response = self.revoke(api_client, {"user_id": str(target_user.pk)})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "deleted_user_id": target_user.pk,
            "deleted_email": "target@example.com",
            "deleted_license_count": 2,
            "deleted_usage_count": 2,
            "deleted_signup_count": 1,
        }
        assert not get_user_model().objects.filter(pk=target_user.pk).exists()
        assert not Profile.objects.filter(user_id=target_user.pk).exists()
        assert list(License.objects.values_list("key", flat=True)) == [
            "VIRI-KEEP-KEEP-KEEP-KEEP"
        ]
        assert TokenUsage.objects.count() == 0
        assert BetaSignup.objects.count() == 0

    def test_revoke_by_email(self, api_client, admin_user, target_user):
        api_client.force_authenticate(user=admin_user)

        response = self.revoke(api_client, {"email": "TARGET@example.com"})

        assert response.status_code == 200
        assert response.json()["deleted_user_id"] == target_user.pk

    def test_second_revocation_is_not_found(self, api_client, admin_user, target_user):
        api_client.force_authenticate(user=admin_user)
        self.revoke(api_client, {"user_id": str(target_user.pk)})

        response = self.revoke(api_client, {"user_id": str(target_user.pk)})

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "IDENTITY_NOT_FOUND"

    def test_self_revocation(self, api_client, admin_user):
        api_client.force_authenticate(user=admin_user)

        response = self.revoke(api_client, {"email": "admin@example.com"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "SELF_REVOCATION"
        assert get_user_model().objects.filter(pk=admin_user.pk).exists()

    def test_no_target(self, api_client, admin_user):
        api_client.force_authenticate(user=admin_user)

        response = self.revoke(api_client, {})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REVOCATION_TARGET"

    def test_non_admin_is_forbidden(self, api_client, owner_user, target_user):
        api_client.force_authenticate(user=owner_user)

        response = self.revoke(api_client, {"user_id": str(target_user.pk)})

        assert response.status_code == 403
        assert get_user_model().objects.filter(pk=target_user.pk).exists()

    def test_partial_failure_reports_progress(self, api_client, admin_user, target_user):
        api_client.force_authenticate(user=admin_user)

        with patch(
            "accounts.infrastructure.repositories.django_beta_signup_repository."
            "DjangoBetaSignupRepository.delete_by_email",
            side_effect=UpstreamUnavailableError(),
        ):
            response = self.revoke(api_client, {"user_id": str(target_user.pk)})

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "REVOCATION_INCOMPLETE"
        assert error["failed_step"] == "beta_signups"
        assert error["progress"]["completed_steps"] == ["usage_by_license", "usage_by_channel"]
        assert License.objects.filter(owner_email="target@example.com").count() == 2

        response = self.revoke(api_client, {"user_id": str(target_user.pk)})

        assert response.status_code == 200
        assert response.json()["deleted_license_count"] == 2
        assert BetaSignup.objects.count() == 0
