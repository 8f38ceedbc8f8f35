"""
Tests for role authorization.
"""

import pytest
from fastapi.testclient import TestClient

from invoice_api.domain.access.entities import Capability, Identity, Role
from invoice_api.domain.access.errors import InsufficientRoleError, MissingCredentialError
from invoice_api.shared.security.authorization import authorize


class TestAuthorize:
    """Unit tests for the pure authorize() check."""

    @pytest.mark.parametrize("identity", [None, Identity(1, Role.USER), Identity(2, Role.ADMIN)])
    def test_public_allows_everyone(self, identity) -> None:
        """Public capability needs no identity."""
        assert authorize(identity, Capability.PUBLIC) is None

    def test_protected_without_identity(self) -> None:
        """No identity on a protected route is a missing credential."""
        assert isinstance(authorize(None, Capability.AUTHENTICATED), MissingCredentialError)

    def test_user_is_authenticated(self) -> None:
        """Users have the authenticated capability."""
        assert authorize(Identity(1, Role.USER), Capability.AUTHENTICATED) is None

    def test_user_is_not_admin(self) -> None:
        """Users lack the admin capability."""
        refusal = authorize(Identity(1, Role.USER), Capability.ADMIN)
        assert isinstance(refusal, InsufficientRoleError)

    def test_admin_has_every_capability(self) -> None:
        """Admins have every capability."""
        admin = Identity(2, Role.ADMIN)
        for capability in Capability:
            assert authorize(admin, capability) is None


class TestAdminRoutes:
    """Admin-only routes through the full pipeline."""

    def test_user_gets_403(self, client: TestClient, user_headers) -> None:
        """Users on admin routes get a 403."""
        response = client.get("/api/auth/users", headers=user_headers)
        assert response.status_code == 403
        assert response.json() == {"error": "Admin access required"}

    def test_handler_not_invoked_for_user(self, client: TestClient, state, user, user_headers) -> None:
        """Refused requests change nothing."""
        before = len(state.store.users)
        response = client.post(
            "/api/auth/users",
            headers=user_headers,
            json={"email": "new@example.com", "name": "New", "password": "secret1"},
        )
        assert response.status_code == 403
        assert len(state.store.users) == before

    def test_admin_allowed(self, client: TestClient, admin_headers) -> None:
        """Admins reach admin routes."""
        response = client.get("/api/auth/users", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["total"] == 1

    def test_promotion_applies_to_existing_token(
        self, client: TestClient, admin_headers, user, user_headers
    ) -> None:
        """Roles are looked up per request, not read from the token."""
        promoted = client.put(
            f"/api/auth/users/{user.id}/permissions",
            headers=admin_headers,
            json={"role": "admin"},
        )
        assert promoted.status_code == 200
        assert client.get("/api/auth/users", headers=user_headers).status_code == 200

    def test_missing_credential_is_401_not_403(self, client: TestClient) -> None:
        """No token on an admin route is a 401."""
        assert client.get("/api/auth/users").status_code == 401
