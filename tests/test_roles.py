"""
Role resolution and the bearer/role gate in front of the backoffice.
"""
from dataclasses import replace

import pytest

from models import UserRole
from services.auth_service import create_access_token


class TestRoleResolution:

    def test_explicit_role_wins(self):
        assert UserRole.derive("sales", True) == UserRole.SALES
        assert UserRole.derive(" Viewer ", False) == UserRole.VIEWER

    def test_staff_without_role_is_admin(self):
        assert UserRole.derive(None, True) == UserRole.ADMIN
        assert UserRole.derive("", True) == UserRole.ADMIN

    def test_unknown_role_falls_back_to_staff_flag(self):
        assert UserRole.derive("superuser", True) == UserRole.ADMIN
        assert UserRole.derive("superuser", False) is None

    def test_no_role_and_not_staff(self):
        assert UserRole.derive(None, False) is None

    def test_parse(self):
        assert UserRole.parse("ADMIN") == UserRole.ADMIN
        assert UserRole.parse("nope") is None
        assert UserRole.parse(None) is None


class TestGate:

    def test_missing_token(self, client):
        r = client.get("/api/admin/dashboard")
        assert r.status_code == 401
        assert r.json() == {"error": "No token"}

    def test_forged_token(self, client):
        r = client.get("/api/admin/dashboard", headers={"Authorization": "Bearer not-a-jwt"})
        assert r.status_code == 401
        assert r.json() == {"error": "Invalid token"}

    def test_token_signed_with_other_secret(self, client, admin_user, settings):
        token = create_access_token(admin_user, replace(settings, jwt_secret="other"))
        r = client.get("/api/admin/dashboard", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401

    def test_any_role_endpoint(self, client, viewer_headers):
        assert client.get("/api/admin/dashboard", headers=viewer_headers).status_code == 200

    def test_user_without_role_is_rejected_everywhere(self, client, roleless_headers):
        r = client.get("/api/admin/dashboard", headers=roleless_headers)
        assert r.status_code == 403
        assert r.json() == {"error": "Forbidden"}

    @pytest.mark.parametrize("path", ["/api/admin/clients", "/api/admin/deals", "/api/admin/stats"])
    def test_viewer_cannot_reach_sales_endpoints(self, client, viewer_headers, path):
        assert client.get(path, headers=viewer_headers).status_code == 403

    @pytest.mark.parametrize("path", ["/api/admin/clients", "/api/admin/deals", "/api/admin/stats"])
    def test_sales_reaches_sales_endpoints(self, client, sales_headers, path):
        assert client.get(path, headers=sales_headers).status_code == 200

    def test_sales_cannot_reach_admin_endpoints(self, client, sales_headers):
        assert client.get("/api/admin/users", headers=sales_headers).status_code == 403
        assert client.get("/api/admin/audit-logs", headers=sales_headers).status_code == 403

    def test_staff_token_without_role_acts_as_admin(self, client, make_user, headers_for):
        headers = headers_for(make_user("staff@example.com", is_staff=True))
        assert client.get("/api/admin/users", headers=headers).status_code == 200

    def test_gate_runs_before_body_validation(self, client, viewer_headers):
        r = client.post("/api/admin/deals", json={"clientId": "abc"}, headers=viewer_headers)
        assert r.status_code == 403
