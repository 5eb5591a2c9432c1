"""
Login, registration and token claims.
"""
from dataclasses import replace

from jose import jwt

from services.auth_service import create_access_token, hash_password, verify_password

PASSWORD = "Secret123!"


class TestPasswords:

    def test_hash_and_verify(self):
        hashed = hash_password("s3cret")
        assert hashed != "s3cret"
        assert verify_password("s3cret", hashed)
        assert not verify_password("wrong", hashed)

    def test_malformed_hash_never_matches(self):
        assert not verify_password("s3cret", "not-a-bcrypt-hash")
        assert not verify_password("s3cret", None)


class TestLogin:

    def test_login_returns_token_and_user(self, client, admin_user, settings):
        r = client.post("/api/auth/login", json={"email": "admin@example.com", "password": PASSWORD})
        assert r.status_code == 200
        body = r.json()
        assert body["user"] == {
            "id": admin_user.id,
            "email": "admin@example.com",
            "name": "Admin",
            "isStaff": True,
            "role": "admin",
        }
        claims = jwt.decode(body["token"], settings.jwt_secret, algorithms=["HS256"])
        assert int(claims["sub"]) == admin_user.id
        assert claims["role"] == "admin"
        assert claims["isStaff"] is True
        assert claims["exp"] - claims["iat"] == 12 * 3600

    def test_wrong_password(self, client, admin_user):
        r = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "nope"})
        assert r.status_code == 401
        assert r.json() == {"error": "Invalid credentials"}

    def test_unknown_email(self, client):
        r = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "x"})
        assert r.status_code == 401
        assert r.json() == {"error": "Invalid credentials"}

    def test_missing_fields(self, client):
        r = client.post("/api/auth/login", json={"email": "admin@example.com"})
        assert r.status_code == 400

    def test_staff_without_role_gets_admin_claim(self, client, make_user, settings):
        make_user("staff@example.com", is_staff=True)
        r = client.post("/api/auth/login", json={"email": "staff@example.com", "password": PASSWORD})
        claims = jwt.decode(r.json()["token"], settings.jwt_secret, algorithms=["HS256"])
        assert claims["role"] == "admin"


class TestRegister:

    def test_register_creates_roleless_account(self, client, settings):
        r = client.post("/api/auth/register", json={"email": "new@example.com", "password": "pw", "name": "New"})
        assert r.status_code == 200
        body = r.json()
        assert body["user"]["isStaff"] is False
        assert body["user"]["role"] is None
        claims = jwt.decode(body["token"], settings.jwt_secret, algorithms=["HS256"])
        assert "role" not in claims

        # registered visitors cannot enter the backoffice
        r = client.get("/api/admin/dashboard", headers={"Authorization": f"Bearer {body['token']}"})
        assert r.status_code == 403

    def test_duplicate_email(self, client, admin_user):
        r = client.post("/api/auth/register", json={"email": "admin@example.com", "password": "pw"})
        assert r.status_code == 400
        assert r.json() == {"error": "Email already exists"}

    def test_missing_password(self, client):
        r = client.post("/api/auth/register", json={"email": "x@example.com"})
        assert r.status_code == 400


class TestMe:

    def test_returns_claims(self, client, admin_user, admin_headers):
        r = client.get("/api/auth/me", headers=admin_headers)
        assert r.status_code == 200
        assert int(r.json()["sub"]) == admin_user.id
        assert r.json()["email"] == "admin@example.com"

    def test_expired_token(self, client, admin_user, settings):
        token = create_access_token(admin_user, replace(settings, token_ttl_hours=-1))
        r = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401
        assert r.json() == {"error": "Invalid token"}
