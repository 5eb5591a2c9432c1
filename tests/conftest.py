"""
Shared fixtures: a fresh in-memory database and upload directory per test,
users for each role and bearer headers for them.
"""
import os
import tempfile

# main builds a module-level app on import; keep it off the working tree
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOAD_DIR", os.path.join(tempfile.gettempdir(), "sankofa-test-uploads"))

import pytest
from fastapi.testclient import TestClient

from config import Settings
from database import get_session_context
from main import create_app
from models import User
from services.auth_service import create_access_token, hash_password

PASSWORD = "Secret123!"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url="sqlite://",
        upload_dir=str(tmp_path / "uploads"),
        jwt_secret="test-secret",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session_factory(app):
    return app.state.session_factory


@pytest.fixture
def make_user(session_factory):
    """Insert a user and return it (detached, attributes loaded)."""
    def _make(email, password=PASSWORD, role=None, is_staff=False, name=None):
        with get_session_context(session_factory) as db:
            user = User(
                email=email,
                password=hash_password(password),
                role=role,
                is_staff=is_staff,
                name=name,
            )
            db.add(user)
            db.flush()
        return user
    return _make


@pytest.fixture
def headers_for(settings):
    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(user, settings)}"}
    return _headers


@pytest.fixture
def admin_user(make_user):
    return make_user("admin@example.com", role="admin", is_staff=True, name="Admin")


@pytest.fixture
def admin_headers(admin_user, headers_for):
    return headers_for(admin_user)


@pytest.fixture
def sales_headers(make_user, headers_for):
    return headers_for(make_user("sales@example.com", role="sales"))


@pytest.fixture
def viewer_headers(make_user, headers_for):
    return headers_for(make_user("viewer@example.com", role="viewer"))


@pytest.fixture
def roleless_headers(make_user, headers_for):
    return headers_for(make_user("visitor@example.com"))
