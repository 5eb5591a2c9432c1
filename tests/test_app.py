"""
Application wiring: health check, error envelope, CORS and seeding.
"""
from dataclasses import replace

from database import check_connection, get_session_context
from models import Service, User
from seed import STARTER_SERVICES, run


class TestApp:

    def test_health(self, client):
        assert client.get("/api/health").json() == {"ok": True}

    def test_unknown_route(self, client):
        r = client.get("/api/nothing-here")
        assert r.status_code == 404
        assert r.json() == {"error": "Route not found"}

    def test_validation_error_envelope(self, client, admin_headers):
        r = client.post("/api/admin/deals", json={"clientId": "abc"}, headers=admin_headers)
        assert r.status_code == 400
        body = r.json()
        assert body["error"] == "Invalid request"
        assert "clientId" in body["details"]

    def test_cors_preflight(self, client):
        r = client.options(
            "/api/properties",
            headers={"Origin": "https://site.example", "Access-Control-Request-Method": "GET"},
        )
        assert r.status_code == 200
        assert r.headers["access-control-allow-origin"] in ("*", "https://site.example")

    def test_database_reachable(self, app):
        assert check_connection(app.state.engine)


class TestSeed:

    def test_seed_is_idempotent(self, tmp_path, settings, monkeypatch):
        monkeypatch.setenv("ADMIN_EMAIL", "boss@example.com")
        monkeypatch.setenv("ADMIN_PASSWORD", "pw")
        seeded_settings = replace(settings, database_url=f"sqlite:///{tmp_path / 'seed.db'}")
        run(seeded_settings)
        run(seeded_settings)

        from database import build_engine, build_session_factory
        factory = build_session_factory(build_engine(seeded_settings.database_url))
        with get_session_context(factory) as db:
            users = db.query(User).all()
            assert [(u.email, u.role, u.is_staff) for u in users] == [("boss@example.com", "admin", True)]
            assert db.query(Service).count() == len(STARTER_SERVICES)
