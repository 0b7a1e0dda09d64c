"""Tests for the HTTP adapter."""

from fastapi.testclient import TestClient

from ephemeral_links.core.config import Settings
from ephemeral_links.main import create_app, error_status_code
from ephemeral_links.core.exceptions import (
    DuplicateShortcodeError,
    EmptyUrlError,
    ShortcodeExpiredError,
    ShortcodeNotFoundError,
)

from .conftest import T0


class TestHealthEndpoint:
    """Tests for health check endpoints."""

    def test_health_check(self, client):
        """Test health check returns healthy status."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_session_status(self, client, session):
        session.registry.create("https://example.com")
        response = client.get("/health/session")
        assert response.status_code == 200
        assert response.json()["records"] == 1
        assert response.json()["events"] == 1


class TestLifespan:
    """Tests for the application-managed session."""

    def test_lifespan_starts_and_closes_session(self):
        app = create_app(Settings())
        with TestClient(app) as client:
            session = app.state.session
            assert session.is_running is True
            response = client.post("/shorten", json={"original_url": "https://example.com"})
            assert response.status_code == 201
            assert len(session.registry) == 1
        assert session.closed is True
        assert session.is_running is False


class TestCreateShortURL:
    """Tests for POST /shorten endpoint."""

    def test_create_short_url_success(self, client):
        """Test creating a short URL successfully."""
        response = client.post("/shorten", json={"original_url": "https://example.com"})
        assert response.status_code == 201
        data = response.json()
        assert data["original_url"] == "https://example.com"
        assert len(data["shortcode"]) == 6
        assert data["short_url"] == f"http://sho.rt/{data['shortcode']}"
        assert data["created_at"] == T0
        assert data["expires_at"] == T0 + 30 * 60_000
        assert data["clicks"] == 0

    def test_create_with_custom_code_and_validity(self, client):
        response = client.post(
            "/shorten",
            json={"original_url": "https://example.com", "custom_code": "custom", "validity_minutes": "5"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["shortcode"] == "custom"
        assert data["expires_at"] - data["created_at"] == 5 * 60_000

    def test_create_empty_url(self, client):
        response = client.post("/shorten", json={"original_url": "   "})
        assert response.status_code == 400
        assert response.json()["error_code"] == "EmptyUrl"

    def test_create_invalid_url(self, client):
        """Test creating with invalid URL format."""
        response = client.post("/shorten", json={"original_url": "not-a-valid-url"})
        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid URL format.", "error_code": "InvalidUrlFormat"}

    def test_create_invalid_custom_code(self, client):
        response = client.post(
            "/shorten", json={"original_url": "https://example.com", "custom_code": "bad@code"}
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "InvalidShortcode"

    def test_create_duplicate_custom_code(self, client):
        """Test creating with duplicate custom code."""
        body = {"original_url": "https://example.com", "custom_code": "duplicate"}
        assert client.post("/shorten", json=body).status_code == 201

        response = client.post("/shorten", json=body)
        assert response.status_code == 409
        assert response.json() == {"detail": "Custom shortcode already in use.", "error_code": "DuplicateShortcode"}

    def test_missing_url_field(self, client):
        response = client.post("/shorten", json={})
        assert response.status_code == 422


class TestRedirectEndpoint:
    """Tests for GET /{shortcode} endpoint."""

    def test_redirect_success(self, client):
        """Test successful redirect."""
        client.post("/shorten", json={"original_url": "https://example.com/page", "custom_code": "go1234"})

        response = client.get("/go1234", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com/page"

    def test_redirect_not_found(self, client):
        response = client.get("/zzzzzz", follow_redirects=False)
        assert response.status_code == 404
        assert response.json()["error_code"] == "NotFound"

    def test_redirect_expired(self, client, clock):
        client.post(
            "/shorten",
            json={"original_url": "https://example.com", "custom_code": "old123", "validity_minutes": 1},
        )
        clock.advance(61_000)

        response = client.get("/old123", follow_redirects=False)
        assert response.status_code == 410
        assert response.json()["error_code"] == "Expired"

    def test_redirect_click_count_increments(self, client):
        """Test that redirect increments click count."""
        client.post("/shorten", json={"original_url": "https://example.com", "custom_code": "count1"})

        for _ in range(3):
            client.get("/count1", follow_redirects=False)

        assert client.get("/stats/count1").json()["clicks"] == 3


class TestStatsEndpoint:
    """Tests for GET /stats/{shortcode} endpoint."""

    def test_stats_success(self, client):
        client.post("/shorten", json={"original_url": "https://example.com", "custom_code": "stats1"})

        response = client.get("/stats/stats1")
        assert response.status_code == 200
        assert response.json() == {
            "original_url": "https://example.com",
            "shortcode": "stats1",
            "short_url": "http://sho.rt/stats1",
            "created_at": T0,
            "expires_at": T0 + 30 * 60_000,
            "clicks": 0,
            "is_expired": False,
        }

    def test_stats_for_expired_record(self, client, clock):
        client.post(
            "/shorten",
            json={"original_url": "https://example.com", "custom_code": "stats2", "validity_minutes": 1},
        )
        clock.advance(2 * 60_000)

        response = client.get("/stats/stats2")
        assert response.status_code == 200
        assert response.json()["is_expired"] is True

    def test_stats_not_found(self, client):
        response = client.get("/stats/zzzzzz")
        assert response.status_code == 404


class TestEventsEndpoint:
    """Tests for GET /events endpoint."""

    def test_events_record_outcomes(self, client):
        client.post("/shorten", json={"original_url": "https://example.com", "custom_code": "evt123"})
        client.get("/evt123", follow_redirects=False)
        client.get("/zzzzzz", follow_redirects=False)

        response = client.get("/events")
        assert response.status_code == 200
        entries = response.json()
        assert [entry["event_type"] for entry in entries] == [
            "url_created",
            "redirect_success",
            "redirect_fail",
        ]
        assert entries[1]["details"] == {"shortcode": "evt123", "originalUrl": "https://example.com"}
        assert entries[2]["details"] == {"shortcode": "zzzzzz", "reason": "Not found"}


def test_error_status_codes():
    assert error_status_code(EmptyUrlError("x")) == 400
    assert error_status_code(DuplicateShortcodeError("x", "abcd")) == 409
    assert error_status_code(ShortcodeNotFoundError("x", "abcd")) == 404
    assert error_status_code(ShortcodeExpiredError("x", "abcd")) == 410


class TestValidityOverHttp:
    """Tests that raw validity values reach the registry unchanged."""

    def test_boolean_validity_uses_default(self, client):
        response = client.post(
            "/shorten", json={"original_url": "https://example.com", "validity_minutes": True}
        )
        assert response.status_code == 201
        data = response.json()
        assert data["expires_at"] - data["created_at"] == 30 * 60_000

    def test_float_and_garbage_validity(self, client):
        first = client.post("/shorten", json={"original_url": "https://example.com", "validity_minutes": 2.7})
        second = client.post("/shorten", json={"original_url": "https://example.com", "validity_minutes": [5]})
        assert first.json()["expires_at"] - first.json()["created_at"] == 2 * 60_000
        assert second.json()["expires_at"] - second.json()["created_at"] == 30 * 60_000


class TestRedirectSchemes:
    """Tests for the redirect scheme allow-list."""

    def test_javascript_url_not_redirected(self, client, session):
        response = client.post(
            "/shorten", json={"original_url": "javascript:alert(1)", "custom_code": "jscode"}
        )
        assert response.status_code == 201

        response = client.get("/jscode", follow_redirects=False)
        assert response.status_code == 403
        assert "location" not in response.headers
        assert session.registry.get_stats("jscode").clicks == 0

    def test_scheme_check_is_case_insensitive(self, client):
        client.post("/shorten", json={"original_url": "HTTPS://example.com/", "custom_code": "upper1"})
        response = client.get("/upper1", follow_redirects=False)
        assert response.status_code == 302
