"""
Tests for the HTTP API: status codes, response bodies and error mapping.
"""

import re

from fastapi.testclient import TestClient

from shortlink.core.setting import Settings
from shortlink.main import create_app
from tests.conftest import TEST_BASE_URL


def create(client, **body):
    return client.post("/shorturls", json=body)


def create_link(client, **body):
    response = create(client, **body)
    assert response.status_code == 201, response.json()
    return response.json()


class TestCreateEndpoint:
    """Test POST /shorturls."""

    def test_create_with_generated_code(self, client):
        response = create(client, url="https://example.com", validity=1)

        assert response.status_code == 201
        data = response.json()
        assert re.fullmatch(rf"{re.escape(TEST_BASE_URL)}/[0-9a-f]{{6}}", data["shortLink"])
        assert data["expiry"] == "2025-01-01T12:01:00.000Z"

    def test_create_with_custom_code(self, client):
        response = create(client, url="https://example.com", shortcode="promo")

        assert response.status_code == 201
        assert response.json()["shortLink"] == f"{TEST_BASE_URL}/promo"
        assert response.json()["expiry"] == "2025-01-01T12:30:00.000Z"

    def test_missing_url(self, client):
        response = create(client, validity=5)

        assert response.status_code == 400
        assert response.json() == {"error": "URL is required", "code": "MISSING_URL"}

    def test_missing_body(self, client):
        response = client.post("/shorturls")

        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_URL"

    def test_invalid_url(self, client):
        response = create(client, url="not a url")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid URL format", "code": "INVALID_URL"}

    def test_invalid_shortcode(self, client):
        response = create(client, url="https://example.com", shortcode="x!")

        assert response.status_code == 400
        assert response.json() == {
            "error": "Invalid custom shortcode format",
            "code": "INVALID_SHORTCODE",
        }

    def test_collision(self, client):
        create_link(client, url="https://a.com", shortcode="abc")

        response = create(client, url="https://b.com", shortcode="abc")
        assert response.status_code == 409
        assert response.json() == {"error": "Shortcode already exists", "code": "SHORTCODE_COLLISION"}

        stats = client.get("/shorturls/abc").json()
        assert stats["originalUrl"] == "https://a.com"

    def test_malformed_json(self, client):
        response = client.post(
            "/shorturls",
            content="{not json",
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_REQUEST"

    def test_wrongly_typed_validity(self, client):
        response = create(client, url="https://example.com", validity="soon")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_REQUEST"

    def test_non_string_url_is_invalid_url(self, client):
        response = create(client, url=123)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid URL format", "code": "INVALID_URL"}

    def test_non_string_shortcode_is_invalid_shortcode(self, client):
        response = create(client, url="https://example.com", shortcode=12345)

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_SHORTCODE"

    def test_url_without_host(self, client):
        create_link(client, url="mailto:team@example.com", shortcode="mail")

        assert client.get("/shorturls/mail").json()["originalUrl"] == "mailto:team@example.com"

    def test_surrounding_whitespace_is_trimmed(self, client):
        create_link(client, url="  https://example.com/page \n", shortcode="trim")

        response = client.get("/trim", follow_redirects=False)
        assert response.headers["location"] == "https://example.com/page"


class TestRedirectEndpoint:
    """Test GET /{shortcode}."""

    def test_redirect(self, client):
        create_link(client, url="https://example.com/landing", shortcode="go1")

        response = client.get("/go1", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com/landing"

    def test_unknown_code(self, client):
        response = client.get("/nothere", follow_redirects=False)

        assert response.status_code == 404
        assert response.json() == {"error": "Short URL not found", "code": "NOT_FOUND"}

    def test_expired_link(self, client, clock):
        create_link(client, url="https://example.com", validity=1, shortcode="brief")
        assert client.get("/brief", follow_redirects=False).status_code == 302

        clock.advance(seconds=61)
        response = client.get("/brief", follow_redirects=False)

        assert response.status_code == 410
        assert response.json() == {"error": "Short URL has expired", "code": "EXPIRED_LINK"}
        assert client.get("/shorturls/brief").json()["totalClicks"] == 1

    def test_reserved_route_segment(self, client):
        response = client.get("/shorturls", follow_redirects=False)

        assert response.status_code == 404
        assert response.json()["code"] == "ENDPOINT_NOT_FOUND"

    def test_request_metadata_is_recorded(self, client):
        create_link(client, url="https://example.com", shortcode="meta")

        client.get(
            "/meta",
            headers={"User-Agent": "TestAgent/1.0", "Referer": "https://ref.example"},
            follow_redirects=False
        )

        click = client.get("/shorturls/meta").json()["detailedClickData"][0]
        assert click == {
            "timestamp": "2025-01-01T12:00:00.000Z",
            "source": "https://ref.example",
            "userAgent": "TestAgent/1.0",
            "location": "Unknown",
        }

    def test_forwarded_ip_is_recorded(self, client, app):
        create_link(client, url="https://example.com", shortcode="proxy")

        client.get(
            "/proxy",
            headers={"X-Forwarded-For": "203.0.113.9, 10.0.0.1"},
            follow_redirects=False
        )

        event = app.state.store.get_analytics("proxy").clicks[0]
        assert event.ip == "203.0.113.9"

    def test_missing_analytics_is_internal_error(self, client, app):
        create_link(client, url="https://example.com", shortcode="broken")
        del app.state.store._analytics["broken"]

        response = client.get("/broken", follow_redirects=False)

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "code": "INTERNAL_ERROR"}


class TestStatsEndpoint:
    """Test GET /shorturls/{shortcode}."""

    def test_stats(self, client, clock):
        create_link(client, url="https://example.com", shortcode="stat")
        clock.advance(seconds=10)
        client.get("/stat", headers={"User-Agent": "A"}, follow_redirects=False)
        clock.advance(seconds=10)
        client.get("/stat", headers={"User-Agent": "B"}, follow_redirects=False)

        response = client.get("/shorturls/stat")

        assert response.status_code == 200
        data = response.json()
        assert data["totalClicks"] == 2
        assert data["originalUrl"] == "https://example.com"
        assert data["creationDate"] == "2025-01-01T12:00:00.000Z"
        assert data["expiryDate"] == "2025-01-01T12:30:00.000Z"
        assert [c["userAgent"] for c in data["detailedClickData"]] == ["A", "B"]
        assert [c["source"] for c in data["detailedClickData"]] == ["Direct", "Direct"]
        assert [c["timestamp"] for c in data["detailedClickData"]] == [
            "2025-01-01T12:00:10.000Z",
            "2025-01-01T12:00:20.000Z",
        ]

    def test_stats_unknown_code(self, client):
        response = client.get("/shorturls/nothere")

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"


class TestServiceEndpoints:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "timestamp": "2025-01-01T12:00:00.000Z",
            "service": "URL Shortener Microservice",
        }

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"

    def test_unknown_endpoint(self, client):
        response = client.get("/a/b/c")

        assert response.status_code == 404
        assert response.json() == {"error": "Endpoint not found", "code": "ENDPOINT_NOT_FOUND"}

    def test_process_time_header(self, client):
        assert "x-process-time" in client.get("/health").headers

    def test_health_reports_service_clock(self, client, clock):
        clock.advance(minutes=5)

        assert client.get("/health").json()["timestamp"] == "2025-01-01T12:05:00.000Z"

    def test_docs_disabled_in_production(self, clock):
        app = create_app(
            Settings(BASE_URL=TEST_BASE_URL, ENV_SETTING="production"),
            clock=clock
        )

        with TestClient(app) as client:
            assert client.get("/openapi.json").status_code == 404
            assert client.get("/").json()["docs"] is None
            assert client.get("/health").status_code == 200

    def test_docs_served_outside_production(self, client):
        assert client.get("/openapi.json").status_code == 200
