"""Tests for security headers middleware."""

from helpers.security_headers import API_SECURITY_HEADERS


class TestSecurityHeaders:
    """Test security headers are present in responses."""

    def test_all_headers_present(self, client) -> None:
        response = client.get("/api/health")

        for header, value in API_SECURITY_HEADERS.items():
            assert response.headers.get(header) == value

    def test_x_frame_options(self, client) -> None:
        response = client.get("/api/health")
        assert response.headers.get("X-Frame-Options") == "DENY"

    def test_cache_control_no_store(self, client) -> None:
        """Feed counts change constantly, so API responses are not cached."""
        response = client.get("/api/reports/")
        assert "no-store" in response.headers.get("Cache-Control", "")

    def test_no_hsts_outside_production(self, client) -> None:
        response = client.get("/api/health")
        assert "Strict-Transport-Security" not in response.headers

    def test_headers_on_error_responses(self, client) -> None:
        response = client.get("/api/reports/99999")
        assert response.status_code == 404
        assert response.headers.get("X-Content-Type-Options") == "nosniff"
