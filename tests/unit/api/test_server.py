"""Unit tests for api.server module."""

import logging
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from src.api.server import (
    SECURITY_HEADERS,
    UNEXPECTED_ERROR_MESSAGE,
    create_app,
    rate_limit_string,
    run_server,
)
from src.config.models import ServiceConfig
from src.models.conversion_options import ConversionOptions


@pytest.fixture
def client():
    """Test client for an app with default configuration."""
    return TestClient(create_app())


class TestConvertEndpoint:
    """Test cases for POST /api/html-to-text."""

    def test_converts_html(self, client):
        """A valid request returns converted text and stats."""
        response = client.post("/api/html-to-text", json={"html": "<h1>Title</h1><p>Body text</p>"})

        assert response.status_code == 200
        body = response.json()
        assert body['success'] is True
        assert body['text'] == "Title\n\nBody text"
        assert body['stats']['wordCount'] == 3
        assert body['stats']['originalLength'] == 30
        assert body['stats']['convertedLength'] == 16
        assert body['stats']['charactersRemoved'] == 14

    def test_applies_request_options(self, client):
        """Options in the body are honored."""
        response = client.post(
            "/api/html-to-text",
            json={"html": "<p>a</p><p>b</p>", "options": {"preserveLineBreaks": False}},
        )

        assert response.status_code == 200
        assert response.json()['text'] == "ab"

    def test_missing_html_returns_400(self, client):
        """A body without html is rejected."""
        response = client.post("/api/html-to-text", json={})

        assert response.status_code == 400
        assert response.json() == {'success': False, 'error': "HTML content required"}

    def test_empty_html_returns_400(self, client):
        """An empty html string is rejected."""
        response = client.post("/api/html-to-text", json={"html": ""})

        assert response.status_code == 400
        assert response.json()['error'] == "HTML content required"

    def test_non_string_html_returns_400(self, client):
        """A non-string html value is rejected."""
        response = client.post("/api/html-to-text", json={"html": 12})

        assert response.status_code == 400
        assert response.json()['error'] == "HTML content must be a string"

    def test_invalid_option_returns_400(self, client):
        """A non-boolean option is rejected."""
        response = client.post(
            "/api/html-to-text",
            json={"html": "<p>x</p>", "options": {"removeExtraSpaces": 1}},
        )

        assert response.status_code == 400
        assert response.json()['error'] == "Option 'removeExtraSpaces' must be true or false"

    def test_invalid_json_returns_400(self, client):
        """A body that is not valid JSON is rejected."""
        response = client.post(
            "/api/html-to-text",
            content=b'{"html": "<p>',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {'success': False, 'error': "Invalid JSON body"}

    def test_too_large_html_returns_400(self):
        """The configured size limit is enforced."""
        client = TestClient(create_app(ServiceConfig(max_html_length=8)))

        response = client.post("/api/html-to-text", json={"html": "<p>long text</p>"})

        assert response.status_code == 400
        assert response.json()['error'] == "HTML content too large (max 8 characters)"

    def test_configured_default_options_apply(self):
        """Requests without options use the configured defaults."""
        config = ServiceConfig(default_options=ConversionOptions(convert_entities=False))
        client = TestClient(create_app(config))

        response = client.post("/api/html-to-text", json={"html": "a &amp; b"})

        assert response.json()['text'] == "a &amp; b"

    def test_unexpected_error_returns_generic_500(self):
        """Errors escaping the handler are hidden behind a generic message."""
        client = TestClient(create_app(), raise_server_exceptions=False)

        with patch(
            'src.api.request_handler.validate_request',
            side_effect=RuntimeError("internal detail"),
        ):
            response = client.post("/api/html-to-text", json={"html": "<p>x</p>"})

        assert response.status_code == 500
        assert response.json() == {'success': False, 'error': UNEXPECTED_ERROR_MESSAGE}

    def test_huge_numeric_entity_is_kept(self, client):
        """An entity too large for any code point is returned as written."""
        html = "x&#" + "9" * 5000 + ";"

        response = client.post("/api/html-to-text", json={"html": html})

        assert response.status_code == 200
        assert response.json()['text'] == html

    def test_get_is_not_allowed(self, client):
        """Only POST is routed."""
        response = client.get("/api/html-to-text")

        assert response.status_code == 405


class TestCors:
    """Test cases for cross-origin access."""

    def test_allows_any_origin_by_default(self, client):
        """The default configuration allows every origin."""
        response = client.post(
            "/api/html-to-text",
            json={"html": "<p>x</p>"},
            headers={"Origin": "http://example.com"},
        )

        assert response.headers["access-control-allow-origin"] == "*"

    def test_preflight_request(self, client):
        """Preflight requests are answered."""
        response = client.options(
            "/api/html-to-text",
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert "POST" in response.headers["access-control-allow-methods"]

    def test_restricted_origins(self):
        """Origins outside cors_origins get no allow header."""
        client = TestClient(create_app(ServiceConfig(cors_origins=["http://allowed.test"])))

        response = client.post(
            "/api/html-to-text",
            json={"html": "<p>x</p>"},
            headers={"Origin": "http://other.test"},
        )

        assert "access-control-allow-origin" not in response.headers


class TestCreateApp:
    """Test cases for create_app."""

    def test_stores_config_on_state(self):
        """The configuration is available on app.state."""
        config = ServiceConfig(port=8080)

        app = create_app(config)

        assert app.state.config is config

    def test_default_config(self):
        """Without a config the defaults are used."""
        app = create_app()

        assert app.state.config == ServiceConfig()


class TestRunServer:
    """Test cases for run_server."""

    @patch('src.api.server.uvicorn.run')
    def test_runs_uvicorn_with_config(self, mock_run):
        """uvicorn is started on the configured host and port."""
        config = ServiceConfig(host="0.0.0.0", port=8123, log_level="WARNING")

        run_server(config)

        mock_run.assert_called_once()
        _, kwargs = mock_run.call_args
        assert kwargs['host'] == "0.0.0.0"
        assert kwargs['port'] == 8123
        assert kwargs['log_level'] == "warning"


class TestRateLimit:
    """Test cases for the per-client rate limit."""

    def test_requests_over_limit_are_rejected(self):
        """Requests past the limit get 429 with the error envelope."""
        client = TestClient(create_app(ServiceConfig(rate_limit_requests=2)))

        statuses = [
            client.post("/api/html-to-text", json={"html": "<p>x</p>"}).status_code
            for _ in range(2)
        ]
        response = client.post("/api/html-to-text", json={"html": "<p>x</p>"})

        assert statuses == [200, 200]
        assert response.status_code == 429
        assert response.json() == {
            'success': False,
            'error': "Too many requests from this IP, please try again later.",
        }

    def test_rejected_requests_also_count(self):
        """Failed validations use up the allowance like any request."""
        client = TestClient(create_app(ServiceConfig(rate_limit_requests=1)))

        first = client.post("/api/html-to-text", json={"html": ""})
        second = client.post("/api/html-to-text", json={"html": "<p>x</p>"})

        assert first.status_code == 400
        assert second.status_code == 429

    def test_rejection_is_logged(self, caplog):
        """Limited requests are logged at WARNING."""
        client = TestClient(create_app(ServiceConfig(rate_limit_requests=1)))

        with caplog.at_level(logging.WARNING, logger="src.api.server"):
            client.post("/api/html-to-text", json={"html": "<p>x</p>"})
            client.post("/api/html-to-text", json={"html": "<p>x</p>"})

        assert "Rate limit exceeded by testclient on /api/html-to-text" in caplog.text

    def test_disabled_limit_allows_all_requests(self):
        """No request is limited when rate limiting is off."""
        config = ServiceConfig(rate_limit_enabled=False, rate_limit_requests=1)
        client = TestClient(create_app(config))

        statuses = {
            client.post("/api/html-to-text", json={"html": "<p>x</p>"}).status_code
            for _ in range(5)
        }

        assert statuses == {200}

    def test_each_app_has_its_own_counter(self):
        """A new application starts with a fresh allowance."""
        config = ServiceConfig(rate_limit_requests=1)

        first = TestClient(create_app(config)).post("/api/html-to-text", json={"html": "a"})
        second = TestClient(create_app(config)).post("/api/html-to-text", json={"html": "a"})

        assert first.status_code == 200
        assert second.status_code == 200

    def test_rate_limit_string(self):
        """The limit is expressed as requests per window seconds."""
        config = ServiceConfig(rate_limit_requests=100, rate_limit_window=900)

        assert rate_limit_string(config) == "100 per 900 seconds"


class TestCompression:
    """Test cases for gzip compression."""

    def test_large_response_is_compressed(self, client):
        """Bodies over the minimum size are gzip-encoded."""
        html = "<p>" + "word " * 400 + "</p>"

        response = client.post(
            "/api/html-to-text",
            json={"html": html},
            headers={"Accept-Encoding": "gzip"},
        )

        assert response.status_code == 200
        assert response.headers["content-encoding"] == "gzip"
        assert response.json()['stats']['wordCount'] == 400

    def test_small_response_is_not_compressed(self, client):
        """Bodies under the minimum size are sent as is."""
        response = client.post(
            "/api/html-to-text",
            json={"html": "<p>x</p>"},
            headers={"Accept-Encoding": "gzip"},
        )

        assert "content-encoding" not in response.headers

    def test_minimum_size_is_configurable(self):
        """gzip_minimum_size sets the compression threshold."""
        client = TestClient(create_app(ServiceConfig(gzip_minimum_size=10)))

        response = client.post(
            "/api/html-to-text",
            json={"html": "<p>Hello world</p>"},
            headers={"Accept-Encoding": "gzip"},
        )

        assert response.headers["content-encoding"] == "gzip"


class TestSecurityHeaders:
    """Test cases for hardening response headers."""

    def test_headers_on_success(self, client):
        """Successful responses carry every security header."""
        response = client.post("/api/html-to-text", json={"html": "<p>x</p>"})

        for name, value in SECURITY_HEADERS.items():
            assert response.headers[name] == value

    def test_headers_on_error(self, client):
        """Error responses carry the headers too."""
        response = client.post("/api/html-to-text", json={})

        assert response.status_code == 400
        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-frame-options"] == "SAMEORIGIN"

    def test_headers_can_be_disabled(self):
        """security_headers=False leaves responses unchanged."""
        client = TestClient(create_app(ServiceConfig(security_headers=False)))

        response = client.post("/api/html-to-text", json={"html": "<p>x</p>"})

        assert "x-content-type-options" not in response.headers
        assert "strict-transport-security" not in response.headers


class TestRequestLog:
    """Test cases for request logging."""

    def test_each_request_is_logged(self, client, caplog):
        """Method, path and status are logged at INFO."""
        with caplog.at_level(logging.INFO, logger="src.api.server"):
            client.post("/api/html-to-text", json={"html": "<p>x</p>"})
            client.post("/api/html-to-text", json={})

        assert "POST /api/html-to-text 200" in caplog.text
        assert "POST /api/html-to-text 400" in caplog.text
