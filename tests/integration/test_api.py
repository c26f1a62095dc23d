"""Integration tests for API endpoints.

Tests the relay endpoint status mapping, plain-text errors and the
health check.

Author: Odiseo
Version: 1.0.0
"""

from __future__ import annotations

import smtplib
from unittest.mock import patch

import pytest

from mail_relay.core.exceptions import SMTPClientError

VALID_REQUEST = {"to": "a@example.com", "subject": "Hi", "body": "Hello"}


class TestMethodNotAllowed:
    """Tests for non-POST requests to /send."""

    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH"])
    def test_non_post_rejected(self, test_client, mock_smtp_client, method):
        """Test non-POST methods return 405 without touching SMTP."""
        response = test_client.request(method, "/send", json=VALID_REQUEST)

        assert response.status_code == 405
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Method Not Allowed"
        assert response.headers["allow"] == "POST"
        mock_smtp_client.send_email.assert_not_called()


class TestInvalidRequest:
    """Tests for bodies that do not decode as an email request."""

    @pytest.mark.parametrize("body", [
        b"",
        b"{",
        b"not json",
        b"[]",
        b"null",
        b'"a@example.com"',
        b'{"to": 5, "subject": "Hi", "body": "Hello"}',
        b'{"to": ["a@example.com"], "subject": "Hi", "body": "Hello"}',
    ])
    def test_malformed_body_rejected(self, test_client, mock_smtp_client, body):
        """Test malformed JSON returns 400 without touching SMTP."""
        response = test_client.post(
            "/send", content=body, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Invalid request"
        mock_smtp_client.send_email.assert_not_called()


class TestSendEndpoint:
    """Tests for POST /send with a mocked SMTP client."""

    def test_send_success(self, test_client, mock_smtp_client):
        """Test a valid request is relayed once and answered with ok."""
        response = test_client.post("/send", json=VALID_REQUEST)

        assert response.status_code == 200
        assert response.text == '{"status": "ok"}'
        assert response.headers["content-type"] == "application/json"
        mock_smtp_client.send_email.assert_called_once_with(
            "a@example.com", "Hi", "Hello"
        )

    def test_missing_fields_pass_through_empty(self, test_client, mock_smtp_client):
        """Test absent or null fields reach the client as empty strings."""
        response = test_client.post("/send", json={"to": "a@example.com", "body": None})

        assert response.status_code == 200
        mock_smtp_client.send_email.assert_called_once_with("a@example.com", "", "")

    def test_unknown_fields_ignored(self, test_client, mock_smtp_client):
        """Test extra keys in the body are ignored."""
        response = test_client.post(
            "/send", json={**VALID_REQUEST, "cc": "b@example.com"}
        )

        assert response.status_code == 200
        mock_smtp_client.send_email.assert_called_once_with(
            "a@example.com", "Hi", "Hello"
        )

    def test_no_address_validation(self, test_client, mock_smtp_client):
        """Test a malformed address is left to the SMTP server."""
        response = test_client.post(
            "/send", json={**VALID_REQUEST, "to": "not-an-email"}
        )

        assert response.status_code == 200
        mock_smtp_client.send_email.assert_called_once()

    def test_delivery_failure(self, test_client, mock_smtp_client):
        """Test a delivery error returns 500 with the client's message."""
        mock_smtp_client.send_email.side_effect = SMTPClientError(
            "Failed to send email to a@example.com: 550 No such user",
            recipient="a@example.com",
        )

        response = test_client.post("/send", json=VALID_REQUEST)

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Failed to send email to a@example.com: 550 No such user"

    def test_config_not_reloaded_per_request(self, test_client):
        """Test requests use the startup config instead of reloading it."""
        with patch("mail_relay.api.main.load_config") as mock_load:
            test_client.post("/send", json=VALID_REQUEST)
            test_client.post("/send", json=VALID_REQUEST)

        mock_load.assert_not_called()


class TestRelayEndToEnd:
    """Tests for POST /send through the real SMTPClient on a mock session."""

    def test_concrete_scenario(self, relay_client, patched_smtp, mock_smtp_connection):
        """Test the accepted message reaches the server exactly once."""
        response = relay_client.post("/send", json=VALID_REQUEST)

        assert response.status_code == 200
        assert response.text == '{"status": "ok"}'
        mock_smtp_connection.sendmail.assert_called_once()
        from_addr, to_addrs, message = mock_smtp_connection.sendmail.call_args[0]
        assert from_addr == "noreply@test.com"
        assert to_addrs == ["a@example.com"]
        assert b"To: a@example.com\r\n" in message
        assert b"Subject: Hi\r\n" in message
        assert message.endswith(b"\r\n\r\nHello")

    def test_rejection_reason_returned(
        self, relay_client, mock_smtp_connection, rejected_recipient
    ):
        """Test a server rejection returns 500 with the reason."""
        mock_smtp_connection.sendmail.side_effect = rejected_recipient

        response = relay_client.post("/send", json=VALID_REQUEST)

        assert response.status_code == 500
        assert "No such user" in response.text

    def test_auth_failure_returned(self, relay_client, mock_smtp_connection):
        """Test an authentication error returns 500 with the reason."""
        mock_smtp_connection.auth.side_effect = smtplib.SMTPAuthenticationError(
            535, b"Bad credentials"
        )

        response = relay_client.post("/send", json=VALID_REQUEST)

        assert response.status_code == 500
        assert "535 Bad credentials" in response.text
        mock_smtp_connection.sendmail.assert_not_called()

    def test_empty_smtp_host_is_delivery_failure(self, relay_config, patched_smtp):
        """Test missing configuration surfaces as 500, not a crash."""
        from fastapi.testclient import TestClient

        from mail_relay.api.main import create_app

        relay_config.SMTP_SERVER = ""
        with TestClient(create_app(relay_config), raise_server_exceptions=False) as client:
            response = client.post("/send", json=VALID_REQUEST)

        assert response.status_code == 500
        assert "not configured" in response.text
        patched_smtp.assert_not_called()


class TestHealthEndpoint:
    """Tests for GET /health endpoint."""

    def test_health_check_configured(self, test_client):
        """Test health reports ok when every SMTP setting is present."""
        response = test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["smtp"] == "ok"
        assert data["version"] == "1.0.0-test"
        assert "timestamp" in data

    def test_health_check_not_configured(self, relay_config, mock_smtp_client):
        """Test health flags a missing SMTP setting."""
        from fastapi.testclient import TestClient

        from mail_relay.api.main import create_app

        relay_config.SMTP_PASSWORD = ""
        with TestClient(create_app(relay_config, smtp_client=mock_smtp_client)) as client:
            response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["smtp"] == "not_configured"


class TestErrorResponses:
    """Tests for error response format."""

    def test_unknown_path_plain_text(self, test_client):
        """Test unknown paths return a plain-text 404."""
        response = test_client.post("/unknown", json=VALID_REQUEST)

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Not Found"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
