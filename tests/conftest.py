"""Pytest configuration and fixtures for mail relay tests.

Provides reusable fixtures for unit and integration tests including
a mocked SMTP session, a mocked SMTPClient and a FastAPI test client.

Author: Odiseo
Version: 1.0.0
"""

from __future__ import annotations

import os
import smtplib
from typing import Generator
from unittest.mock import MagicMock, patch

import pytest

from mail_relay.clients.smtp import SMTPClient
from mail_relay.config import RelayConfig
from mail_relay.models.smtp_config import SMTPConfig

RELAY_ENV_VARS = (
    "SMTP_SERVER",
    "SMTP_PORT",
    "SMTP_USERNAME",
    "SMTP_PASSWORD",
    "FROM_EMAIL",
    "PORT",
    "API_HOST",
    "SMTP_TIMEOUT",
    "LOG_LEVEL",
    "LOG_TO_FILE",
    "LOG_DIR",
)


# =============================================================================
# Environment Fixtures
# =============================================================================
@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Remove relay variables from os.environ and restore it afterwards."""
    with patch.dict(os.environ):
        for name in RELAY_ENV_VARS:
            os.environ.pop(name, None)
        yield


@pytest.fixture
def env_file(tmp_path) -> str:
    """Write a complete .env file and return its path."""
    path = tmp_path / ".env"
    path.write_text(
        "SMTP_SERVER=smtp.test.com\n"
        "SMTP_PORT=587\n"
        "SMTP_USERNAME=relay@test.com\n"
        "SMTP_PASSWORD=testpassword\n"
        "FROM_EMAIL=noreply@test.com\n"
        "PORT=9090\n"
    )
    return str(path)


# =============================================================================
# Configuration Fixtures
# =============================================================================
@pytest.fixture
def relay_config(clean_env) -> RelayConfig:
    """Create a complete RelayConfig for testing."""
    return RelayConfig(
        SMTP_SERVER="smtp.test.com",
        SMTP_PORT="587",
        SMTP_USERNAME="relay@test.com",
        SMTP_PASSWORD="testpassword",
        FROM_EMAIL="noreply@test.com",
        SERVICE_VERSION="1.0.0-test",
    )


@pytest.fixture
def smtp_config() -> SMTPConfig:
    """Create an SMTPConfig for testing."""
    return SMTPConfig(
        host="smtp.test.com",
        port="587",
        username="relay@test.com",
        password="testpassword",
        from_email="noreply@test.com",
        timeout=30,
    )


# =============================================================================
# SMTP Fixtures
# =============================================================================
@pytest.fixture
def mock_smtp_connection() -> MagicMock:
    """Create a mock SMTP session advertising STARTTLS and AUTH."""
    smtp = MagicMock()
    smtp.connect.return_value = (220, b"smtp.test.com ESMTP")
    smtp.ehlo.return_value = (250, b"OK")
    smtp.has_extn.side_effect = lambda name: name.lower() in {"starttls", "auth"}
    smtp.starttls.return_value = (220, b"TLS ready")
    smtp.auth.return_value = (235, b"Authentication successful")
    smtp.sendmail.return_value = {}
    smtp.quit.return_value = (221, b"Bye")
    return smtp


@pytest.fixture
def patched_smtp(mock_smtp_connection: MagicMock) -> Generator[MagicMock, None, None]:
    """Patch smtplib.SMTP so every session is mock_smtp_connection."""
    with patch(
        "mail_relay.clients.smtp.smtplib.SMTP", return_value=mock_smtp_connection
    ) as smtp_class:
        yield smtp_class


@pytest.fixture
def rejected_recipient() -> smtplib.SMTPRecipientsRefused:
    """Server rejection for an unknown mailbox."""
    return smtplib.SMTPRecipientsRefused(
        {"a@example.com": (550, b"5.1.1 No such user")}
    )


@pytest.fixture
def mock_smtp_client() -> MagicMock:
    """Create a mock SMTPClient."""
    return MagicMock(spec=SMTPClient)


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================
@pytest.fixture
def test_client(relay_config: RelayConfig, mock_smtp_client: MagicMock):
    """Create a FastAPI test client with a mocked SMTP client."""
    from fastapi.testclient import TestClient

    from mail_relay.api.main import create_app

    app = create_app(relay_config, smtp_client=mock_smtp_client)

    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def relay_client(relay_config: RelayConfig, patched_smtp: MagicMock):
    """Create a FastAPI test client using the real SMTPClient on a mock session."""
    from fastapi.testclient import TestClient

    from mail_relay.api.main import create_app

    app = create_app(relay_config)

    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
