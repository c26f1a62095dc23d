"""Mail Relay - HTTP to SMTP email relay.

Accepts ``POST /send`` with a JSON body ``{"to", "subject", "body"}`` and
submits the message synchronously to the configured SMTP server.

Architecture:
    - Config loaded once at startup from a .env file and the environment
    - SMTP client wrapper (one connection per message, PLAIN auth)
    - FastAPI application with plain-text error responses

Modules:
    - core: Exceptions, logger
    - config: Pydantic v2 settings and the env file loader
    - models: SMTP configuration record
    - clients: External integrations (SMTP)
    - api: HTTP endpoints and entry point
    - scripts: Configuration and connectivity checks

Usage:
    # Run the relay
    python -m mail_relay --env-file .env

    # Send programmatically
    from mail_relay import SMTPClient, load_config

    config = load_config(".env")
    SMTPClient(config.get_smtp_config()).send_email(
        "a@example.com", "Hi", "Hello"
    )

Author: Odiseo
Created: 2026-10-19
Version: 1.0.0
"""

__version__ = "1.0.0"

# Clients
from mail_relay.clients import SMTPClient

# Configuration
from mail_relay.config import RelayConfig, load_config

# Core utilities
from mail_relay.core import (
    MailRelayError,
    RelayConfigError,
    SMTPClientError,
    get_logger,
)

# Models
from mail_relay.models import SMTPConfig

__all__ = [
    # Version
    "__version__",
    # Core exceptions
    "MailRelayError",
    "RelayConfigError",
    "SMTPClientError",
    "get_logger",
    # Configuration
    "RelayConfig",
    "load_config",
    # Models
    "SMTPConfig",
    # Clients
    "SMTPClient",
]
