"""Core module for the mail relay.

Provides exceptions and logging configuration.

Author: Odiseo
Created: 2026-10-19
Version: 1.0.0
"""

from mail_relay.core.exceptions import (
    MailRelayError,
    RelayConfigError,
    SMTPClientError,
)
from mail_relay.core.logger import (
    get_logger,
    log_context,
    mask_secret,
    setup_logging,
)

__all__ = [
    # Exceptions
    "MailRelayError",
    "RelayConfigError",
    "SMTPClientError",
    # Logging
    "get_logger",
    "setup_logging",
    "log_context",
    "mask_secret",
]
