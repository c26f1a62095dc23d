"""Models module for the mail relay.

Defines the Pydantic v2 configuration record passed to the SMTP client.

Author: Odiseo
Created: 2026-10-19
Version: 1.0.0
"""

from mail_relay.models.smtp_config import SMTPConfig

__all__ = ["SMTPConfig"]
