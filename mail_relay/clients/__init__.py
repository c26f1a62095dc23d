"""Clients module for the mail relay.

Contains the integration with the external SMTP server.

Author: Odiseo
Created: 2026-10-19
Version: 1.0.0
"""

from mail_relay.clients.smtp import SMTPClient, build_message

__all__ = ["SMTPClient", "build_message"]
