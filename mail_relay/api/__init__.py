"""API module for the mail relay.

Exposes the FastAPI application factory and the server entry point.

Author: Odiseo
Created: 2026-10-19
Version: 1.0.0
"""

from mail_relay.api.main import create_app, run

__all__ = ["create_app", "run"]
