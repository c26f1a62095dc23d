"""Configuration module for the mail relay.

Loads settings from the env file and the process environment.

Author: Odiseo
Created: 2026-10-19
Version: 1.0.0
"""

from mail_relay.config.settings import RelayConfig, load_config

__all__ = ["RelayConfig", "load_config"]
