"""Validate .env file completeness against configuration requirements.

Checks that all variables the relay needs to send mail are present.

Usage:
    python -m mail_relay.scripts.validate_env
    python -m mail_relay.scripts.validate_env --env-file /etc/mail-relay.env

Author: Odiseo
Created: 2026-10-19
"""

import argparse
import os
import sys
from pathlib import Path

import dotenv

# Required configuration variables (PORT falls back to 8080)
REQUIRED_VARS = {
    "SMTP_SERVER",
    "SMTP_PORT",
    "SMTP_USERNAME",
    "SMTP_PASSWORD",
    "FROM_EMAIL",
}


def validate_env() -> tuple[bool, list[str]]:
    """Validate the environment has all required variables.

    Returns:
        Tuple of (is_valid, missing_vars).
    """
    missing = [var for var in sorted(REQUIRED_VARS) if not os.getenv(var)]
    return len(missing) == 0, missing


def main(argv: list[str] | None = None) -> int:
    """Main entry point for validation script.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    parser = argparse.ArgumentParser(
        description="Check that the env file defines every SMTP setting."
    )
    parser.add_argument("--env-file", default=".env", metavar="PATH")
    args = parser.parse_args(argv)

    env_file = Path(args.env_file)
    if not env_file.is_file():
        print(f"❌ {env_file} not found")
        print("\n📝 Please copy .env.example to .env and fill in the values")
        return 1

    dotenv.load_dotenv(env_file)

    is_valid, missing_vars = validate_env()

    if is_valid:
        print(f"✅ {env_file} is valid - all required variables present")
        return 0

    print(f"❌ {env_file} is missing required variables:")
    for var in missing_vars:
        print(f"   - {var}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
