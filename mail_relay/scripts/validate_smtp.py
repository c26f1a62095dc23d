#!/usr/bin/env python3
"""Validate SMTP configuration and connectivity.

Tests SMTP server reachability, TLS and authentication.

Usage:
    python -m mail_relay.scripts.validate_smtp
    python -m mail_relay.scripts.validate_smtp --verbose
    python -m mail_relay.scripts.validate_smtp --test-email user@example.com
"""

from __future__ import annotations

import argparse
import sys

from mail_relay.clients.smtp import SMTPClient
from mail_relay.config import RelayConfig, load_config
from mail_relay.core.exceptions import RelayConfigError
from mail_relay.core.logger import get_logger, mask_secret, setup_logging

logger = get_logger(__name__)


def print_config(config: RelayConfig) -> None:
    """Print loaded SMTP configuration (with credentials masked).

    Args:
        config: RelayConfig instance.
    """
    print("\n📋 Loaded Configuration:")
    print(f"  SMTP Server:    {config.SMTP_SERVER or '(not set)'}")
    print(f"  SMTP Port:      {config.SMTP_PORT or '(not set)'}")
    print(f"  SMTP Username:  {config.SMTP_USERNAME or '(not set)'}")
    print(f"  SMTP Password:  {mask_secret(config.SMTP_PASSWORD)}")
    print(f"  From Email:     {config.FROM_EMAIL or '(not set)'}")
    print(f"  Timeout:        {config.SMTP_TIMEOUT}s")


def print_recommendations(success: bool, test_email_success: bool | None = None) -> None:
    """Print recommendations based on test results.

    Args:
        success: Whether SMTP connection test passed.
        test_email_success: Whether test email was sent (None if not attempted).
    """
    print("\n" + "-" * 80)
    print("📌 Recommendations:")

    if success:
        if test_email_success is None:
            print("  ✅ SMTP configuration is valid and connection works!")
            print("  → Start the relay with: python -m mail_relay")
            print("  → Or optionally test with: --test-email your-email@example.com")
        elif test_email_success:
            print("  ✅ SMTP configuration is valid and test email was delivered!")
            print("  → Start the relay with: python -m mail_relay")
        else:
            print("  ⚠️  SMTP connection works but test email delivery failed")
            print("  → Check the recipient address and FROM_EMAIL")
            print("  → Verify the server allows FROM_EMAIL for SMTP_USERNAME")
    else:
        print("  ❌ SMTP connection failed. Troubleshooting steps:")
        print("  1. Verify SMTP_SERVER and SMTP_PORT in .env file")
        print("  2. Verify SMTP_USERNAME and SMTP_PASSWORD")
        print("  3. PLAIN auth needs STARTTLS unless the server is localhost")
        print("  4. Check that outbound TCP to the SMTP port is allowed")
        print("  5. Run again with --verbose to see the SMTP dialog steps")


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        0 if all tests passed, 1 if any test failed.
    """
    parser = argparse.ArgumentParser(
        description="Validate mail relay SMTP configuration and connectivity.",
    )
    parser.add_argument("--env-file", default=".env", metavar="PATH")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging output",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Minimal output (only errors and results)",
    )
    parser.add_argument(
        "--test-email",
        "-t",
        type=str,
        metavar="EMAIL",
        help="Send a test email to the specified address",
    )
    args = parser.parse_args(argv)

    setup_logging(
        log_level="DEBUG" if args.verbose else "INFO",
        console_level="DEBUG" if args.verbose else "WARNING" if args.quiet else "INFO",
    )

    try:
        config = load_config(args.env_file)
    except RelayConfigError as e:
        print(f"❌ {e}")
        return 1

    if not args.quiet:
        print_config(config)

    try:
        config.validate_smtp_config()
    except RelayConfigError as e:
        print(f"\n❌ {e}")
        return 1

    client = SMTPClient(config.get_smtp_config())

    print("\n🧪 Testing SMTP Connection...")
    connection_success = client.validate_connection()
    print("✅ SMTP connection test PASSED" if connection_success else "❌ SMTP connection test FAILED")

    test_email_success = None
    if args.test_email:
        print(f"\n📧 Sending Test Email to: {args.test_email}")
        test_email_success = client.send_test_email(args.test_email)

    if not args.quiet:
        print_recommendations(connection_success, test_email_success)

    if not connection_success or test_email_success is False:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
