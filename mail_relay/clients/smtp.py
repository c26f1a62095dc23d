"""SMTP client for email delivery.

Submits a single message per call to the configured SMTP server:
connect, EHLO, STARTTLS when offered, PLAIN authentication, one envelope,
QUIT. Every failure is raised as SMTPClientError carrying the server's reason.

Author: Odiseo
Version: 1.0.0
"""

from __future__ import annotations

import smtplib

from mail_relay.core.exceptions import SMTPClientError
from mail_relay.core.logger import get_logger, log_context
from mail_relay.models.smtp_config import SMTPConfig

logger = get_logger(__name__)

# Hosts that may receive PLAIN credentials without TLS
LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})


def build_message(recipient: str, subject: str, body: str) -> str:
    """Build the minimal message: To and Subject headers, blank line, body."""
    return f"To: {recipient}\r\nSubject: {subject}\r\n\r\n{body}"


def describe_error(error: Exception) -> str:
    """Render an smtplib error with the server's code and reply text.

    Args:
        error: Exception raised during the SMTP dialog.

    Returns:
        Human-readable reason, e.g. ``550 No such user``.
    """
    if isinstance(error, smtplib.SMTPRecipientsRefused):
        return "; ".join(
            f"{rcpt}: {_reply_text(code, text)}"
            for rcpt, (code, text) in error.recipients.items()
        )
    if isinstance(error, smtplib.SMTPResponseException):
        return _reply_text(error.smtp_code, error.smtp_error)
    return str(error) or error.__class__.__name__


def _reply_text(code: int, text: bytes | str) -> str:
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    return f"{code} {text}".strip()


class SMTPClient:
    """SMTP email delivery client.

    Opens a fresh connection for every message; nothing is shared between
    sends, so one instance can serve concurrent requests.

    Attributes:
        config: SMTP configuration.
    """

    def __init__(self, smtp_config: SMTPConfig) -> None:
        """Initialize SMTP client.

        Args:
            smtp_config: SMTP configuration built once at startup.
        """
        self.config = smtp_config
        logger.info(f"SMTP Client initialized: {self.config.address}")

    def _port(self) -> int:
        try:
            return int(self.config.port)
        except ValueError:
            raise SMTPClientError(
                f"invalid SMTP port {self.config.port!r}"
            ) from None

    def _connect(self) -> smtplib.SMTP:
        """Open an SMTP session, upgrade to TLS when offered and authenticate.

        Returns:
            Connected and authenticated SMTP session.

        Raises:
            SMTPClientError: If the host is missing, the port is invalid or
                the connection, TLS upgrade or authentication fails.
            smtplib.SMTPException: Propagated from the dialog for the caller
                to wrap.
        """
        if not self.config.host:
            raise SMTPClientError("SMTP server address is not configured")
        port = self._port()

        logger.debug(f"Connecting to SMTP: {self.config.address}")
        smtp = smtplib.SMTP(timeout=self.config.timeout)
        try:
            smtp.connect(self.config.host, port)
            smtp.ehlo()

            tls = False
            if smtp.has_extn("starttls"):
                logger.debug("Starting TLS...")
                smtp.starttls()
                smtp.ehlo()
                tls = True

            if self.config.username:
                if not smtp.has_extn("auth"):
                    raise SMTPClientError("server doesn't support AUTH")
                if not tls and self.config.host not in LOCAL_HOSTS:
                    raise SMTPClientError("unencrypted connection")
                logger.debug("Authenticating (PLAIN)...")
                smtp.user = self.config.username
                smtp.password = self.config.password
                smtp.auth("PLAIN", smtp.auth_plain)
        except Exception:
            smtp.close()
            raise

        return smtp

    def send_email(self, recipient: str, subject: str, body: str) -> None:
        """Send one email via SMTP.

        Args:
            recipient: Recipient email address (envelope and To header).
            subject: Email subject line.
            body: Plain-text body.

        Raises:
            SMTPClientError: If email sending fails for any reason.
        """
        message = build_message(recipient, subject, body).encode("utf-8")
        context = log_context("send_email", recipient=recipient, smtp=self.config.address)

        try:
            smtp = self._connect()
            try:
                smtp.sendmail(self.config.from_email, [recipient], message)
            finally:
                try:
                    smtp.quit()
                except (smtplib.SMTPException, OSError) as e:
                    logger.debug(f"Error closing SMTP connection (non-critical): {e}")
                    smtp.close()
        except Exception as e:
            reason = describe_error(e)
            logger.error(f"Failed: {context}: {reason}")
            raise SMTPClientError(
                f"Failed to send email to {recipient}: {reason}",
                recipient=recipient,
            ) from e

        logger.info(f"Email sent to {recipient}")

    def validate_connection(self) -> bool:
        """Test SMTP connection and authentication.

        Returns:
            True if connection successful, False otherwise.
        """
        try:
            logger.info("Testing SMTP connection...")
            smtp = self._connect()
            smtp.quit()
            logger.info("SMTP connection test successful")
            return True

        except Exception as e:
            logger.error(f"SMTP connection test failed: {describe_error(e)}")
            return False

    def send_test_email(self, test_recipient: str) -> bool:
        """Send a test email to verify configuration.

        Args:
            test_recipient: Email address to send test email to.

        Returns:
            True if test email sent successfully, False otherwise.
        """
        try:
            logger.info(f"Sending test email to {test_recipient}...")
            self.send_email(
                recipient=test_recipient,
                subject="Mail Relay - Test Email",
                body="Mail relay is working correctly.",
            )
            return True

        except SMTPClientError as e:
            logger.error(f"Test email failed: {e}")
            return False
