"""Custom exceptions for the mail relay.

Defines specific exception types for configuration and delivery failures
so the entry point and the API can map each one to the right outcome.

Author: Odiseo
Created: 2026-10-19
Version: 1.0.0
"""


class MailRelayError(Exception):
    """Base exception for all mail relay errors.

    Example:
        try:
            client.send_email(...)
        except MailRelayError as e:
            logger.error(f"Mail relay error: {e}")
    """

    pass


class RelayConfigError(MailRelayError):
    """Exception raised for configuration errors.

    Raised when the env file is missing or a variable holds an invalid value.
    Fatal at startup: the process exits before serving traffic.

    Example:
        raise RelayConfigError("Error loading .env file")
    """

    pass


class SMTPClientError(MailRelayError):
    """Exception raised for SMTP connection/delivery failures.

    Covers network errors, authentication failures and server rejections.
    The message keeps the server's reason so it can be returned to the caller.

    Attributes:
        message (str): Description of the SMTP error.
        recipient (str, optional): Recipient of the failed delivery.

    Example:
        raise SMTPClientError(
            "Failed to send email to a@example.com: 550 No such user",
            recipient="a@example.com",
        )
    """

    def __init__(self, message: str, recipient: str | None = None):
        """Initialize SMTP client error.

        Args:
            message: Error description.
            recipient: Optional recipient address of the failed delivery.
        """
        super().__init__(message)
        self.recipient = recipient
