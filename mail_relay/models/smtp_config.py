"""SMTP configuration model.

Defines the Pydantic model handed to SMTPClient.

Author: Odiseo
Created: 2026-10-19
Version: 1.0.0
"""

from pydantic import BaseModel, Field


class SMTPConfig(BaseModel):
    """SMTP server configuration model.

    Values are passed through as configured; an empty host or an unusable
    port makes the send attempt fail rather than the model.

    Attributes:
        host: SMTP server hostname.
        port: SMTP server port as configured (numeric string).
        username: SMTP authentication username (empty disables AUTH).
        password: SMTP authentication password.
        from_email: Sender address for envelope and header.
        timeout: Connection timeout in seconds.
    """

    host: str = Field(default="", description="SMTP server hostname")
    port: str = Field(default="", description="SMTP server port")
    username: str = Field(default="", description="SMTP authentication username")
    password: str = Field(default="", description="SMTP authentication password")
    from_email: str = Field(default="", description="Sender email address")
    timeout: int = Field(
        default=30, ge=1, le=300, description="Connection timeout (seconds)"
    )

    @property
    def address(self) -> str:
        """Return the ``host:port`` string used in logs and errors."""
        return f"{self.host}:{self.port}"
