"""Mail relay configuration with Pydantic v2.

Manages SMTP connection parameters, HTTP listener and logging settings
loaded from the process environment after the env file has been applied.

Author: Odiseo
Created: 2026-10-19
Version: 1.0.0
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from mail_relay.core.exceptions import RelayConfigError
from mail_relay.models.smtp_config import SMTPConfig

# SMTP variables that must be non-empty for a send attempt to succeed
SMTP_SETTINGS = (
    "SMTP_SERVER",
    "SMTP_PORT",
    "SMTP_USERNAME",
    "SMTP_PASSWORD",
    "FROM_EMAIL",
)


class RelayConfig(BaseSettings):
    """Mail relay configuration.

    Read from environment variables. Settings are case-sensitive and unknown
    variables are ignored. SMTP values are deliberately not required to be
    non-empty: an incomplete configuration fails the send attempt, not startup.

    Attributes:
        SMTP_SERVER: SMTP server hostname.
        SMTP_PORT: SMTP server port, kept as a string.
        SMTP_USERNAME: SMTP authentication username.
        SMTP_PASSWORD: SMTP authentication password.
        FROM_EMAIL: Envelope and header sender address.
        SMTP_TIMEOUT: Seconds bounding the SMTP connection and dialog.
        API_HOST: HTTP bind address.
        PORT: HTTP listen port.
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        LOG_TO_FILE: Whether to log to rotating files.
        LOG_DIR: Directory for log files.
    """

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_ignore_empty=True,
        extra="ignore",
    )

    # ========================================================================
    # Service Configuration
    # ========================================================================
    SERVICE_NAME: str = Field(
        default="mail-relay",
        description="Name of the service",
    )
    SERVICE_VERSION: str = Field(
        default="1.0.0",
        description="Service version",
    )
    API_HOST: str = Field(
        default="0.0.0.0",
        description="HTTP bind address",
    )
    PORT: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="HTTP listen port",
    )

    # ========================================================================
    # SMTP Configuration
    # ========================================================================
    SMTP_SERVER: str = Field(
        default="",
        description="SMTP server hostname",
    )
    SMTP_PORT: str = Field(
        default="",
        description="SMTP server port",
    )
    SMTP_USERNAME: str = Field(
        default="",
        description="SMTP authentication username",
    )
    SMTP_PASSWORD: str = Field(
        default="",
        description="SMTP authentication password",
    )
    FROM_EMAIL: str = Field(
        default="",
        description="Sender email address",
    )
    SMTP_TIMEOUT: int = Field(
        default=30,
        ge=1,
        le=300,
        description="SMTP connection timeout in seconds",
    )

    # ========================================================================
    # Logging Configuration
    # ========================================================================
    LOG_LEVEL: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level",
    )
    LOG_TO_FILE: bool = Field(
        default=False,
        description="Whether to log to file",
    )
    LOG_DIR: str = Field(
        default="./logs",
        description="Directory for log files",
    )

    def missing_smtp_settings(self) -> list[str]:
        """Return the names of SMTP settings that are empty."""
        return [name for name in SMTP_SETTINGS if not getattr(self, name).strip()]

    def validate_smtp_config(self) -> None:
        """Validate complete SMTP configuration.

        Raises:
            RelayConfigError: If any SMTP setting is empty.
        """
        missing_fields = self.missing_smtp_settings()
        if missing_fields:
            raise RelayConfigError(
                f"Required SMTP settings missing: {', '.join(missing_fields)}. "
                f"Set these environment variables to enable email sending."
            )

    def get_smtp_config(self) -> SMTPConfig:
        """Get the SMTP settings as the record consumed by SMTPClient."""
        return SMTPConfig(
            host=self.SMTP_SERVER,
            port=self.SMTP_PORT,
            username=self.SMTP_USERNAME,
            password=self.SMTP_PASSWORD,
            from_email=self.FROM_EMAIL,
            timeout=self.SMTP_TIMEOUT,
        )


def load_config(env_file: str | Path = ".env") -> RelayConfig:
    """Load the env file into the process environment and read the config.

    Variables already present in the environment take precedence over the
    file's values.

    Args:
        env_file: Path of the env file to apply.

    Returns:
        Loaded RelayConfig.

    Raises:
        RelayConfigError: If the env file is missing or a value is invalid.
    """
    path = Path(env_file)
    if not path.is_file():
        raise RelayConfigError(f"Error loading {path} file")

    load_dotenv(path, override=False)

    try:
        return RelayConfig()
    except ValidationError as e:
        raise RelayConfigError(f"Invalid configuration in {path}: {e}") from e
