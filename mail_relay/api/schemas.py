"""API request and response schemas.

Pydantic models for API decoding and serialization.

Version: 1.0.0
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EmailRequest(BaseModel):
    """Request model for POST /send.

    Field contents are not validated: absent or null fields decode as empty
    strings and the SMTP server is left to reject unusable values.
    """

    model_config = ConfigDict(extra="ignore")

    to: str = Field(default="", description="Recipient email address")
    subject: str = Field(default="", description="Email subject line")
    body: str = Field(default="", description="Plain-text email body")

    @field_validator("to", "subject", "body", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        """Decode JSON null as an empty string."""
        return "" if v is None else v


class SendResponse(BaseModel):
    """Response model for POST /send."""

    status: str = Field(default="ok", description="Delivery status")


class HealthResponse(BaseModel):
    """Response model for GET /health."""

    status: str = Field(description="Overall service status")
    smtp: str = Field(description="SMTP configuration status")
    version: str = Field(description="Service version")
    timestamp: datetime = Field(default_factory=lambda: datetime.now())
