"""Mail Relay API.

FastAPI application relaying HTTP requests to an SMTP server:
- POST /send: Send one email synchronously
- GET /health: Service health check

Error responses are plain text; only a successful send returns JSON.

Author: Odiseo
Version: 1.0.0
"""

from __future__ import annotations

import argparse
import json
import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from mail_relay.api.schemas import EmailRequest, HealthResponse, SendResponse
from mail_relay.clients.smtp import SMTPClient
from mail_relay.config import RelayConfig, load_config
from mail_relay.core.exceptions import RelayConfigError, SMTPClientError
from mail_relay.core.logger import get_logger, setup_logging

logger = get_logger(__name__)


# =============================================================================
# Application State (Dependency Injection)
# =============================================================================
@dataclass
class AppState:
    """Application state container for dependency injection."""

    config: RelayConfig
    smtp_client: SMTPClient


def _get_app_state(request: Request) -> AppState:
    app_state: AppState | None = getattr(request.app.state, "relay", None)
    if not app_state:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not initialized",
        )
    return app_state


def get_config(request: Request) -> RelayConfig:
    """Dependency: Get application configuration."""
    return _get_app_state(request).config


def get_smtp_client(request: Request) -> SMTPClient:
    """Dependency: Get the SMTP client built at startup."""
    return _get_app_state(request).smtp_client


# =============================================================================
# Responses
# =============================================================================
class StatusJSONResponse(JSONResponse):
    """JSON response rendered with the default ``json.dumps`` separators.

    Produces ``{"status": "ok"}`` rather than the compact form.
    """

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False).encode("utf-8")


async def plain_text_error_handler(
    request: Request, exc: StarletteHTTPException
) -> PlainTextResponse:
    """Render every HTTP error, including routing 404/405, as plain text."""
    return PlainTextResponse(
        str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


# =============================================================================
# API Endpoints
# =============================================================================
router = APIRouter()


@router.post(
    "/send",
    response_class=StatusJSONResponse,
    response_model=SendResponse,
    responses={
        400: {"description": "Invalid request", "content": {"text/plain": {}}},
        405: {"description": "Method not allowed", "content": {"text/plain": {}}},
        500: {"description": "SMTP delivery failed", "content": {"text/plain": {}}},
    },
)
async def send_email(
    request: Request,
    smtp_client: Annotated[SMTPClient, Depends(get_smtp_client)],
) -> StatusJSONResponse:
    """Relay one email to the configured SMTP server.

    The JSON body ``{"to", "subject", "body"}`` is decoded before any SMTP
    interaction. The blocking send runs on the thread pool so a stalled
    SMTP dialog only holds this request.
    """
    payload = await request.body()
    try:
        email = EmailRequest.model_validate_json(payload)
    except ValidationError as e:
        logger.debug(f"Rejected request body: {e.error_count()} error(s)")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid request",
        ) from None

    try:
        await run_in_threadpool(
            smtp_client.send_email, email.to, email.subject, email.body
        )
    except SMTPClientError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from None

    return StatusJSONResponse(SendResponse().model_dump())


@router.get("/health", response_model=HealthResponse)
async def health_check(
    config: Annotated[RelayConfig, Depends(get_config)],
) -> HealthResponse:
    """Check service health.

    Reports whether every SMTP setting is present; makes no SMTP connection.
    """
    smtp_status = "not_configured" if config.missing_smtp_settings() else "ok"
    return HealthResponse(
        status="ok",
        smtp=smtp_status,
        version=config.SERVICE_VERSION,
    )


# =============================================================================
# FastAPI Application
# =============================================================================
def create_app(config: RelayConfig, smtp_client: SMTPClient | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Configuration loaded once at process start.
        smtp_client: Optional client override; built from config if None.

    Returns:
        Configured FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.relay = AppState(
            config=config,
            smtp_client=smtp_client or SMTPClient(config.get_smtp_config()),
        )

        yield  # Application runs here

        logger.info(f"{config.SERVICE_NAME} stopped")
        app.state.relay = None

    application = FastAPI(
        title=config.SERVICE_NAME,
        description="HTTP to SMTP mail relay",
        version=config.SERVICE_VERSION,
        lifespan=lifespan,
    )
    application.add_exception_handler(StarletteHTTPException, plain_text_error_handler)
    application.include_router(router)

    return application


# =============================================================================
# Entry Point
# =============================================================================
def run(argv: list[str] | None = None) -> None:
    """Load configuration once and run the API server.

    Exits with status 1 when the configuration cannot be loaded.
    """
    import uvicorn

    parser = argparse.ArgumentParser(description="HTTP to SMTP mail relay.")
    parser.add_argument(
        "--env-file",
        default=".env",
        metavar="PATH",
        help="Env file applied to the process environment (default: .env)",
    )
    args = parser.parse_args(argv)

    try:
        config = load_config(args.env_file)
    except RelayConfigError as e:
        setup_logging()
        logger.critical(str(e))
        sys.exit(1)

    setup_logging(
        log_dir=config.LOG_DIR,
        log_level=config.LOG_LEVEL,
        enable_file=config.LOG_TO_FILE,
        settings=config,
    )

    missing = config.missing_smtp_settings()
    if missing:
        logger.warning(
            f"SMTP settings not set: {', '.join(missing)}. Sends will fail."
        )

    logger.info(f"Server started with SMTP: {config.SMTP_SERVER}")
    logger.info(f"Listening on :{config.PORT}")
    uvicorn.run(
        create_app(config),
        host=config.API_HOST,
        port=config.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    run()
