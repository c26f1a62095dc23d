"""Centralized logging configuration for the mail relay.

Provides the logger factory with file rotation, console output and
consistent formatting across all mail relay components.

Features:
    - Console handler on stdout, optional rotating file handlers
    - Separate error log file (ERROR and above)
    - Configurable log levels per module
    - Startup banner with configuration summary

Author: Odiseo
Created: 2026-10-19
Version: 1.0.0
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from mail_relay.config.settings import RelayConfig

# Global configuration
_ROOT_LOGGER: logging.Logger | None = None
_LOG_DIR = Path.cwd() / "logs"
_LOG_FORMAT_DETAILED = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
)
_LOG_FORMAT_SIMPLE = "%(asctime)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Module-level logger configuration
_MODULE_LEVELS = {
    "mail_relay.clients": logging.DEBUG,
    "mail_relay.api": logging.DEBUG,
    "mail_relay.config": logging.INFO,
}

# ============================================================================
# ANSI Color Codes
# ============================================================================
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "magenta": "\033[35m",
    "b_cyan": "\033[96m",
    "b_green": "\033[92m",
    "b_yellow": "\033[93m",
}

_B = COLORS["bold"]
_R = COLORS["reset"]
_BC = COLORS["b_cyan"]
_BG = COLORS["b_green"]
_BY = COLORS["b_yellow"]

# fmt: off
BANNER = f"""
{_B}{_BC} ██████╗ {_BG}███████╗{_BY}██╗      █████╗ ██╗   ██╗{_R}
{_BC} ██╔══██╗{_BG}██╔════╝{_BY}██║     ██╔══██╗╚██╗ ██╔╝{_R}
{_BC} ██████╔╝{_BG}█████╗  {_BY}██║     ███████║ ╚████╔╝ {_R}
{_BC} ██╔══██╗{_BG}██╔══╝  {_BY}██║     ██╔══██║  ╚██╔╝  {_R}
{_BC} ██║  ██║{_BG}███████╗{_BY}███████╗██║  ██║   ██║   {_R}
{_BC} ╚═╝  ╚═╝{_BG}╚══════╝{_BY}╚══════╝╚═╝  ╚═╝   ╚═╝   {_R}
{_R}"""  # noqa: E501
# fmt: on


def mask_secret(secret: str) -> str:
    """Mask a secret for display, showing only first and last char.

    Args:
        secret: Secret to mask.

    Returns:
        Masked string.
    """
    if not secret:
        return "(not set)"
    if len(secret) <= 2:
        return "***"
    return f"{secret[0]}{'*' * (len(secret) - 2)}{secret[-1]}"


def print_banner() -> None:
    """Print the service startup banner."""
    print(BANNER)
    print(f"{COLORS['dim']}{'─' * 72}{COLORS['reset']}")
    print(f"{COLORS['cyan']}{COLORS['bold']}  SMTP Mail Relay{COLORS['reset']}")
    print(f"{COLORS['dim']}{'─' * 72}{COLORS['reset']}\n")


def print_config_summary(settings: "RelayConfig") -> None:
    """Print a formatted configuration summary organized by categories.

    Args:
        settings: RelayConfig instance with loaded configuration.
    """
    c = COLORS

    def _line(label: str, value: str, color: str = "cyan") -> None:
        print(f"  {c['dim']}│{c['reset']} {label:<26} {c[color]}{value}{c['reset']}")

    def _header(title: str, color: str) -> None:
        print(f"\n  {c[color]}▶ {title}{c['reset']}")
        print(f"  {c['dim']}├{'─' * 50}{c['reset']}")

    def _value(value: str) -> tuple[str, str]:
        return (value, "cyan") if value else ("(not set)", "yellow")

    _header("Service Configuration", "green")
    _line("Service Name", settings.SERVICE_NAME)
    _line("Version", settings.SERVICE_VERSION)
    _line("Host", settings.API_HOST)
    _line("Port", str(settings.PORT))

    _header("SMTP Configuration", "magenta")
    _line("Server", *_value(settings.SMTP_SERVER))
    _line("Port", *_value(settings.SMTP_PORT))
    _line("Username", *_value(settings.SMTP_USERNAME))
    _line(
        "Password",
        mask_secret(settings.SMTP_PASSWORD),
        "cyan" if settings.SMTP_PASSWORD else "yellow",
    )
    _line("From Email", *_value(settings.FROM_EMAIL))
    _line("Timeout", f"{settings.SMTP_TIMEOUT}s")

    _header("Logging Configuration", "yellow")
    _line("Level", settings.LOG_LEVEL, "green")
    _line("Log to File", str(settings.LOG_TO_FILE).lower())
    _line("Directory", settings.LOG_DIR)

    print(f"\n{c['dim']}{'─' * 72}{c['reset']}")
    print(
        f"  {c['green']}{c['bold']}✓ Relay ready{c['reset']} "
        f"{c['dim']}│{c['reset']} "
        f"POST {c['cyan']}http://localhost:{settings.PORT}/send{c['reset']}"
    )
    print(f"{c['dim']}{'─' * 72}{c['reset']}\n")


def setup_logging(
    log_dir: Path | str | None = None,
    log_level: str = "INFO",
    file_level: str = "DEBUG",
    console_level: str | None = None,
    enable_file: bool = False,
    settings: Optional["RelayConfig"] = None,
) -> None:
    """Configure root logger with console and optional file handlers.

    Should be called once at process startup, after the configuration has
    been loaded.

    Args:
        log_dir: Directory for log files. Defaults to ./logs.
        log_level: Root logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file_level: File handler level (usually DEBUG for comprehensive logging).
        console_level: Console handler level. Defaults to log_level.
        enable_file: Whether to write logs to rotating files.
        settings: Optional RelayConfig; when given, the banner and
            configuration summary are printed.

    Example:
        setup_logging(
            log_level=config.LOG_LEVEL,
            enable_file=config.LOG_TO_FILE,
            log_dir=config.LOG_DIR,
            settings=config,
        )
    """
    global _ROOT_LOGGER, _LOG_DIR

    _LOG_DIR = Path(log_dir) if log_dir else Path.cwd() / "logs"

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(
        getattr(logging, (console_level or log_level).upper(), logging.INFO)
    )
    console_handler.setFormatter(
        logging.Formatter(_LOG_FORMAT_SIMPLE, datefmt=_DATE_FORMAT)
    )
    root_logger.addHandler(console_handler)

    if enable_file:
        _LOG_DIR.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            _LOG_DIR / "mail_relay.log",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(getattr(logging, file_level.upper(), logging.DEBUG))
        file_handler.setFormatter(
            logging.Formatter(_LOG_FORMAT_DETAILED, datefmt=_DATE_FORMAT)
        )
        root_logger.addHandler(file_handler)

        error_handler = logging.handlers.RotatingFileHandler(
            _LOG_DIR / "mail_relay.error.log",
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=3,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(
            logging.Formatter(_LOG_FORMAT_DETAILED, datefmt=_DATE_FORMAT)
        )
        root_logger.addHandler(error_handler)

    for module_name, level in _MODULE_LEVELS.items():
        logging.getLogger(module_name).setLevel(level)

    _ROOT_LOGGER = root_logger

    if settings:
        print_banner()
        print_config_summary(settings)


def get_logger(name: str, log_level: str | None = None) -> logging.Logger:
    """Get a logger instance for a module.

    Call setup_logging() once at startup for full configuration.

    Args:
        name: Logger name (typically __name__ of calling module).
        log_level: Optional override for logger level.

    Returns:
        Logger instance ready for use.

    Example:
        logger = get_logger(__name__)
        logger.info("Email sent to a@example.com")
    """
    logger = logging.getLogger(name)

    if log_level:
        logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    return logger


def log_context(
    operation: str,
    recipient: str | None = None,
    **kwargs,
) -> str:
    """Format a log context string with metadata.

    Args:
        operation: Operation name (e.g., "send_email").
        recipient: Recipient email if applicable.
        **kwargs: Additional context key-value pairs.

    Returns:
        Formatted context string for logging.

    Example:
        msg = log_context("send_email", recipient="a@example.com", smtp="mx:587")
        # send_email | →a@example.com (smtp=mx:587)
    """
    context_parts = [operation]

    if recipient:
        context_parts.append(f"→{recipient}")

    context = " | ".join(context_parts)

    if kwargs:
        extra = ", ".join(f"{k}={v}" for k, v in kwargs.items())
        context = f"{context} ({extra})"

    return context
