# Centralized logging configuration for the task_fixtures package.

import logging
import sys
from typing import Dict, List, Mapping, Optional

from task_fixtures.settings import Settings

# Recommended format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Default level if LOG_LEVEL env var is not set
DEFAULT_LOG_LEVEL = "INFO"

# Valid log levels
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Libraries known to be noisy that we might want to quiet down
NOISY_LIBRARIES = ["httpx", "httpcore"]

SENSITIVE_HEADER_KEYS: List[str] = [
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
    "x-api-key",
]
REDACTED_PLACEHOLDER: str = "[REDACTED]"


def setup_logging():
    """
    Configures logging for the fixture hooks.

    Reads the desired log level from the LOG_LEVEL environment variable.
    Defaults to INFO if not set or invalid.
    Sets a standard format and directs logs to stderr, since Dredd relays the
    hook handler's stdout as its own output.
    Sets louder libraries to WARNING level.
    """
    settings = Settings()
    log_level_name = settings.get_log_level(default=DEFAULT_LOG_LEVEL)

    if log_level_name not in VALID_LOG_LEVELS:
        print(
            f"WARNING: Invalid LOG_LEVEL '{log_level_name}'. "
            f"Defaulting to {DEFAULT_LOG_LEVEL}. "
            f"Valid levels are: {', '.join(VALID_LOG_LEVELS)}",
            file=sys.stderr,
        )
        log_level_name = DEFAULT_LOG_LEVEL

    log_level = logging.getLevelName(log_level_name)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear any existing handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)

    # Quiet down noisy libraries
    for lib_name in NOISY_LIBRARIES:
        logging.getLogger(lib_name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(f"Logging configured with level {log_level_name}.")


def sanitize_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Sanitizes sensitive information from HTTP headers.

    Args:
        headers: Header name to value mapping.

    Returns:
        A dictionary of headers with sensitive values redacted.
    """
    sanitized = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADER_KEYS:
            sanitized[key] = REDACTED_PLACEHOLDER
        else:
            sanitized[key] = value
    return sanitized


def log_fixture_step(stage: str, step: str, status: str, reason: Optional[str] = None) -> None:
    """Log the outcome of a setup or teardown step."""
    logger = logging.getLogger("task_fixtures.controller.steps")
    message = f"[{stage}] {step}: {status}"
    if reason:
        message = f"{message} ({reason})"

    if status == "failed":
        logger.warning(message)
    else:
        logger.info(message)
