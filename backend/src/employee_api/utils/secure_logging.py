"""Logging setup and helpers that keep personal data out of production logs."""

import logging
import re
from typing import Any

from employee_api.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
MAX_LOGGED_MESSAGE_LENGTH = 200

# Applied in order: connection strings before paths, since a URL contains slashes
_REDACTIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"(postgresql|postgres|sqlite|http|https)(\+\w+)?://\S+"), "[URL]"),
    (re.compile(r"['\"]?(/[\w.\-]+/[\w./\-]+|[A-Z]:\\[^\s'\"]+)['\"]?"), "[PATH]"),
    (re.compile(r"[\w.+-]+@[\w-]+\.[\w.-]+"), "[EMAIL]"),
)


def configure_logging() -> None:
    """Configure root logging from settings.

    Debug mode always logs at DEBUG; otherwise LOG_LEVEL applies.
    """
    settings = get_settings()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("employee_api").setLevel(level)


def is_debug_mode() -> bool:
    """Check if application is running in debug mode."""
    return get_settings().debug


def sanitize_exception_message(error: Exception) -> str:
    """Redact connection strings, file paths and email addresses.

    Employee emails end up in constraint violation messages, so they are
    masked along with infrastructure details.

    Args:
        error: The exception to sanitize

    Returns:
        Redacted message, truncated to MAX_LOGGED_MESSAGE_LENGTH
    """
    text = str(error)
    for pattern, replacement in _REDACTIONS:
        text = pattern.sub(replacement, text)

    if len(text) > MAX_LOGGED_MESSAGE_LENGTH:
        text = text[: MAX_LOGGED_MESSAGE_LENGTH - 3] + "..."
    return text


def log_error(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
    **kwargs: Any,
) -> None:
    """Log an internal failure with its traceback.

    Unlike warnings, errors are never redacted: the client only ever sees
    a generic message, so the log is the one place the detail survives.
    """
    if error is None:
        logger.error(message, extra=kwargs)
        return
    logger.error(f"{message}: {error}", exc_info=error, extra=kwargs)


def log_warning(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
    **kwargs: Any,
) -> None:
    """Log a client-side problem.

    Outside debug mode the exception text is redacted and extra context
    is dropped.

    Args:
        logger: The logger instance to use
        message: Generic log message without personal data
        error: Optional exception to append
        **kwargs: Extra context, only attached in debug mode
    """
    debug = is_debug_mode()
    if error is not None:
        detail = str(error) if debug else sanitize_exception_message(error)
        message = f"{message}: {detail}"
    logger.warning(message, extra=kwargs if debug else None)
