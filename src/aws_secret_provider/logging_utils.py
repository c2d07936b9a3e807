"""Logging helpers that keep credentials out of log output.

Provides:
- Redaction of AWS access key ids, secret key assignments and long tokens
- Structured ``key=value`` logging helpers
"""

import logging
import re
from typing import Any

# Patterns for secret redaction
SECRET_PATTERNS = [
    (re.compile(r"\b(AKIA|ASIA)[A-Z0-9]{16}\b"), r"\1***REDACTED***"),  # Access key ids
    (
        re.compile(r"((?:aws_)?secret(?:_access)?_key[\"']?\s*[:=]\s*[\"']?)([^\s\"',;]+)", re.IGNORECASE),
        r"\1***REDACTED***",
    ),
    (re.compile(r"\b[A-Za-z0-9+/]{40,}={0,2}"), "***REDACTED***"),  # Long base64-like tokens
]


def redact_secrets(text: str | None) -> str:
    """Redact credentials from text.

    Args:
        text: Text that may contain secrets

    Returns:
        Text with secrets redacted
    """
    if text is None:
        return ""

    if not isinstance(text, str):
        text = str(text)

    for pattern, replacement in SECRET_PATTERNS:
        text = pattern.sub(replacement, text)

    return text


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **kwargs: Any,
) -> None:
    """Log a message with structured context (secret_id, mode, etc.).

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, logging.ERROR, etc.)
        message: Log message
        **kwargs: Additional structured fields to include
    """
    parts = [message]

    for key, value in kwargs.items():
        parts.append(f"{key}={redact_secrets(str(value))}")

    logger.log(level, " | ".join(parts))


def log_info(logger: logging.Logger, message: str, **kwargs: Any) -> None:
    """Log an info message with structured context."""
    log_with_context(logger, logging.INFO, message, **kwargs)


def log_warning(logger: logging.Logger, message: str, **kwargs: Any) -> None:
    """Log a warning message with structured context."""
    log_with_context(logger, logging.WARNING, message, **kwargs)


def log_debug(logger: logging.Logger, message: str, **kwargs: Any) -> None:
    """Log a debug message with structured context."""
    log_with_context(logger, logging.DEBUG, message, **kwargs)
