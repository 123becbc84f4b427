"""Credential redaction and secure logging setup.

The request engine logs outgoing headers at DEBUG level. Everything it
logs passes through :func:`sanitize_headers` first, and
:func:`setup_secure_logging` installs a formatter that scrubs
token-looking strings from any message that slips through.
"""

import logging
import re
import sys
from typing import Any, Dict, Mapping, Optional

# Patterns for sensitive data detection
SENSITIVE_PATTERNS = {
    "jwt_token": re.compile(r"eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"),
    "bearer_token": re.compile(r"Bearer\s+[A-Za-z0-9._~+/=-]+", re.IGNORECASE),
    "api_key": re.compile(r"\b[A-Za-z0-9_-]{32,}\b"),
}

# Headers that should never be logged
SENSITIVE_HEADERS = {
    "authorization",
    "x-kit-api-key",
    "x-api-key",
    "cookie",
    "set-cookie",
}


def sanitize_string(value: str) -> str:
    """Redact tokens and API keys embedded in a string.

    Only the matching spans are replaced, so the surrounding message
    stays readable.

    :param value: String to sanitize
    :type value: str
    :return: String with sensitive spans replaced by ``<name:REDACTED>``
    :rtype: str
    """
    if not value:
        return value
    for pattern_name, pattern in SENSITIVE_PATTERNS.items():
        value = pattern.sub(f"<{pattern_name}:REDACTED>", value)
    return value


def sanitize_headers(headers: Mapping[str, Any]) -> Dict[str, Any]:
    """Sanitize HTTP headers for logging.

    :param headers: HTTP headers (plain dict or ``httpx.Headers``)
    :type headers: Mapping[str, Any]
    :return: Copy of the headers with credentials redacted
    :rtype: Dict[str, Any]
    """
    sanitized: Dict[str, Any] = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS:
            if isinstance(value, str) and len(value) > 0:
                sanitized[key] = f"<REDACTED:length={len(value)}>"
            else:
                sanitized[key] = "<REDACTED>"
        elif isinstance(value, str):
            sanitized[key] = sanitize_string(value)
        else:
            sanitized[key] = value
    return sanitized


class SanitizingFormatter(logging.Formatter):
    """Formatter that automatically sanitizes sensitive data."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with automatic sanitization.

        :param record: Log record to format
        :type record: logging.LogRecord
        :return: Sanitized log message
        :rtype: str
        """
        try:
            record.msg = sanitize_string(record.getMessage())
            record.args = None
        except (TypeError, ValueError) as e:
            # Mismatched format args; leave the record as logging would.
            print(f"Warning: Failed to sanitize log record: {e}", file=sys.stderr)
        return super().format(record)


# Global flag to track if logging has been set up
_LOGGING_CONFIGURED = False


def setup_secure_logging(level: Optional[str] = None) -> None:
    """Attach a sanitizing stream handler to the ``kit_sdk`` logger.

    The library never configures logging on import; applications call
    this once if they want the SDK's own log output. Repeated calls only
    adjust the level.

    :param level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
        defaults to ``KIT_LOG_LEVEL``
    :type level: Optional[str]
    """
    global _LOGGING_CONFIGURED

    if level is None:
        from ..config import Settings

        level = Settings().log_level

    sdk_logger = logging.getLogger("kit_sdk")
    sdk_logger.setLevel(getattr(logging, level.upper()))

    if _LOGGING_CONFIGURED:
        sdk_logger.debug("Logging already configured, skipping duplicate setup")
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        SanitizingFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    sdk_logger.addHandler(handler)
    sdk_logger.propagate = False

    _LOGGING_CONFIGURED = True
