"""Structured logging configuration using structlog.

Provides JSON logging for production and console logging for development,
with redaction of secret-looking property values.
"""

import sys
from collections.abc import Mapping
from typing import Any, cast

import structlog
from structlog.types import EventDict, WrappedLogger

# Fragments of property keys whose values are never logged in clear text
SENSITIVE_FRAGMENTS: frozenset[str] = frozenset({
    "password",
    "passwd",
    "secret",
    "token",
    "apikey",
    "api_key",
    "api-key",
    "private_key",
    "private-key",
    "credential",
    "authorization",
})

REDACTED = "*****"


def is_sensitive(key: str) -> bool:
    """Whether a property key names a value that must not be logged."""
    key_lower = key.lower()
    return any(fragment in key_lower for fragment in SENSITIVE_FRAGMENTS)


def obfuscate_properties(properties: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of properties with sensitive values masked."""
    return {
        key: REDACTED if is_sensitive(key) else value
        for key, value in properties.items()
    }


class SecretRedactor:
    """Processor that masks sensitive values in log events.

    Top-level event keys and keys of nested dictionaries (such as a
    logged property map) are both checked.
    """

    def __call__(
        self,
        _logger: WrappedLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        """Redact secrets from event dictionary."""
        return cast(EventDict, self._redact_dict(event_dict))

    def _redact_dict(self, data: Mapping[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in data.items():
            if is_sensitive(key):
                result[key] = REDACTED
            elif isinstance(value, Mapping):
                result[key] = self._redact_dict(value)
            else:
                result[key] = value
        return result


def setup_logging(
    level: str | None = None,
    format: str | None = None,
    redact_secrets: bool | None = None,
) -> None:
    """Configure structured logging.

    Arguments left as None are taken from the library settings
    (PROPSTACK_LOG_LEVEL, PROPSTACK_LOG_FORMAT, PROPSTACK_REDACT_SECRETS).

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        format: Output format - "json" for production, "console" for development
        redact_secrets: Whether to mask secret-looking values
    """
    from propstack.config import get_settings

    settings = get_settings()
    level = level or settings.log_level
    format = format or settings.log_format
    if redact_secrets is None:
        redact_secrets = settings.redact_secrets

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if redact_secrets:
        processors.append(SecretRedactor())

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    level_map = {
        "DEBUG": 10,
        "INFO": 20,
        "WARNING": 30,
        "ERROR": 40,
        "CRITICAL": 50,
    }
    level_num = level_map.get(level.upper(), 20)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance bound to the given name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        A bound structlog logger
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
