"""Structured logging utilities."""

import logging
import sys
from typing import Any


class StructuredFormatter(logging.Formatter):
    """Formatter that appends key=value context fields to log messages."""

    def format(self, record: logging.LogRecord) -> str:
        extra = ""
        if hasattr(record, "extra_fields"):
            fields = getattr(record, "extra_fields")
            if fields:
                extra = " " + " ".join(f"{k}={v}" for k, v in fields.items())

        message = super().format(record)
        return f"{message}{extra}"


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    structured: bool = True,
) -> None:
    """Configure logging for qodana-cli.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string
        structured: Use structured logging format
    """
    if format_string is None:
        if level.upper() == "DEBUG":
            format_string = "%(asctime)s %(levelname)s %(name)s %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    handler = logging.StreamHandler(sys.stderr)

    if structured:
        handler.setFormatter(StructuredFormatter(format_string))
    else:
        handler.setFormatter(logging.Formatter(format_string))

    logger = logging.getLogger("qodana_cli")
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers = [handler]
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a qodana-cli module.

    Args:
        name: Module name (will be prefixed with qodana_cli)

    Returns:
        Configured logger
    """
    if not name.startswith("qodana_cli"):
        name = f"qodana_cli.{name}"
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds extra fields to log messages."""

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        extra = kwargs.get("extra", {})
        extra["extra_fields"] = self.extra
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger_with_context(name: str, **context: Any) -> LoggerAdapter:
    """Get a logger with additional context fields.

    Args:
        name: Module name
        **context: Context fields to include in all log messages

    Returns:
        LoggerAdapter with context
    """
    logger = get_logger(name)
    return LoggerAdapter(logger, context)
