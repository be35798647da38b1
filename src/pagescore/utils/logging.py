"""Structured logging utilities."""

import logging
import sys
from typing import Any

ROOT_LOGGER = "pagescore"


class StructuredFormatter(logging.Formatter):
    """Formatter that appends context fields as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        extra = ""
        fields = getattr(record, "extra_fields", None)
        if fields:
            extra = " " + " ".join(f"{k}={v}" for k, v in sorted(fields.items()))

        message = super().format(record)
        return f"{message}{extra}"


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    structured: bool = False,
) -> None:
    """Configure logging for pagescore.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string
        structured: Append context fields and timestamps to each record
    """
    if format_string is None:
        if structured:
            format_string = "%(asctime)s %(levelname)s %(name)s %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    handler = logging.StreamHandler(sys.stderr)
    # Context fields are rendered in both modes; only the prefix differs.
    handler.setFormatter(StructuredFormatter(format_string))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers = [handler]
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the pagescore namespace.

    Args:
        name: Module name (prefixed with pagescore when it is not already)

    Returns:
        Logger instance
    """
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that attaches fixed context fields to every record."""

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        extra = kwargs.get("extra", {})
        extra["extra_fields"] = self.extra
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger_with_context(name: str, **context: Any) -> LoggerAdapter:
    """Get a logger that tags every message with context fields.

    Example:
        log = get_logger_with_context("aggregator", category="seo")
        log.warning("No result for audit")  # ... category=seo
    """
    return LoggerAdapter(get_logger(name), context)
