"""
Structured logging configuration for iacmodel.

Provides consistent, structured logging across all modules
with support for different output formats and log levels.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

# LogRecord attributes that are not user-supplied extra fields
_RECORD_ATTRIBUTES = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
    }
)


class StructuredFormatter(logging.Formatter):
    """
    Formatter that outputs structured JSON logs, one object per line.

    Extra fields passed to a log call (e.g. ``event_type`` or
    ``family``) appear as top-level keys.
    """

    def __init__(
        self,
        include_timestamp: bool = True,
        include_level: bool = True,
        include_logger: bool = True,
        include_location: bool = False,
        extra_fields: dict[str, Any] | None = None,
    ):
        """
        Initialize structured formatter.

        Args:
            include_timestamp: Include timestamp in output
            include_level: Include log level in output
            include_logger: Include logger name in output
            include_location: Include file/line location
            extra_fields: Additional fields to include in every log
        """
        super().__init__()
        self.include_timestamp = include_timestamp
        self.include_level = include_level
        self.include_logger = include_logger
        self.include_location = include_location
        self.extra_fields = extra_fields or {}

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {}

        if self.include_timestamp:
            log_data["timestamp"] = (
                datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
            )

        if self.include_level:
            log_data["level"] = record.levelname.lower()

        if self.include_logger:
            log_data["logger"] = record.name

        log_data["message"] = record.getMessage()

        if self.include_location:
            log_data["location"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value

        log_data.update(self.extra_fields)

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Formatter that outputs human-readable logs.

    Useful for local development and CLI usage.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(
        self,
        use_colors: bool = True,
        include_timestamp: bool = True,
        include_level: bool = True,
    ):
        """
        Initialize human-readable formatter.

        Args:
            use_colors: Use ANSI colors when writing to a terminal
            include_timestamp: Include timestamp in output
            include_level: Include log level in output
        """
        super().__init__()
        self.use_colors = use_colors and sys.stderr.isatty()
        self.include_timestamp = include_timestamp
        self.include_level = include_level

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as human-readable text."""
        parts = []

        if self.include_timestamp:
            timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
            parts.append(f"[{timestamp}]")

        if self.include_level:
            level = record.levelname
            if self.use_colors and level in self.COLORS:
                level = f"{self.COLORS[level]}{level}{self.RESET}"
            parts.append(f"{level:>8}")

        parts.append(f"{record.name}:")
        parts.append(record.getMessage())

        output = " ".join(parts)

        if record.exc_info:
            output += "\n" + self.formatException(record.exc_info)

        return output


class AdaptLogger:
    """
    Wrapper around Python logging for adaptation events.

    Carries persistent context fields and offers one helper per event
    type so structured logs share field names.
    """

    def __init__(self, name: str, level: int | None = None):
        """
        Initialize the logger.

        Args:
            name: Logger name
            level: Log level to set, or None to inherit from the parent
        """
        self.logger = logging.getLogger(name)
        if level is not None:
            self.logger.setLevel(level)
        self._context: dict[str, Any] = {}

    def set_context(self, **kwargs: Any) -> None:
        """Set persistent context fields for all logs."""
        self._context.update(kwargs)

    def clear_context(self) -> None:
        """Clear context fields."""
        self._context.clear()

    def _log(
        self,
        level: int,
        message: str,
        exc_info: bool = False,
        **kwargs: Any,
    ) -> None:
        extra = {**self._context, **kwargs}
        self.logger.log(level, message, exc_info=exc_info, extra=extra)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        """Log error message."""
        self._log(logging.ERROR, message, exc_info=exc_info, **kwargs)

    def adaptation_started(self, family: str, module_count: int, block_count: int) -> None:
        """Log adapter start event."""
        self.debug(
            f"Adapting {family}",
            event_type="adaptation.started",
            family=family,
            module_count=module_count,
            block_count=block_count,
        )

    def adaptation_completed(
        self,
        family: str,
        entity_count: int,
        duration_seconds: float,
    ) -> None:
        """Log adapter completion event."""
        self.info(
            f"Adapter {family} produced {entity_count} entities",
            event_type="adaptation.completed",
            family=family,
            entity_count=entity_count,
            duration_seconds=duration_seconds,
        )

    def adaptation_failed(self, family: str, error: str) -> None:
        """Log adapter failure event."""
        self.error(
            f"Adapter {family} failed: {error}",
            event_type="adaptation.failed",
            family=family,
            error=error,
        )

    def orphan_synthesized(self, family: str, key: str | None, satellite: str) -> None:
        """Log creation of an unmanaged placeholder entity."""
        self.debug(
            f"Synthesized unmanaged entity for {satellite}",
            event_type="orphan.synthesized",
            family=family,
            orphan_key=key,
            satellite=satellite,
        )

    def field_defaulted(self, reference: str, default: Any, reason: str) -> None:
        """Log a field that fell back to its schema default."""
        self.debug(
            f"{reference}: {reason}, using default {default!r}",
            event_type="field.defaulted",
            reference=reference,
            default=default,
            reason=reason,
        )


def configure_logging(
    level: str = "INFO",
    format: str = "human",
    output: str = "stderr",
    extra_fields: dict[str, Any] | None = None,
) -> None:
    """
    Configure logging for iacmodel.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format (human, json)
        output: Output destination (stderr, stdout)
        extra_fields: Extra fields to include in structured logs
    """
    root_logger = logging.getLogger("iacmodel")
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    root_logger.handlers.clear()

    stream: TextIO = sys.stdout if output == "stdout" else sys.stderr
    handler = logging.StreamHandler(stream)

    if format == "json":
        formatter: logging.Formatter = StructuredFormatter(extra_fields=extra_fields)
    else:
        formatter = HumanReadableFormatter()

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str) -> AdaptLogger:
    """
    Get an AdaptLogger instance.

    Args:
        name: Logger name relative to the iacmodel namespace

    Returns:
        AdaptLogger instance
    """
    return AdaptLogger(f"iacmodel.{name}")


# Configure logging from environment on import
_log_level = os.getenv("IACMODEL_LOG_LEVEL", "INFO")
_log_format = os.getenv("IACMODEL_LOG_FORMAT", "human")
configure_logging(level=_log_level, format=_log_format)
