from __future__ import annotations

import logging
import os
import sys
import traceback
from dataclasses import dataclass

LOGGER_NAME = "callspy"
ENV_LOG_LEVEL = "CALLSPY_LOG_LEVEL"
ENV_LOG_FILE = "CALLSPY_LOG_FILE"
DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

# Attributes every LogRecord carries; anything else came in through ``extra``.
_STANDARD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
        "message",
    }
)


@dataclass(frozen=True)
class LoggingConfig:
    level: int = logging.WARNING
    file: str | None = None
    detailed: bool = False

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        """Build a config from ``CALLSPY_LOG_LEVEL`` and ``CALLSPY_LOG_FILE``."""
        raw_level = os.getenv(ENV_LOG_LEVEL)
        level = cls.level
        if raw_level:
            level = _parse_level(raw_level)
        return cls(level=level, file=os.getenv(ENV_LOG_FILE) or None)


class DetailedTextFormatter(logging.Formatter):
    """Formatter that appends the structured ``extra`` fields of spy events."""

    def format(self, record: logging.LogRecord) -> str:
        module = record.name.split(".")[-1] if "." in record.name else record.name
        lines = [f"{record.levelname:5s} | {module:10s} | {record.getMessage()}"]

        for key, value in record.__dict__.items():
            if key in _STANDARD_ATTRS or key.startswith("_"):
                continue
            lines.append(f"  {key.title()}: {value}")

        if record.exc_info:
            lines.append("  Traceback:")
            lines.append("    " + "\n    ".join(traceback.format_exception(*record.exc_info)))

        return "\n".join(lines)


def get_logger(name: str | None = None) -> logging.Logger:
    logger = logging.getLogger(name or LOGGER_NAME)
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.addHandler(logging.NullHandler())
    return logger


def configure_logging(config: LoggingConfig | None = None) -> logging.Handler:
    """Attach a single handler to the ``callspy`` logger and return it.

    Spies log at DEBUG, so pass ``LoggingConfig(level=logging.DEBUG)`` to see
    every recorded call.
    """
    config = config or LoggingConfig()
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(config.level)

    if config.file:
        handler: logging.Handler = logging.FileHandler(config.file, mode="a")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(config.level)
    if config.detailed:
        handler.setFormatter(DetailedTextFormatter())
    else:
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    logger.addHandler(handler)
    return handler


def _parse_level(value: str) -> int:
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level '{value}' in {ENV_LOG_LEVEL}")
    return level
