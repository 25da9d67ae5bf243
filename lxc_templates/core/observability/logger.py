# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.
"""
Logger setup: console and JSON formatters, context-aware logger adapter and
the factory that wires them to the package logger.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, TextIO

from lxc_templates.core.observability.context import ObservabilityContextManager
from lxc_templates.core.observability.events import LogLevel, WorkflowEvent

ROOT_LOGGER_NAME = "lxc_templates"

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

_EVENT_LEVELS: dict[str, int] = {
    LogLevel.DEBUG.value: logging.DEBUG,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.ERROR.value: logging.ERROR,
}


class LogFormatter(logging.Formatter):
    """Base formatter exposing the bound run context of a record."""

    @staticmethod
    def context_of(record: logging.LogRecord) -> dict[str, Any]:
        return dict(getattr(record, "context", None) or {})


class ConsoleFormatter(LogFormatter):
    """
    Single-line operator output: a coloured glyph followed by the message.
    """

    RESET = "\033[0m"
    STYLES: dict[int, tuple[str, str]] = {
        logging.DEBUG: ("\033[2m", "·"),
        logging.INFO: ("\033[1;36m", "➤"),
        SUCCESS: ("\033[1;32m", "✔"),
        logging.WARNING: ("\033[1;33m", "⚠"),
        logging.ERROR: ("\033[1;31m", "✖"),
        logging.CRITICAL: ("\033[1;31m", "✖"),
    }

    def __init__(self, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color, glyph = self.STYLES.get(record.levelno, self.STYLES[logging.INFO])
        prefix = f"{color}{glyph}{self.RESET}" if self.use_color else glyph
        message = f" {prefix} {record.getMessage()}"
        if record.exc_info and record.levelno <= logging.DEBUG:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


class JSONFormatter(LogFormatter):
    """
    One JSON object per line for the persistent log file.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(self.context_of(record))
        event = getattr(record, "event_payload", None)
        if event:
            payload["event"] = event
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


class _ConsoleFilter(logging.Filter):
    """Keep structured workflow events out of the operator console."""

    def filter(self, record: logging.LogRecord) -> bool:
        return getattr(record, "event_payload", None) is None


class StructuredLogger(logging.LoggerAdapter):
    """
    Logger adapter injecting the current run context into every record.
    """

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("context", ObservabilityContextManager.instance().get_all())
        kwargs["extra"] = extra
        return msg, kwargs

    def success(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a completed step."""
        self.log(SUCCESS, msg, *args, **kwargs)

    def event(self, event: WorkflowEvent) -> None:
        """Emit a structured workflow event (file log only).

        :param event: Event to record
        :type event: WorkflowEvent
        """
        payload = event.model_dump(mode="json", exclude_none=True)
        level = _EVENT_LEVELS.get(payload.get("level", "INFO"), logging.INFO)
        self.log(
            level,
            event.message or event.event,
            extra={"event_payload": payload},
        )


class LoggerFactory:
    """
    Factory configuring the package logger once per process.
    """

    _initialized: bool = False

    @classmethod
    def initialize(
        cls,
        level: int = logging.INFO,
        log_file: Optional[Path | str] = None,
        stream: Optional[TextIO] = None,
        use_color: Optional[bool] = None,
    ) -> logging.Logger:
        """Configure console (and optionally file) handlers.

        :param level: Console log level
        :param log_file: JSON lines log file, created with its parent directory
        :param stream: Console stream, defaults to stdout
        :param use_color: Force colour on/off; defaults to ``stream.isatty()``
        :returns: The configured package logger
        """
        root = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        root.setLevel(logging.DEBUG)

        stream = stream or sys.stdout
        if use_color is None:
            use_color = bool(getattr(stream, "isatty", lambda: False)())
        console = logging.StreamHandler(stream)
        console.setLevel(level)
        console.setFormatter(ConsoleFormatter(use_color=use_color))
        console.addFilter(_ConsoleFilter())
        root.addHandler(console)

        if log_file:
            path = Path(log_file)
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(path, encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(JSONFormatter())
            root.addHandler(file_handler)

        cls._initialized = True
        return root

    @classmethod
    def get_logger(cls, name: str) -> StructuredLogger:
        return StructuredLogger(logging.getLogger(name), {})

    @classmethod
    def reset(cls) -> None:
        """Detach all handlers (for testing only)."""
        root = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        cls._initialized = False


def get_logger(name: str) -> StructuredLogger:
    """Get a context-aware logger."""
    return LoggerFactory.get_logger(name)
