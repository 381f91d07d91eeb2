"""
Structured logger implementation.

This module provides a structured logging implementation on top of the
standard library logging package. Each record is rendered either as a
single JSON object or as a compact text line.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

from .log_formatter import LogFormatter
from .logger_interface import LoggerInterface, LogLevel

ROOT_LOGGER_NAME = "servicekernel"

_HANDLER_MARKER = "_servicekernel_handler"
_FORMAT_MARKER = "_servicekernel_format"


class StructuredLogger(LoggerInterface):
    """
    Structured logger implementation.

    Loggers created with ``attach_handler=False`` emit through the
    handlers of their parents, so a single ``configure_logging`` call
    on the package root controls every component logger.
    """

    def __init__(
        self,
        name: str,
        level: Optional[LogLevel] = LogLevel.INFO,
        output: Optional[TextIO] = None,
        fmt: Optional[str] = "json",
        attach_handler: bool = True
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Initial log level, or None to inherit from the parent
            output: Output stream for logs (stderr by default)
            fmt: Rendering format, "json" or "text"; None inherits it from the parent handler
            attach_handler: Whether to install a stream handler on this logger
        """
        self.name = name
        self._fmt = fmt
        self._context: Dict[str, Any] = {}
        self._logger = logging.getLogger(name)

        if level is not None:
            self._logger.setLevel(level.numeric)

        if attach_handler:
            for existing in list(self._logger.handlers):
                if getattr(existing, _HANDLER_MARKER, False):
                    self._logger.removeHandler(existing)

            handler = logging.StreamHandler(output or sys.stderr)
            handler.setFormatter(logging.Formatter("%(message)s"))
            setattr(handler, _HANDLER_MARKER, True)
            setattr(handler, _FORMAT_MARKER, fmt or "json")
            self._logger.addHandler(handler)
            self._logger.propagate = False

    @property
    def fmt(self) -> str:
        """Get the rendering format, inherited from the handling parent if unset."""
        if self._fmt is not None:
            return self._fmt
        current: Optional[logging.Logger] = self._logger
        while current is not None:
            for handler in current.handlers:
                if getattr(handler, _HANDLER_MARKER, False):
                    return getattr(handler, _FORMAT_MARKER, "json")
            if not current.propagate:
                break
            current = current.parent
        return "json"

    def _log(
        self,
        level: LogLevel,
        message: str,
        exc_info: Optional[BaseException] = None,
        **kwargs: Any
    ) -> None:
        if not self._logger.isEnabledFor(level.numeric):
            return

        timestamp = datetime.now(timezone.utc)
        context = {**self._context, **kwargs}

        if self.fmt == "text":
            line = LogFormatter.format_message(
                message,
                context=context,
                timestamp=timestamp,
                level=level.value
            )
            if exc_info is not None:
                line = f"{line}: {exc_info.__class__.__name__}: {exc_info}"
        else:
            log_entry = {
                "timestamp": timestamp.isoformat(),
                "level": level.value,
                "logger": self.name,
                "message": message,
                "context": context
            }
            if exc_info is not None:
                log_entry["exception"] = LogFormatter.format_error(exc_info)
            line = json.dumps(log_entry, default=str)

        self._logger.log(level.numeric, line)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.CRITICAL, message, **kwargs)

    def exception(self, message: str, exc_info: Optional[BaseException] = None, **kwargs: Any) -> None:
        self._log(LogLevel.ERROR, message, exc_info=exc_info, **kwargs)

    def set_level(self, level: LogLevel) -> None:
        self._logger.setLevel(level.numeric)

    def get_level(self) -> LogLevel:
        return LogLevel(logging.getLevelName(self._logger.getEffectiveLevel()))

    def add_context(self, **kwargs: Any) -> None:
        self._context.update(kwargs)

    def clear_context(self) -> None:
        self._context.clear()

    def get_context(self) -> Dict[str, Any]:
        return self._context.copy()


def configure_logging(
    name: str = ROOT_LOGGER_NAME,
    level: LogLevel = LogLevel.INFO,
    output: Optional[TextIO] = None,
    fmt: str = "json"
) -> StructuredLogger:
    """
    Configure and return a StructuredLogger instance.

    Calling this again for the same name replaces the handler installed
    by the previous call instead of adding a second one.

    Args:
        name: Logger name
        level: Logging level
        output: Output stream for logs
        fmt: Rendering format, "json" or "text"

    Returns:
        StructuredLogger: Configured logger instance
    """
    return StructuredLogger(name=name, level=level, output=output, fmt=fmt)


def get_logger(component: str, fmt: Optional[str] = None) -> StructuredLogger:
    """
    Get a component logger below the package root logger.

    Args:
        component: Component name, e.g. "service_manager"
        fmt: Rendering format; None inherits the root format

    Returns:
        StructuredLogger: Logger that inherits level and handlers
    """
    return StructuredLogger(
        name=f"{ROOT_LOGGER_NAME}.{component}",
        level=None,
        fmt=fmt,
        attach_handler=False
    )
