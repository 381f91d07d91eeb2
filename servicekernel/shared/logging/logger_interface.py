"""
Logger interface for the service kernel.

This module defines the logging contract used by the container, the
lifecycle orchestrator and the application facade, so that any of them
can be given a custom logger.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional


class LogLevel(Enum):
    """Standard log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def numeric(self) -> int:
        """Get the stdlib logging level number."""
        return logging.getLevelName(self.value)

    @classmethod
    def parse(cls, value: str) -> "LogLevel":
        """
        Parse a level name case-insensitively.

        Raises:
            ValueError: If the name is not a known level
        """
        try:
            return cls(value.upper())
        except ValueError:
            raise ValueError(
                f"Unknown log level '{value}', expected one of: "
                + ", ".join(level.value for level in cls)
            ) from None


class LoggerInterface(ABC):
    """
    Interface for logging implementations.

    Keyword arguments passed to the logging methods are structured
    context (``provider="db"``, ``phase="boot"``), not format arguments.
    """

    @abstractmethod
    def debug(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def info(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def warning(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def error(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def critical(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def exception(self, message: str, exc_info: Optional[BaseException] = None, **kwargs: Any) -> None:
        """
        Log an error together with exception details.

        Args:
            message: The message to log
            exc_info: Exception to describe
            **kwargs: Additional context data
        """
        pass

    @abstractmethod
    def set_level(self, level: LogLevel) -> None:
        pass

    @abstractmethod
    def get_level(self) -> LogLevel:
        pass

    @abstractmethod
    def add_context(self, **kwargs: Any) -> None:
        """
        Add context data to all subsequent log messages.

        Args:
            **kwargs: Context data to add
        """
        pass

    @abstractmethod
    def clear_context(self) -> None:
        pass

    @abstractmethod
    def get_context(self) -> Dict[str, Any]:
        pass
