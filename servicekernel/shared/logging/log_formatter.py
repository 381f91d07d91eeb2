"""
Log formatter for consistent message formatting.

This module provides the helpers the structured logger uses to render
text log lines, exception details and phase durations.
"""

import traceback
from datetime import datetime
from typing import Any, Dict, Optional


class LogFormatter:
    """Static helpers for formatting log output."""

    @staticmethod
    def format_message(
        message: str,
        context: Optional[Dict[str, Any]] = None,
        timestamp: Optional[datetime] = None,
        level: Optional[str] = None
    ) -> str:
        """
        Format a log message with context as a single text line.

        Args:
            message: The message to format
            context: Optional context data
            timestamp: Optional timestamp
            level: Optional level name

        Returns:
            str: Formatted message
        """
        parts = []
        if timestamp:
            parts.append(f"[{timestamp.isoformat()}]")
        if level:
            parts.append(level)

        parts.append(message)

        if context:
            context_str = ", ".join(f"{k}={v}" for k, v in context.items())
            parts.append(f"({context_str})")

        return " ".join(parts)

    @staticmethod
    def format_error(
        error: BaseException,
        include_traceback: bool = True
    ) -> Dict[str, Any]:
        """
        Format an error for logging.

        Errors exposing ``to_dict()`` (kernel errors) contribute their
        code and context.

        Args:
            error: The error to format
            include_traceback: Whether to include traceback

        Returns:
            Dict[str, Any]: Formatted error
        """
        formatted: Dict[str, Any] = {
            "type": error.__class__.__name__,
            "message": str(error)
        }

        to_dict = getattr(error, "to_dict", None)
        if callable(to_dict):
            details = to_dict()
            formatted["code"] = details.get("code")
            formatted["context"] = details.get("context")

        if include_traceback:
            formatted["traceback"] = traceback.format_exception(
                type(error),
                error,
                error.__traceback__
            )

        return formatted

    @staticmethod
    def format_duration(seconds: float) -> str:
        """
        Format a duration in seconds.

        Args:
            seconds: Duration in seconds

        Returns:
            str: Formatted duration
        """
        if seconds < 1:
            return f"{seconds * 1000:.1f}ms"
        elif seconds < 60:
            return f"{seconds:.2f}s"
        elif seconds < 3600:
            minutes = seconds / 60
            return f"{minutes:.2f}m"
        else:
            hours = seconds / 3600
            return f"{hours:.2f}h"
