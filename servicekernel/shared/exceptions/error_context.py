"""
Error context management.

This module captures structured information about lifecycle failures:
which phase and provider failed, with what error, and where. The
orchestrator logs one record per failed provider hook.
"""

import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ErrorContext:
    """
    Structured error context information.

    Attributes:
        timestamp: When the context was captured
        error_type: Exception class name
        error_message: Exception message
        error_code: Kernel error code, when the error carries one
        stack_trace: Formatted traceback lines
        context_data: Phase, provider and any other caller data
    """

    timestamp: datetime = field(default_factory=_utcnow)
    error_type: str = ""
    error_message: str = ""
    error_code: Optional[str] = None
    stack_trace: Optional[List[str]] = None
    context_data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error context to dictionary.

        Returns:
            Dict[str, Any]: Dictionary representation
        """
        return {
            "timestamp": self.timestamp.isoformat(),
            "error_type": self.error_type,
            "error_message": self.error_message,
            "error_code": self.error_code,
            "stack_trace": self.stack_trace,
            "context_data": self.context_data
        }

    def add_context(self, **kwargs: Any) -> None:
        """
        Add context data.

        Args:
            **kwargs: Context data to add
        """
        self.context_data.update(kwargs)


class ErrorContextManager:
    """Factory helpers for error contexts."""

    @staticmethod
    def create_context(
        error: BaseException,
        include_stack_trace: bool = True,
        **context_data: Any
    ) -> ErrorContext:
        """
        Create error context from exception.

        When the error wraps a cause (``ServiceBootError`` wrapping the
        provider's own exception), the cause is recorded as well.

        Args:
            error: The exception to create context from
            include_stack_trace: Whether to include stack trace
            **context_data: Additional context data

        Returns:
            ErrorContext: Created error context
        """
        context = ErrorContext(
            error_type=error.__class__.__name__,
            error_message=str(error),
            error_code=getattr(error, "code", None),
            context_data=dict(context_data)
        )

        cause = error.__cause__
        if cause is not None:
            context.add_context(
                cause_type=cause.__class__.__name__,
                cause_message=str(cause)
            )

        if include_stack_trace:
            context.stack_trace = traceback.format_exception(
                type(error),
                error,
                error.__traceback__
            )

        return context

    @staticmethod
    def format_context(context: ErrorContext) -> str:
        """
        Format error context as string.

        Args:
            context: Error context to format

        Returns:
            str: Formatted error context
        """
        parts = [
            f"Error: {context.error_type}",
            f"Message: {context.error_message}",
            f"Timestamp: {context.timestamp.isoformat()}"
        ]

        if context.error_code:
            parts.append(f"Code: {context.error_code}")

        if context.context_data:
            context_str = ", ".join(
                f"{k}={v}" for k, v in context.context_data.items()
            )
            parts.append(f"Context: {context_str}")

        if context.stack_trace:
            parts.append("Stack Trace:")
            parts.extend(context.stack_trace)

        return "\n".join(parts)
