"""
CLI handler for managing command execution.

This module provides a base handler for CLI commands, with support
for kernel error reporting.
"""

from typing import Any, Optional
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ....shared.exceptions.kernel_errors import KernelError
from ..formatters.output_formatter import OutputFormatter


@dataclass
class CommandResult:
    """Result of a command execution."""

    success: bool
    message: str
    data: Optional[Any] = None
    error: Optional[Exception] = None


class CommandHandler(ABC):
    """
    Base class for command handlers.

    Subclasses implement ``run``; ``execute`` turns kernel errors into
    a failed result with the error record printed.
    """

    def __init__(self, formatter: OutputFormatter):
        """
        Initialize the handler.

        Args:
            formatter: Output formatter
        """
        self.formatter = formatter

    async def execute(self, **kwargs: Any) -> CommandResult:
        """
        Execute the command.

        Args:
            **kwargs: Command arguments

        Returns:
            CommandResult: Command execution result
        """
        try:
            return await self.run(**kwargs)
        except KernelError as e:
            return self.handle_error(e)

    @abstractmethod
    async def run(self, **kwargs: Any) -> CommandResult:
        """Run the command body."""
        pass

    def handle_error(
        self,
        error: Exception,
        message: Optional[str] = None
    ) -> CommandResult:
        """
        Handle command execution error.

        Kernel errors are printed as their structured record.

        Args:
            error: Exception that occurred
            message: Optional headline, defaults to the error message

        Returns:
            CommandResult: Error result
        """
        message = message or str(error)
        if isinstance(error, KernelError):
            details = self.formatter.format_error_record(error.to_dict())
        else:
            details = f"{type(error).__name__}: {error}"

        self.formatter.print(self.formatter.format_error(message, details))

        return CommandResult(
            success=False,
            message=message,
            error=error
        )

    def handle_success(
        self,
        message: str,
        data: Optional[Any] = None,
        details: Optional[str] = None
    ) -> CommandResult:
        """
        Handle command execution success.

        Args:
            message: Success message
            data: Optional result data
            details: Optional success details

        Returns:
            CommandResult: Success result
        """
        self.formatter.print(self.formatter.format_success(message, details))

        return CommandResult(
            success=True,
            message=message,
            data=data
        )
