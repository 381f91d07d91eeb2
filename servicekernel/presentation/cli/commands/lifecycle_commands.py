"""
Lifecycle commands for CLI.

This module provides command handlers that inspect and run a set of
service providers.
"""

import asyncio
import signal
from typing import Any, Dict, List, Optional, Sequence

from ...cli.handlers.cli_handler import CommandHandler, CommandResult
from ...cli.formatters.output_formatter import OutputFormatter
from ....application.application import Application
from ....application.kernel import Kernel
from ....application.services.service_manager import ServiceManager
from ....shared.di.container import Container
from ....shared.exceptions.kernel_errors import KernelError, token_name
from ....shared.logging.structured_logger import get_logger


def _token_list(tokens: Sequence[Any]) -> str:
    return ", ".join(token_name(token) for token in tokens) or "-"


class BootOrderCommand(CommandHandler):
    """Show the order in which providers boot, without running any hook."""

    async def run(
        self,
        providers: Sequence[Any],
        reverse: bool = False,
        **kwargs
    ) -> CommandResult:
        """
        Execute the boot order command.

        Args:
            providers: Service providers in registration order
            reverse: Show the shutdown order instead

        Returns:
            CommandResult: Command execution result
        """
        order = ServiceManager(Container()).get_boot_order(list(providers))
        if reverse:
            order.reverse()

        rows = [
            {
                "#": position,
                "Provider": node.name,
                "Depends on": _token_list(node.depends_on),
                "Provides": _token_list(node.provides)
            }
            for position, node in enumerate(order, start=1)
        ]

        title = "Shutdown order" if reverse else "Boot order"
        self.formatter.print(self.formatter.format_table(rows, title=title))
        return CommandResult(success=True, message=title, data=rows)


class ServicesCommand(CommandHandler):
    """List the services registered by the providers."""

    def __init__(
        self,
        formatter: OutputFormatter,
        application: Optional[Application] = None
    ):
        """
        Initialize the handler.

        Args:
            formatter: Output formatter
            application: Optional application to bootstrap
        """
        super().__init__(formatter)
        self.application = application or Application()

    async def run(self, providers: Sequence[Any], **kwargs) -> CommandResult:
        """
        Execute the services command.

        Only the register phase runs; the application is shut down
        before returning.

        Args:
            providers: Service providers in registration order

        Returns:
            CommandResult: Command execution result
        """
        for provider in providers:
            self.application.register(provider)

        await self.application.bootstrap()
        try:
            container = self.application.container
            rows: List[Dict[str, Any]] = []
            for token in container.list_tokens():
                definition = container.describe(token)
                rows.append({
                    "Token": token_name(token),
                    "Kind": definition.kind,
                    "Scope": definition.scope.value,
                    "Depends on": _token_list(definition.deps)
                })
        finally:
            await self.application.shutdown()

        self.formatter.print(self.formatter.format_table(rows, title="Registered services"))
        return CommandResult(success=True, message="Registered services", data=rows)


class RunCommand(CommandHandler):
    """Start the providers and keep them running until interrupted."""

    def __init__(
        self,
        formatter: OutputFormatter,
        kernel: Optional[Kernel] = None
    ):
        """
        Initialize the handler.

        Args:
            formatter: Output formatter
            kernel: Optional kernel to start
        """
        super().__init__(formatter)
        self.kernel = kernel or Kernel()
        self._logger = get_logger("cli")

    async def run(
        self,
        providers: Sequence[Any],
        once: bool = False,
        **kwargs
    ) -> CommandResult:
        """
        Execute the run command.

        Args:
            providers: Service providers in registration order
            once: Stop right after starting

        Returns:
            CommandResult: Command execution result
        """
        for provider in providers:
            self.kernel.register_service_provider(provider)

        try:
            await self.kernel.start()
        except Exception:
            await self._stop_after_failed_start()
            raise

        try:
            if not once:
                await self._wait_for_signal()
        finally:
            await self.kernel.stop()

        return self.handle_success(
            "Application stopped",
            details=f"{len(providers)} service provider(s)"
        )

    async def _stop_after_failed_start(self) -> None:
        """Stop the kernel, logging a shutdown failure so the start error is reported."""
        try:
            await self.kernel.stop()
        except KernelError as e:
            self._logger.error(
                "Failed to stop application after start failure",
                error=e.to_dict()
            )

    async def _wait_for_signal(self) -> None:
        """Block until SIGINT or SIGTERM is received."""
        stop = asyncio.Event()
        loop = asyncio.get_running_loop()

        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, stop.set)
        try:
            self.formatter.print("Application running, press Ctrl+C to stop")
            await stop.wait()
        finally:
            for sig in (signal.SIGTERM, signal.SIGINT):
                loop.remove_signal_handler(sig)
