"""
Application facade.

The application owns a container and a service manager and exposes the
lifecycle as a small state machine: IDLE, BOOTSTRAPPED, RUNNING.
"""

import time
from enum import Enum
from typing import Optional

from ..core.interfaces.provider_interface import ServiceProvider
from ..shared.di.container import Container
from ..shared.exceptions.kernel_errors import (
    ApplicationBootError,
    ApplicationBootstrapError,
    ApplicationShutdownError,
)
from ..shared.logging.log_formatter import LogFormatter
from ..shared.logging.logger_interface import LoggerInterface
from ..shared.logging.structured_logger import get_logger
from .services.service_manager import ServiceManager


class ApplicationState(Enum):
    """Lifecycle state of an application."""

    IDLE = "idle"
    BOOTSTRAPPED = "bootstrapped"
    RUNNING = "running"


class Application:
    """
    Application lifecycle facade.

    Usage:
        app = Application()
        app.register(DatabaseProvider()).register(CacheProvider())
        await app.run()
        ...
        await app.shutdown()
    """

    def __init__(
        self,
        container: Optional[Container] = None,
        service_manager: Optional[ServiceManager] = None,
        logger: Optional[LoggerInterface] = None
    ):
        """
        Initialize the application.

        Args:
            container: Optional container, a new one is created by default
            service_manager: Optional service manager bound to ``container``
            logger: Optional logger, defaults to the "application" component logger
        """
        self.container = container or Container()
        self.service_manager = service_manager or ServiceManager(self.container)
        self._logger = logger or get_logger("application")
        self._bootstrapped = False
        self._booted = False

    @property
    def state(self) -> ApplicationState:
        """Current lifecycle state."""
        if self._booted:
            return ApplicationState.RUNNING
        if self._bootstrapped:
            return ApplicationState.BOOTSTRAPPED
        return ApplicationState.IDLE

    def register(self, provider: ServiceProvider) -> 'Application':
        """
        Queue a service provider.

        Args:
            provider: Service provider

        Returns:
            Application: Self for method chaining
        """
        self.service_manager.register(provider)
        return self

    async def bootstrap(self) -> None:
        """
        Run the register phase of all queued providers.

        Raises:
            ApplicationBootstrapError: If already bootstrapped, or if a
                provider fails to register
        """
        if self._bootstrapped:
            raise ApplicationBootstrapError("Application is already bootstrapped")

        started = time.perf_counter()
        try:
            await self.service_manager.register_all()
        except Exception as e:
            raise ApplicationBootstrapError(cause=e) from e

        self._bootstrapped = True
        self._log_transition(ApplicationState.BOOTSTRAPPED, started)

    async def boot(self) -> None:
        """
        Run the boot phase in dependency order.

        Raises:
            ApplicationBootError: If not bootstrapped, already running, or
                if the boot order or a boot hook fails
        """
        if not self._bootstrapped:
            raise ApplicationBootError("Application must be bootstrapped before booting")
        if self._booted:
            raise ApplicationBootError("Application is already booted")

        started = time.perf_counter()
        try:
            await self.service_manager.boot_all()
        except Exception as e:
            raise ApplicationBootError(cause=e) from e

        self._booted = True
        self._log_transition(ApplicationState.RUNNING, started)

    async def shutdown(self) -> None:
        """
        Shut down all registered providers in reverse boot order.

        Does nothing when the application is idle. The application is
        idle afterwards even if some providers failed.

        Raises:
            ApplicationShutdownError: If one or more providers failed to shut down
        """
        if self.state is ApplicationState.IDLE:
            return

        started = time.perf_counter()
        try:
            await self.service_manager.shutdown_all()
        except Exception as e:
            raise ApplicationShutdownError(cause=e) from e
        finally:
            self._bootstrapped = False
            self._booted = False
            self._log_transition(ApplicationState.IDLE, started)

    async def run(self) -> None:
        """Bootstrap and boot the application."""
        await self.bootstrap()
        await self.boot()

    def is_running(self) -> bool:
        """Check whether the application is booted."""
        return self._booted

    def _log_transition(self, state: ApplicationState, started: float) -> None:
        self._logger.info(
            "Application state changed",
            state=state.value,
            duration=LogFormatter.format_duration(time.perf_counter() - started)
        )
