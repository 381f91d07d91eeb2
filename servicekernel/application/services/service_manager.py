"""
Application service for provider lifecycle orchestration.

This service drives the three lifecycle phases of a set of service
providers: register all, boot all in dependency order, and shut all
down in reverse dependency order.
"""

import inspect
from typing import Any, Callable, List, Optional, Sequence

from ...core.interfaces.provider_interface import ServiceProvider, supports_boot, supports_shutdown
from ...domain.lifecycle.boot_order import BootOrderService, ProviderNode
from ...domain.lifecycle.provider_naming import ProviderNameRegistry
from ...shared.di.container import Container
from ...shared.exceptions.error_context import ErrorContextManager
from ...shared.exceptions.kernel_errors import (
    GroupedShutdownError,
    ServiceBootError,
    ServiceRegistrationError,
    ServiceShutdownError,
)
from ...shared.logging.logger_interface import LoggerInterface
from ...shared.logging.structured_logger import get_logger


async def _call_hook(hook: Callable[[Container], Any], container: Container) -> None:
    result = hook(container)
    if inspect.isawaitable(result):
        await result


class ServiceManager:
    """
    Lifecycle orchestrator for service providers.

    Providers move from ``pending`` to ``registered`` in ``register_all``;
    those with a boot capability are added to ``booted`` by ``boot_all``;
    ``shutdown_all`` empties all three. Each phase runs providers one at
    a time and awaits every hook before starting the next one.
    """

    def __init__(
        self,
        container: Container,
        logger: Optional[LoggerInterface] = None,
        naming: Optional[ProviderNameRegistry] = None
    ):
        """
        Initialize the manager.

        Args:
            container: Container passed to every provider hook
            logger: Optional logger, defaults to the "service_manager" component logger
            naming: Optional provider name registry
        """
        self.container = container
        self._logger = logger or get_logger("service_manager")
        self._naming = naming or ProviderNameRegistry()
        self._boot_order_service = BootOrderService(self._naming)
        self._pending: List[ServiceProvider] = []
        self._registered: List[ServiceProvider] = []
        self._booted: List[ServiceProvider] = []

    def register(self, provider: ServiceProvider) -> None:
        """
        Queue a provider for registration.

        Args:
            provider: Service provider
        """
        self._pending.append(provider)

    async def register_all(self) -> None:
        """
        Run the register hook of every pending provider in FIFO order.

        Providers registered before a failure stay registered; the
        failing provider and those after it stay pending.

        Raises:
            ServiceRegistrationError: If a provider's register hook fails
        """
        self._logger.info("Registering service providers", count=len(self._pending))

        while self._pending:
            provider = self._pending[0]
            name = self.get_provider_name(provider)
            self._logger.debug("Registering service provider", provider=name)
            try:
                await _call_hook(provider.register, self.container)
            except Exception as e:
                error = ServiceRegistrationError(name, e)
                self._log_failure(error, phase="register", provider=name)
                raise error from e
            self._pending.pop(0)
            self._registered.append(provider)

        self._logger.info("Registered service providers", count=len(self._registered))

    async def boot_all(self) -> None:
        """
        Run boot hooks in dependency order.

        Raises:
            ProviderConfigurationError: If the boot order cannot be computed
            ServiceBootError: If a provider's boot hook fails; later
                providers are not booted, and a retry skips providers that
                already booted
        """
        order = self._boot_order_service.boot_order(self._registered)
        self._logger.info(
            "Booting service providers",
            order=[node.name for node in order]
        )

        for node in order:
            if not supports_boot(node.provider) or node.provider in self._booted:
                continue
            self._logger.debug("Booting service provider", provider=node.name)
            try:
                await _call_hook(node.provider.boot, self.container)
            except Exception as e:
                error = ServiceBootError(node.name, e)
                self._log_failure(error, phase="boot", provider=node.name)
                raise error from e
            self._booted.append(node.provider)

        self._logger.info("Booted service providers", count=len(self._booted))

    async def shutdown_all(self) -> None:
        """
        Run shutdown hooks in reverse boot order.

        Every provider is attempted even if an earlier one fails. The
        manager state is reset afterwards whatever the outcome.

        Raises:
            ProviderConfigurationError: If the shutdown order cannot be computed
            GroupedShutdownError: If one or more shutdown hooks failed
        """
        failures: List[ServiceShutdownError] = []
        try:
            order = self._boot_order_service.shutdown_order(self._registered)
            self._logger.info(
                "Shutting down service providers",
                order=[node.name for node in order]
            )

            for node in order:
                if not supports_shutdown(node.provider):
                    continue
                self._logger.debug("Shutting down service provider", provider=node.name)
                try:
                    await _call_hook(node.provider.shutdown, self.container)
                except Exception as e:
                    error = ServiceShutdownError(node.name, e)
                    self._log_failure(error, phase="shutdown", provider=node.name)
                    failures.append(error)
        finally:
            self._reset()

        if failures:
            raise GroupedShutdownError(failures)

        self._logger.info("Shut down service providers")

    def get_boot_order(self, providers: Optional[Sequence[ServiceProvider]] = None) -> List[ProviderNode]:
        """
        Compute the boot order without running any hook.

        Args:
            providers: Providers to order; defaults to the registered
                providers, or the pending ones before ``register_all``

        Returns:
            List[ProviderNode]: Providers in boot order
        """
        if providers is None:
            providers = self._registered or self._pending
        return self._boot_order_service.boot_order(providers)

    def get_provider_name(self, provider: ServiceProvider) -> str:
        """
        Get the stable name of a provider.

        Args:
            provider: Service provider

        Returns:
            str: Provider name
        """
        return self._naming.name_of(provider)

    def get_pending_providers(self) -> List[ServiceProvider]:
        """Get providers waiting for registration."""
        return list(self._pending)

    def get_registered_providers(self) -> List[ServiceProvider]:
        """Get providers whose register hook completed."""
        return list(self._registered)

    def get_booted_providers(self) -> List[ServiceProvider]:
        """Get providers whose boot hook completed."""
        return list(self._booted)

    def _reset(self) -> None:
        self._pending = []
        self._registered = []
        self._booted = []
        self._naming.forget()

    def _log_failure(self, error: Exception, **context: Any) -> None:
        error_context = ErrorContextManager.create_context(error, **context)
        self._logger.error(
            f"Service provider {context['phase']} failed",
            error=error_context.to_dict()
        )
