"""
Service provider interface definitions.

This module defines the contract that service providers follow to take
part in the application lifecycle. Registration is required; boot and
shutdown are optional capabilities that the orchestrator checks for
explicitly.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Awaitable, Callable, List, Optional, Protocol, Sequence, Union, runtime_checkable

from ..entities.service_entity import Token

if TYPE_CHECKING:
    from ...shared.di.container import Container

HookResult = Union[None, Awaitable[None]]


class ServiceProvider(ABC):
    """
    Base interface for service providers.

    A provider registers definitions into the container and declares
    which tokens it depends on and which tokens it provides. The
    declarations drive the boot and shutdown order.
    """

    @abstractmethod
    def register(self, container: "Container") -> HookResult:
        """
        Register service definitions.

        Args:
            container: Container to register definitions into

        Returns:
            None, or an awaitable for asynchronous registration
        """
        pass

    def get_provider_name(self) -> Optional[str]:
        """
        Get the explicit provider name.

        Returns:
            Optional[str]: Provider name, or None to derive one
        """
        return None

    def get_dependencies(self) -> List[Token]:
        """
        Get the tokens this provider needs from other providers.

        Returns:
            List[Token]: Dependency tokens
        """
        return []

    def get_provided_services(self) -> List[Token]:
        """
        Get the tokens this provider registers.

        Returns:
            List[Token]: Provided tokens
        """
        return []


@runtime_checkable
class SupportsBoot(Protocol):
    """Capability of providers that run post-registration initialization."""

    def boot(self, container: "Container") -> HookResult:
        ...


@runtime_checkable
class SupportsShutdown(Protocol):
    """Capability of providers that release resources on shutdown."""

    def shutdown(self, container: "Container") -> HookResult:
        ...


class BootableProvider(ServiceProvider):
    """Provider base class with a required boot hook."""

    @abstractmethod
    def boot(self, container: "Container") -> HookResult:
        """
        Initialize registered services.

        Args:
            container: Container holding the registered definitions
        """
        pass


class ShutdownProvider(ServiceProvider):
    """Provider base class with a required shutdown hook."""

    @abstractmethod
    def shutdown(self, container: "Container") -> HookResult:
        """
        Release resources held by registered services.

        Args:
            container: Container holding the registered definitions
        """
        pass


class LifecycleProvider(BootableProvider, ShutdownProvider):
    """Provider base class with both boot and shutdown hooks."""


Hook = Callable[["Container"], HookResult]


class SimpleProvider(ServiceProvider):
    """
    Provider assembled from plain callables.

    Boot and shutdown capabilities are only exposed when the matching
    callable is supplied, so ``isinstance(p, SupportsBoot)`` reflects
    what the provider actually does.
    """

    def __init__(
        self,
        register: Hook,
        boot: Optional[Hook] = None,
        shutdown: Optional[Hook] = None,
        name: Optional[str] = None,
        depends_on: Sequence[Token] = (),
        provides: Sequence[Token] = ()
    ):
        self._register = register
        self._name = name
        self._depends_on = list(depends_on)
        self._provides = list(provides)
        if boot is not None:
            self.boot = boot
        if shutdown is not None:
            self.shutdown = shutdown

    def register(self, container: "Container") -> HookResult:
        return self._register(container)

    def get_provider_name(self) -> Optional[str]:
        return self._name

    def get_dependencies(self) -> List[Token]:
        return list(self._depends_on)

    def get_provided_services(self) -> List[Token]:
        return list(self._provides)


def supports_boot(provider: Any) -> bool:
    """Check whether a provider has a boot capability."""
    return isinstance(provider, SupportsBoot)


def supports_shutdown(provider: Any) -> bool:
    """Check whether a provider has a shutdown capability."""
    return isinstance(provider, SupportsShutdown)
