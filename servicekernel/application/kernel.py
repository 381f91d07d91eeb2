"""
Kernel entry point.

A thin starter that collects service providers and drives one
application through start and stop.
"""

from typing import Iterable, List, Optional

from ..core.interfaces.provider_interface import ServiceProvider
from .application import Application


class Kernel:
    """Collects service providers and runs them in one application."""

    def __init__(
        self,
        providers: Optional[Iterable[ServiceProvider]] = None,
        application: Optional[Application] = None
    ):
        self.application = application or Application()
        self._providers: List[ServiceProvider] = list(providers or ())

    def register_service_provider(self, provider: ServiceProvider) -> 'Kernel':
        """
        Add a provider to be registered on start.

        Args:
            provider: Service provider

        Returns:
            Kernel: Self for method chaining
        """
        self._providers.append(provider)
        return self

    @property
    def providers(self) -> List[ServiceProvider]:
        return list(self._providers)

    async def start(self) -> Application:
        """
        Register every provider on the application and run it.

        Returns:
            Application: The running application
        """
        for provider in self._providers:
            self.application.register(provider)
        await self.application.run()
        return self.application

    async def stop(self) -> None:
        """Shut the application down."""
        await self.application.shutdown()
