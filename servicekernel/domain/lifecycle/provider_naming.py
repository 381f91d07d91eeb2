"""
Domain service for provider naming.

This module resolves the display name that identifies a service provider
in the boot order graph and in error messages.
"""

from typing import Any, Dict, FrozenSet, Tuple

GENERIC_CLASS_NAMES: FrozenSet[str] = frozenset({
    "object",
    "function",
    "ServiceProvider",
    "BootableProvider",
    "ShutdownProvider",
    "LifecycleProvider",
    "SimpleProvider",
    "SimpleNamespace",
})

ANONYMOUS_PREFIX = "AnonymousProvider"


class ProviderNameRegistry:
    """
    Memoizing provider name resolver.

    Names are resolved in this order: the provider's own
    ``get_provider_name()``, then its class name when that name says
    something about the provider, then ``AnonymousProvider_<n>``. The
    first name resolved for a provider instance is kept for the life of
    the registry.
    """

    def __init__(self):
        """Initialize the registry."""
        # keyed by id(); the provider is kept alive so the id stays valid
        self._names: Dict[int, Tuple[Any, str]] = {}
        self._counter = 0

    def name_of(self, provider: Any) -> str:
        """
        Get the stable name of a provider.

        Args:
            provider: Service provider

        Returns:
            str: Provider name
        """
        entry = self._names.get(id(provider))
        if entry is not None and entry[0] is provider:
            return entry[1]

        name = self._explicit_name(provider) or self._structural_name(provider)
        if not name:
            self._counter += 1
            name = f"{ANONYMOUS_PREFIX}_{self._counter}"

        self._names[id(provider)] = (provider, name)
        return name

    @staticmethod
    def _explicit_name(provider: Any) -> str:
        getter = getattr(provider, "get_provider_name", None)
        if not callable(getter):
            return ""
        name = getter()
        return name if isinstance(name, str) else ""

    @staticmethod
    def _structural_name(provider: Any) -> str:
        name = type(provider).__name__
        if not name or name in GENERIC_CLASS_NAMES or name.startswith("<"):
            return ""
        return name

    def forget(self) -> None:
        """Drop all memoized names; the anonymous counter keeps counting."""
        self._names.clear()
