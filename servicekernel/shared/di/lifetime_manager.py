"""
Lifetime manager for dependency injection.

This module provides the lifetime manager that caches singleton
instances for one container.
"""

import asyncio
from typing import Any, Dict, Optional, Tuple

from ...core.entities.service_entity import MISSING, ServiceDefinition, ServiceScope, Token


class LifetimeManager:
    """
    Manager for service instance lifetime.

    Singleton-scoped instances are cached here on their first successful
    construction; transient instances are never stored. Asynchronous
    singleton builds are tracked while in flight so concurrent callers
    can wait for them instead of constructing a second instance.
    """

    def __init__(self):
        """Initialize lifetime manager."""
        self._singleton_instances: Dict[Token, Any] = {}
        self._pending_builds: Dict[Token, asyncio.Future] = {}

    def get_cached(self, definition: ServiceDefinition) -> Tuple[bool, Any]:
        """
        Get the cached instance for a definition.

        Args:
            definition: Service definition

        Returns:
            Tuple[bool, Any]: Whether an instance was cached, and the instance
        """
        if definition.scope is not ServiceScope.SINGLETON:
            return False, MISSING
        if definition.token in self._singleton_instances:
            return True, self._singleton_instances[definition.token]
        return False, MISSING

    def store(self, definition: ServiceDefinition, instance: Any) -> Any:
        """
        Cache an instance if the definition is singleton-scoped.

        An instance already cached for the token is kept.

        Args:
            definition: Service definition
            instance: Constructed instance

        Returns:
            Any: The instance callers should use
        """
        if definition.scope is not ServiceScope.SINGLETON:
            return instance
        return self._singleton_instances.setdefault(definition.token, instance)

    def pending_build(self, token: Token) -> Optional[asyncio.Future]:
        """Get the future of an in-flight singleton build, if any."""
        return self._pending_builds.get(token)

    def begin_build(self, definition: ServiceDefinition) -> None:
        """
        Mark a singleton build as in flight.

        Args:
            definition: Service definition about to be constructed
        """
        if definition.scope is ServiceScope.SINGLETON:
            loop = asyncio.get_running_loop()
            self._pending_builds[definition.token] = loop.create_future()

    def end_build(self, token: Token) -> None:
        """
        Release callers waiting on an in-flight build.

        Waiters re-check the cache when released, so a failed build
        leaves the token free to be built again.
        """
        future = self._pending_builds.pop(token, None)
        if future is not None and not future.done():
            future.set_result(None)

    def evict(self, token: Token) -> None:
        """Drop the cached instance for a token."""
        self._singleton_instances.pop(token, None)

    def is_cached(self, token: Token) -> bool:
        """Check whether a singleton instance is cached for a token."""
        return token in self._singleton_instances

    def clear(self) -> None:
        """Drop all cached instances."""
        self._singleton_instances.clear()
