"""
Dependency resolver for the container.

This module turns a token into an instance by recursively resolving the
declared dependencies of its definition, detecting circular resolution
and honoring singleton and transient scopes.
"""

import asyncio
import inspect
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Set

from ...core.entities.service_entity import ServiceDefinition, Token
from ..exceptions.kernel_errors import AsyncResolutionError, CircularDependencyError, ServiceNotFoundError
from .lifetime_manager import LifetimeManager
from .service_registry import ServiceRegistry


class DependencyResolver:
    """
    Resolver for a single resolution call tree.

    A resolver owns the resolution stack: the ordered set of tokens being
    constructed in the current call chain. The container creates one
    resolver per top-level call, so the stack never outlives that call.
    """

    def __init__(self, registry: ServiceRegistry, lifetime_manager: LifetimeManager):
        """
        Initialize resolver.

        Args:
            registry: Registry holding service definitions
            lifetime_manager: Singleton instance cache
        """
        self._registry = registry
        self._lifetime_manager = lifetime_manager
        self._resolution_stack: Dict[Token, None] = {}

    @property
    def resolution_stack(self) -> List[Token]:
        """Get the tokens currently being resolved, outermost first."""
        return list(self._resolution_stack)

    def resolve(self, token: Token) -> Any:
        """
        Resolve a service instance synchronously.

        Args:
            token: Service token

        Returns:
            Any: Resolved instance

        Raises:
            CircularDependencyError: If the token is already being resolved
            ServiceNotFoundError: If the token has no definition
            AsyncResolutionError: If a factory in the chain is asynchronous
        """
        definition = self._get_definition(token)

        found, instance = self._lifetime_manager.get_cached(definition)
        if found:
            return instance

        with self._track(token):
            instance = self._create_instance(definition)
            return self._lifetime_manager.store(definition, instance)

    async def resolve_async(self, token: Token) -> Any:
        """
        Resolve a service instance, awaiting asynchronous factories.

        Concurrent calls for the same singleton share one construction:
        later callers wait for the in-flight build and use its instance.

        Args:
            token: Service token

        Returns:
            Any: Resolved instance
        """
        definition = self._get_definition(token)

        while True:
            found, instance = self._lifetime_manager.get_cached(definition)
            if found:
                return instance

            pending = self._lifetime_manager.pending_build(token)
            if pending is None:
                break

            cycle = self._find_path_to_stack(token)
            if cycle is not None:
                raise CircularDependencyError([*self._resolution_stack, *cycle])
            await asyncio.shield(pending)

        with self._track(token):
            self._lifetime_manager.begin_build(definition)
            try:
                instance = await self._create_instance_async(definition)
                return self._lifetime_manager.store(definition, instance)
            finally:
                self._lifetime_manager.end_build(token)

    def _get_definition(self, token: Token) -> ServiceDefinition:
        if token in self._resolution_stack:
            raise CircularDependencyError([*self._resolution_stack, token])

        definition = self._registry.get_definition(token)
        if definition is None:
            raise ServiceNotFoundError(token)
        return definition

    def _find_path_to_stack(self, token: Token) -> Optional[List[Token]]:
        """
        Find a declared dependency path from token back into this call's stack.

        Waiting on another call's build of such a token would never finish,
        since that build needs a service this call is still constructing.
        """
        visited: Set[Token] = set()

        def visit(current: Token) -> Optional[List[Token]]:
            if current in self._resolution_stack:
                return [current]
            if current in visited:
                return None
            visited.add(current)
            definition = self._registry.get_definition(current)
            if definition is None:
                return None
            for dep in definition.deps:
                path = visit(dep)
                if path is not None:
                    return [current, *path]
            return None

        return visit(token)

    @contextmanager
    def _track(self, token: Token) -> Iterator[None]:
        self._resolution_stack[token] = None
        try:
            yield
        finally:
            self._resolution_stack.pop(token, None)

    def _create_instance(self, definition: ServiceDefinition) -> Any:
        if definition.kind == "value":
            return definition.value

        args = [self.resolve(dep) for dep in definition.deps]

        if definition.factory is not None:
            instance = definition.factory(*args)
            if inspect.isawaitable(instance):
                if inspect.iscoroutine(instance):
                    instance.close()
                raise AsyncResolutionError(definition.token)
            return instance

        return definition.cls(*args)

    async def _create_instance_async(self, definition: ServiceDefinition) -> Any:
        if definition.kind == "value":
            return definition.value

        args = []
        for dep in definition.deps:
            args.append(await self.resolve_async(dep))

        if definition.factory is not None:
            instance = definition.factory(*args)
            if inspect.isawaitable(instance):
                instance = await instance
            return instance

        return definition.cls(*args)
