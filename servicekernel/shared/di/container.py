"""
Dependency injection container.

This module provides the container that service providers register
definitions into and that application code resolves instances from.
"""

from typing import Any, Callable, List, Optional, Sequence, Type, TypeVar, Union

from ...core.entities.service_entity import ServiceDefinition, ServiceScope, Token
from ..exceptions.kernel_errors import InvalidServiceDefinitionError, token_name
from ..logging.logger_interface import LoggerInterface
from ..logging.structured_logger import get_logger
from .dependency_resolver import DependencyResolver
from .lifetime_manager import LifetimeManager
from .service_registry import ServiceRegistry

T = TypeVar('T')


class Container:
    """
    Dependency injection container.

    This class manages service registration and resolution. Registration
    methods return the container for method chaining. Every container is
    independent: definitions and singleton caches are never shared.

    Usage:
        container = Container()
        container.register_value("config", {"dsn": "sqlite://"})
        container.register_factory("db", Database, deps=["config"])
        db = container.resolve("db")
    """

    def __init__(self, logger: Optional[LoggerInterface] = None):
        """
        Initialize container.

        Args:
            logger: Optional logger, defaults to the "container" component logger
        """
        self._registry = ServiceRegistry()
        self._lifetime_manager = LifetimeManager()
        self._logger = logger or get_logger("container")

    def register(self, definition: ServiceDefinition) -> 'Container':
        """
        Register a complete service definition.

        Registering a token again replaces its definition and drops any
        singleton instance already cached for it.

        Args:
            definition: Service definition

        Returns:
            Container: Self for method chaining
        """
        previous = self._registry.register(definition)
        if previous is not None:
            self._lifetime_manager.evict(definition.token)
            self._logger.debug(
                "Overriding service definition",
                token=token_name(definition.token),
                previous_kind=previous.kind,
                kind=definition.kind
            )
        return self

    def register_value(self, token: Token, value: Any) -> 'Container':
        """
        Register a fixed instance.

        Args:
            token: Service token
            value: Instance returned on every resolution

        Returns:
            Container: Self for method chaining
        """
        return self.register(ServiceDefinition(token=token, value=value))

    def register_factory(
        self,
        token: Token,
        factory: Callable[..., Any],
        deps: Optional[Sequence[Token]] = None,
        scope: ServiceScope = ServiceScope.SINGLETON
    ) -> 'Container':
        """
        Register a factory function.

        The factory receives the resolved ``deps`` as positional
        arguments. It may be a coroutine function, in which case the
        service must be resolved with ``resolve_async``.

        Args:
            token: Service token
            factory: Callable creating the instance
            deps: Dependency tokens in argument order
            scope: Service scope

        Returns:
            Container: Self for method chaining
        """
        return self.register(ServiceDefinition(
            token=token,
            factory=factory,
            deps=tuple(deps or ()),
            scope=scope
        ))

    def register_class(
        self,
        token: Union[Token, Type[T]],
        cls: Optional[Type[T]] = None,
        deps: Optional[Sequence[Token]] = None,
        scope: ServiceScope = ServiceScope.SINGLETON
    ) -> 'Container':
        """
        Register a class to instantiate.

        Args:
            token: Service token; when ``cls`` is omitted it must be the class itself
            cls: Class to instantiate with the resolved ``deps``
            deps: Dependency tokens in argument order
            scope: Service scope

        Returns:
            Container: Self for method chaining

        Raises:
            InvalidServiceDefinitionError: If no class can be determined
        """
        if cls is None:
            if not isinstance(token, type):
                raise InvalidServiceDefinitionError(
                    token,
                    "a class is required when the token is not a class"
                )
            cls = token
        return self.register(ServiceDefinition(
            token=token,
            cls=cls,
            deps=tuple(deps or ()),
            scope=scope
        ))

    def register_singleton(
        self,
        token: Token,
        implementation: Union[Type[Any], Callable[..., Any]],
        deps: Optional[Sequence[Token]] = None
    ) -> 'Container':
        """
        Register a singleton service from a class or factory.

        Args:
            token: Service token
            implementation: Class or factory function
            deps: Dependency tokens in argument order

        Returns:
            Container: Self for method chaining
        """
        return self._register_implementation(token, implementation, deps, ServiceScope.SINGLETON)

    def register_transient(
        self,
        token: Token,
        implementation: Union[Type[Any], Callable[..., Any]],
        deps: Optional[Sequence[Token]] = None
    ) -> 'Container':
        """
        Register a transient service from a class or factory.

        Args:
            token: Service token
            implementation: Class or factory function
            deps: Dependency tokens in argument order

        Returns:
            Container: Self for method chaining
        """
        return self._register_implementation(token, implementation, deps, ServiceScope.TRANSIENT)

    def _register_implementation(
        self,
        token: Token,
        implementation: Union[Type[Any], Callable[..., Any]],
        deps: Optional[Sequence[Token]],
        scope: ServiceScope
    ) -> 'Container':
        if isinstance(implementation, type):
            return self.register_class(token, implementation, deps, scope)

        if callable(implementation):
            return self.register_factory(token, implementation, deps, scope)

        raise InvalidServiceDefinitionError(
            token,
            f"invalid implementation type: {type(implementation).__name__}"
        )

    def resolve(self, token: Token) -> Any:
        """
        Resolve a service instance.

        Args:
            token: Service token

        Returns:
            Any: Resolved service instance

        Raises:
            ServiceNotFoundError: If the token (or a dependency) is not registered
            CircularDependencyError: If resolution re-enters a token
            AsyncResolutionError: If a factory in the chain is asynchronous
        """
        return DependencyResolver(self._registry, self._lifetime_manager).resolve(token)

    async def resolve_async(self, token: Token) -> Any:
        """
        Resolve a service instance, awaiting asynchronous factories.

        Args:
            token: Service token

        Returns:
            Any: Resolved service instance
        """
        resolver = DependencyResolver(self._registry, self._lifetime_manager)
        return await resolver.resolve_async(token)

    def has(self, token: Token) -> bool:
        """
        Check if a service is registered.

        Args:
            token: Service token

        Returns:
            bool: True if a definition exists
        """
        return self._registry.has(token)

    def __contains__(self, token: Token) -> bool:
        return self.has(token)

    def list_tokens(self) -> List[Token]:
        """
        List registered tokens.

        Returns:
            List[Token]: Tokens in registration order
        """
        return self._registry.tokens()

    def describe(self, token: Token) -> Optional[ServiceDefinition]:
        """
        Get the definition registered for a token.

        Args:
            token: Service token

        Returns:
            Optional[ServiceDefinition]: Definition, or None if not registered
        """
        return self._registry.get_definition(token)

    def is_resolved(self, token: Token) -> bool:
        """Check whether a singleton instance is cached for a token."""
        return self._lifetime_manager.is_cached(token)

    def clear(self) -> None:
        """Remove all definitions and cached singleton instances."""
        self._registry.clear()
        self._lifetime_manager.clear()

    def create_child(self) -> 'Container':
        """
        Create a container that inherits this container's definitions.

        The child gets a copy of the definitions and its own, empty
        singleton cache; later registrations on either side are not
        visible to the other.

        Returns:
            Container: New child container
        """
        child = Container(logger=self._logger)
        child._registry = self._registry.copy()
        return child
