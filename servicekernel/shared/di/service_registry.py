"""
Service registry for dependency injection.

This module provides the service registry that stores service
definitions by token. It holds no construction logic.
"""

from typing import Dict, Iterator, List, Optional

from ...core.entities.service_entity import ServiceDefinition, Token


class ServiceRegistry:
    """
    Registry for managing service definitions.

    Registering a token that already has a definition replaces it;
    definitions are never merged.
    """

    def __init__(self):
        """Initialize service registry."""
        self._definitions: Dict[Token, ServiceDefinition] = {}

    def register(self, definition: ServiceDefinition) -> Optional[ServiceDefinition]:
        """
        Store a service definition.

        Args:
            definition: Definition to store

        Returns:
            Optional[ServiceDefinition]: The replaced definition, if any
        """
        previous = self._definitions.get(definition.token)
        self._definitions[definition.token] = definition
        return previous

    def get_definition(self, token: Token) -> Optional[ServiceDefinition]:
        """
        Get definition for a token.

        Args:
            token: Service token

        Returns:
            Optional[ServiceDefinition]: Service definition if found
        """
        return self._definitions.get(token)

    def has(self, token: Token) -> bool:
        """Check whether a token has a definition."""
        return token in self._definitions

    def tokens(self) -> List[Token]:
        """
        List registered tokens.

        Returns:
            List[Token]: Tokens in registration order
        """
        return list(self._definitions)

    def copy(self) -> "ServiceRegistry":
        """Create a registry holding the same definitions."""
        clone = ServiceRegistry()
        clone._definitions = dict(self._definitions)
        return clone

    def clear(self) -> None:
        """Remove all definitions."""
        self._definitions.clear()

    def __iter__(self) -> Iterator[ServiceDefinition]:
        return iter(list(self._definitions.values()))

    def __len__(self) -> int:
        return len(self._definitions)
