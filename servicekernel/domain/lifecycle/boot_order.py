"""
Domain service for provider boot ordering.

This module contains the pure graph logic that orders service providers
so that every provider comes after the providers of the services it
depends on. It has no knowledge of hooks, containers or I/O.
"""

from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, List, Sequence, Tuple

from ...core.entities.service_entity import Token
from ...shared.exceptions.kernel_errors import (
    AmbiguousServiceProviderError,
    CircularProviderDependencyError,
    DuplicateProviderNameError,
    MissingProviderDependencyError,
)
from .provider_naming import ProviderNameRegistry


@dataclass(frozen=True)
class ProviderNode:
    """A provider as a node of the boot order graph."""

    name: str
    provider: Any
    depends_on: Tuple[Token, ...]
    provides: Tuple[Token, ...]


def _declared_tokens(provider: Any, method: str) -> Tuple[Token, ...]:
    getter = getattr(provider, method, None)
    if not callable(getter):
        return ()
    return tuple(getter() or ())


class BootOrderService:
    """
    Computes provider boot order with Kahn's algorithm.

    Ties between providers that become ready at the same time are broken
    by registration order, so the result is deterministic.
    """

    def __init__(self, naming: ProviderNameRegistry):
        """
        Initialize the service.

        Args:
            naming: Provider name registry shared with the orchestrator
        """
        self._naming = naming

    def build_nodes(self, providers: Sequence[Any]) -> List[ProviderNode]:
        """
        Describe providers as graph nodes.

        Args:
            providers: Providers in registration order

        Returns:
            List[ProviderNode]: One node per provider

        Raises:
            DuplicateProviderNameError: If two providers share a name
        """
        nodes: List[ProviderNode] = []
        seen: Dict[str, Any] = {}
        for provider in providers:
            name = self._naming.name_of(provider)
            if name in seen:
                raise DuplicateProviderNameError(name)
            seen[name] = provider
            nodes.append(ProviderNode(
                name=name,
                provider=provider,
                depends_on=_declared_tokens(provider, "get_dependencies"),
                provides=_declared_tokens(provider, "get_provided_services")
            ))
        return nodes

    def boot_order(self, providers: Sequence[Any]) -> List[ProviderNode]:
        """
        Order providers for booting.

        Args:
            providers: Providers in registration order

        Returns:
            List[ProviderNode]: Nodes in boot order

        Raises:
            DuplicateProviderNameError: If two providers share a name
            AmbiguousServiceProviderError: If two providers provide one token
            MissingProviderDependencyError: If a dependency has no provider
            CircularProviderDependencyError: If the providers depend on each other
        """
        nodes = self.build_nodes(providers)
        if not nodes:
            return []

        by_name = {node.name: node for node in nodes}
        in_degree = {node.name: 0 for node in nodes}
        successors: Dict[str, List[str]] = {node.name: [] for node in nodes}

        service_to_provider: Dict[Token, str] = {}
        for node in nodes:
            for token in node.provides:
                owner = service_to_provider.get(token)
                if owner is not None and owner != node.name:
                    raise AmbiguousServiceProviderError(token, [owner, node.name])
                service_to_provider[token] = node.name

        for node in nodes:
            for token in node.depends_on:
                owner = service_to_provider.get(token)
                if owner is None:
                    raise MissingProviderDependencyError(node.name, token)
                if owner == node.name:
                    continue
                successors[owner].append(node.name)
                in_degree[node.name] += 1

        queue: Deque[str] = deque(
            node.name for node in nodes if in_degree[node.name] == 0
        )
        result: List[ProviderNode] = []

        while queue:
            current = queue.popleft()
            result.append(by_name[current])

            for successor in successors[current]:
                in_degree[successor] -= 1
                if in_degree[successor] == 0:
                    queue.append(successor)

        if len(result) != len(nodes):
            ordered = {node.name for node in result}
            remaining = [node.name for node in nodes if node.name not in ordered]
            raise CircularProviderDependencyError(remaining)

        return result

    def shutdown_order(self, providers: Sequence[Any]) -> List[ProviderNode]:
        """
        Order providers for shutdown: the exact reverse of the boot order.

        Args:
            providers: Providers in registration order

        Returns:
            List[ProviderNode]: Nodes in shutdown order
        """
        return list(reversed(self.boot_order(providers)))
