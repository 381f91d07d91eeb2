"""
Data models for service registration.

This module contains the token, scope and definition types that describe
how a service is identified and constructed by the container.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Hashable, Optional, Tuple, Type, Union

from ...shared.exceptions.kernel_errors import InvalidServiceDefinitionError, token_name


class ServiceToken:
    """
    Symbolic service token.

    Two tokens are equal only if they are the same object, even when
    their descriptions match. The description is used for display only.
    """

    __slots__ = ("description",)

    def __init__(self, description: str):
        self.description = description

    def __repr__(self) -> str:
        return f"ServiceToken({self.description!r})"


Token = Union[str, ServiceToken, Type[Any], Hashable]


class ServiceScope(Enum):
    """Service lifetime options."""

    SINGLETON = "singleton"  # One cached instance per container
    TRANSIENT = "transient"  # New instance per resolution


class _Missing:
    """Marker for an unset construction method."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass(frozen=True)
class ServiceDefinition:
    """
    Describes how a service is constructed.

    Exactly one of ``value``, ``factory`` or ``cls`` must be set. The
    order of ``deps`` is the positional argument order used when calling
    the factory or class.
    """

    token: Token
    scope: ServiceScope = ServiceScope.SINGLETON
    deps: Tuple[Token, ...] = field(default_factory=tuple)
    value: Any = MISSING
    factory: Optional[Callable[..., Any]] = None
    cls: Optional[Type[Any]] = None

    def __post_init__(self) -> None:
        methods = [
            self.value is not MISSING,
            self.factory is not None,
            self.cls is not None
        ]
        if sum(methods) != 1:
            raise InvalidServiceDefinitionError(
                self.token,
                "exactly one of value, factory or cls must be set"
            )
        if self.factory is not None and not callable(self.factory):
            raise InvalidServiceDefinitionError(self.token, "factory is not callable")
        if self.cls is not None and not isinstance(self.cls, type):
            raise InvalidServiceDefinitionError(self.token, "cls is not a class")
        if self.value is not MISSING:
            if self.deps:
                raise InvalidServiceDefinitionError(self.token, "value definitions take no deps")
            object.__setattr__(self, "scope", ServiceScope.SINGLETON)
        object.__setattr__(self, "deps", tuple(self.deps))

    @property
    def kind(self) -> str:
        """Get the construction method name."""
        if self.value is not MISSING:
            return "value"
        if self.factory is not None:
            return "factory"
        return "class"

    def to_dict(self) -> Dict[str, Any]:
        """Convert definition to dictionary representation."""
        return {
            "token": token_name(self.token),
            "kind": self.kind,
            "scope": self.scope.value,
            "deps": [token_name(dep) for dep in self.deps]
        }
