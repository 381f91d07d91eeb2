"""
Error taxonomy for the service kernel.

This module defines every error raised by the container, the lifecycle
orchestrator and the application facade. All of them derive from
KernelError, which carries a stable error code, a context dictionary
and the underlying cause.
"""

from typing import Any, Dict, List, Optional, Sequence


def token_name(token: Any) -> str:
    """
    Get a display name for a service token.

    Args:
        token: Service token (string, ServiceToken or class)

    Returns:
        str: Human readable token name
    """
    if isinstance(token, str):
        return token
    if isinstance(token, type):
        return token.__qualname__
    description = getattr(token, "description", None)
    if isinstance(description, str):
        return description
    return repr(token)


class KernelError(Exception):
    """
    Base class for all service kernel errors.

    Attributes:
        message: Error message
        code: Stable machine readable error code
        context: Additional structured data about the failure
        cause: Underlying exception, if any
    """

    default_code = "KERNEL_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.context = context or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to a JSON-safe dictionary.

        Returns:
            Dict[str, Any]: Dictionary representation
        """
        cause = None
        if self.cause is not None:
            cause = {
                "type": self.cause.__class__.__name__,
                "message": str(self.cause)
            }
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "context": {k: _safe_value(v) for k, v in self.context.items()},
            "cause": cause
        }


def _safe_value(value: Any) -> Any:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, (list, tuple)):
        return [_safe_value(v) for v in value]
    return token_name(value)


class ContainerError(KernelError):
    """Base class for dependency injection container errors."""

    default_code = "CONTAINER_ERROR"


class ServiceNotFoundError(ContainerError):
    """Raised when resolving a token that has no definition."""

    default_code = "SERVICE_NOT_FOUND"

    def __init__(self, token: Any):
        super().__init__(
            f"Service not found: {token_name(token)}",
            context={"token": token}
        )
        self.token = token


class CircularDependencyError(ContainerError):
    """
    Raised when a token re-enters its own resolution chain.

    The path lists the tokens in visitation order with the repeated
    token appended, so the printed path closes the loop.
    """

    default_code = "CIRCULAR_DEPENDENCY"

    def __init__(self, path: Sequence[Any]):
        self.path = list(path)
        super().__init__(
            "Circular dependency detected: "
            + " -> ".join(token_name(t) for t in self.path),
            context={"path": self.path}
        )


class InvalidServiceDefinitionError(ContainerError):
    """Raised when a service definition is malformed."""

    default_code = "INVALID_DEFINITION"

    def __init__(self, token: Any, reason: str):
        super().__init__(
            f"Invalid service definition for {token_name(token)}: {reason}",
            context={"token": token, "reason": reason}
        )
        self.token = token
        self.reason = reason


class AsyncResolutionError(ContainerError):
    """Raised when synchronous resolution meets an asynchronous constructor."""

    default_code = "ASYNC_RESOLUTION_REQUIRED"

    def __init__(self, token: Any):
        super().__init__(
            f"Service {token_name(token)} is constructed asynchronously; "
            "use resolve_async() instead",
            context={"token": token}
        )
        self.token = token


class ServiceError(KernelError):
    """Base class for service provider lifecycle errors."""

    default_code = "SERVICE_ERROR"


class ServiceRegistrationError(ServiceError):
    """Raised when a provider's register hook fails."""

    default_code = "REGISTRATION_FAILED"

    def __init__(self, provider_name: str, cause: BaseException):
        super().__init__(
            f"Failed to register service provider '{provider_name}': {cause}",
            context={"provider": provider_name},
            cause=cause
        )
        self.provider_name = provider_name


class ServiceBootError(ServiceError):
    """Raised when a provider's boot hook fails."""

    default_code = "BOOT_FAILED"

    def __init__(self, provider_name: str, cause: BaseException):
        super().__init__(
            f"Failed to boot service provider '{provider_name}': {cause}",
            context={"provider": provider_name},
            cause=cause
        )
        self.provider_name = provider_name


class ServiceShutdownError(ServiceError):
    """Raised (and collected) when a provider's shutdown hook fails."""

    default_code = "SHUTDOWN_FAILED"

    def __init__(self, provider_name: str, cause: BaseException):
        super().__init__(
            f"Failed to shutdown service provider '{provider_name}': {cause}",
            context={"provider": provider_name},
            cause=cause
        )
        self.provider_name = provider_name


class ProviderConfigurationError(ServiceError):
    """Base class for provider graph errors detected before any hook runs."""

    default_code = "PROVIDER_CONFIGURATION_ERROR"


class MissingProviderDependencyError(ProviderConfigurationError):
    """Raised when a provider depends on a token no provider provides."""

    default_code = "MISSING_DEPENDENCY"

    def __init__(self, provider_name: str, token: Any):
        super().__init__(
            f"Service provider '{provider_name}' depends on service "
            f"'{token_name(token)}', but no provider provides this service",
            context={"provider": provider_name, "token": token}
        )
        self.provider_name = provider_name
        self.token = token


class DuplicateProviderNameError(ProviderConfigurationError):
    """Raised when two providers resolve to the same name."""

    default_code = "DUPLICATE_PROVIDER"

    def __init__(self, name: str):
        super().__init__(
            f"Duplicate service provider name '{name}' detected. "
            "Each service provider must have a unique name.",
            context={"provider": name}
        )
        self.name = name


class CircularProviderDependencyError(ProviderConfigurationError):
    """Raised when the provider dependency graph contains a cycle."""

    default_code = "CIRCULAR_PROVIDER_DEPENDENCY"

    def __init__(self, remaining: Sequence[str]):
        self.remaining = list(remaining)
        super().__init__(
            "Circular dependency detected among service providers: "
            + ", ".join(self.remaining),
            context={"providers": self.remaining}
        )


class AmbiguousServiceProviderError(ProviderConfigurationError):
    """Raised when more than one provider declares the same provided token."""

    default_code = "AMBIGUOUS_PROVIDER"

    def __init__(self, token: Any, providers: Sequence[str]):
        self.token = token
        self.providers = list(providers)
        super().__init__(
            f"Service '{token_name(token)}' is provided by more than one "
            f"service provider: {', '.join(self.providers)}",
            context={"token": token, "providers": self.providers}
        )


class GroupedShutdownError(KernelError):
    """
    Raised once at the end of a shutdown phase in which providers failed.

    Attributes:
        failures: Individual shutdown failures in the order they occurred
    """

    default_code = "GROUPED_SHUTDOWN_FAILED"

    def __init__(self, failures: List[ServiceShutdownError]):
        self.failures = list(failures)
        names = ", ".join(f.provider_name for f in self.failures)
        super().__init__(
            f"{len(self.failures)} service provider(s) failed to shutdown: {names}",
            context={"providers": [f.provider_name for f in self.failures]}
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["failures"] = [failure.to_dict() for failure in self.failures]
        return data


class ApplicationError(KernelError):
    """Base class for application state machine errors."""

    default_code = "APPLICATION_ERROR"


class ApplicationBootstrapError(ApplicationError):
    """Raised when bootstrapping is invalid in the current state or fails."""

    default_code = "APPLICATION_BOOTSTRAP_FAILED"

    def __init__(
        self,
        message: str = "Failed to bootstrap application",
        cause: Optional[BaseException] = None
    ):
        super().__init__(message, cause=cause)


class ApplicationBootError(ApplicationError):
    """Raised when booting is invalid in the current state or fails."""

    default_code = "APPLICATION_BOOT_FAILED"

    def __init__(
        self,
        message: str = "Failed to boot application",
        cause: Optional[BaseException] = None
    ):
        super().__init__(message, cause=cause)


class ApplicationShutdownError(ApplicationError):
    """Raised when one or more providers failed during application shutdown."""

    default_code = "APPLICATION_SHUTDOWN_FAILED"

    def __init__(
        self,
        message: str = "Failed to shutdown application",
        cause: Optional[BaseException] = None
    ):
        super().__init__(message, cause=cause)


class ProviderLoadError(KernelError):
    """Raised when a provider cannot be loaded from an import path."""

    default_code = "PROVIDER_LOAD_FAILED"

    def __init__(self, path: str, reason: str, cause: Optional[BaseException] = None):
        super().__init__(
            f"Cannot load service provider '{path}': {reason}",
            context={"path": path},
            cause=cause
        )
        self.path = path
