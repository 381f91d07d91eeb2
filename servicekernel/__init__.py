"""
Service kernel: a dependency injection container with a phased
service provider lifecycle.
"""

from .application.application import Application, ApplicationState
from .application.kernel import Kernel
from .application.services.service_manager import ServiceManager
from .core.entities import ServiceDefinition, ServiceScope, ServiceToken, Token
from .core.interfaces import (
    BootableProvider,
    LifecycleProvider,
    ServiceProvider,
    ShutdownProvider,
    SimpleProvider,
    SupportsBoot,
    SupportsShutdown
)
from .shared.di.container import Container
from .shared.exceptions.kernel_errors import (
    AmbiguousServiceProviderError,
    ApplicationBootError,
    ApplicationBootstrapError,
    ApplicationError,
    ApplicationShutdownError,
    AsyncResolutionError,
    CircularDependencyError,
    CircularProviderDependencyError,
    ContainerError,
    DuplicateProviderNameError,
    GroupedShutdownError,
    InvalidServiceDefinitionError,
    KernelError,
    MissingProviderDependencyError,
    ProviderConfigurationError,
    ProviderLoadError,
    ServiceBootError,
    ServiceError,
    ServiceNotFoundError,
    ServiceRegistrationError,
    ServiceShutdownError,
    token_name
)
from .shared.logging.structured_logger import configure_logging, get_logger

__version__ = "1.0.0"

__all__ = [
    'Application',
    'ApplicationState',
    'Kernel',
    'ServiceManager',
    'ServiceDefinition',
    'ServiceScope',
    'ServiceToken',
    'Token',
    'BootableProvider',
    'LifecycleProvider',
    'ServiceProvider',
    'ShutdownProvider',
    'SimpleProvider',
    'SupportsBoot',
    'SupportsShutdown',
    'Container',
    'AmbiguousServiceProviderError',
    'ApplicationBootError',
    'ApplicationBootstrapError',
    'ApplicationError',
    'ApplicationShutdownError',
    'AsyncResolutionError',
    'CircularDependencyError',
    'CircularProviderDependencyError',
    'ContainerError',
    'DuplicateProviderNameError',
    'GroupedShutdownError',
    'InvalidServiceDefinitionError',
    'KernelError',
    'MissingProviderDependencyError',
    'ProviderConfigurationError',
    'ProviderLoadError',
    'ServiceBootError',
    'ServiceError',
    'ServiceNotFoundError',
    'ServiceRegistrationError',
    'ServiceShutdownError',
    'token_name',
    'configure_logging',
    'get_logger'
]
