"""
Core interfaces module for the service kernel.

This module provides access to the service provider contract and its
optional lifecycle capabilities.
"""

from .provider_interface import (
    BootableProvider,
    LifecycleProvider,
    ServiceProvider,
    ShutdownProvider,
    SimpleProvider,
    SupportsBoot,
    SupportsShutdown,
    supports_boot,
    supports_shutdown
)

__all__ = [
    'BootableProvider',
    'LifecycleProvider',
    'ServiceProvider',
    'ShutdownProvider',
    'SimpleProvider',
    'SupportsBoot',
    'SupportsShutdown',
    'supports_boot',
    'supports_shutdown'
]
