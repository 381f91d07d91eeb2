"""
Core entities module for the service kernel.

This module provides access to the service token and definition types
used throughout the kernel.
"""

from .service_entity import (
    MISSING,
    ServiceDefinition,
    ServiceScope,
    ServiceToken,
    Token
)

__all__ = [
    'MISSING',
    'ServiceDefinition',
    'ServiceScope',
    'ServiceToken',
    'Token'
]
