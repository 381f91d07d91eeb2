"""
Service provider loading from import paths.

Configuration lists providers as ``module:attribute`` strings. The
attribute may be a provider class (instantiated without arguments), a
zero-argument factory, or a ready provider instance.
"""

import importlib
from typing import Any, Iterable, List

from ...shared.exceptions.kernel_errors import ProviderLoadError


def _is_provider(candidate: Any) -> bool:
    return not isinstance(candidate, type) and callable(getattr(candidate, "register", None))


def load_provider(path: str) -> Any:
    """
    Load one service provider.

    Args:
        path: ``module:attribute`` import path; the attribute may be dotted

    Returns:
        Any: Service provider instance

    Raises:
        ProviderLoadError: If the path is malformed, the import fails or
            the target does not produce a provider
    """
    module_name, sep, attr_path = path.partition(":")
    if not sep or not module_name or not attr_path:
        raise ProviderLoadError(path, "expected 'module:attribute'")

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ProviderLoadError(path, f"cannot import module '{module_name}'", cause=e) from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as e:
            raise ProviderLoadError(path, f"attribute '{attr}' not found", cause=e) from e

    if _is_provider(target):
        return target

    if callable(target):
        try:
            provider = target()
        except Exception as e:
            raise ProviderLoadError(path, "provider construction failed", cause=e) from e
        if _is_provider(provider):
            return provider
        raise ProviderLoadError(path, f"{type(provider).__name__} is not a service provider")

    raise ProviderLoadError(path, f"{type(target).__name__} is not a service provider")


def load_providers(paths: Iterable[str]) -> List[Any]:
    """
    Load service providers in the given order.

    Args:
        paths: ``module:attribute`` import paths

    Returns:
        List[Any]: Service provider instances
    """
    return [load_provider(path) for path in paths]
