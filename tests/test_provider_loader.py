"""
Tests for loading service providers from import paths.
"""

import pytest

from servicekernel.infrastructure.providers.provider_loader import load_provider, load_providers
from servicekernel.shared.exceptions.kernel_errors import ProviderLoadError


class TestProviderLoader:
    """Test suite for the provider loader."""

    def test_class_is_instantiated(self, provider_module):
        """Test that a provider class is instantiated without arguments."""
        provider = load_provider(f"{provider_module}:ConfigProvider")
        assert type(provider).__name__ == "ConfigProvider"

    def test_factory_is_called(self, provider_module):
        """Test that a zero-argument factory is called."""
        provider = load_provider(f"{provider_module}:make_config_provider")
        assert type(provider).__name__ == "ConfigProvider"

    def test_instance_is_used_as_is(self, provider_module):
        """Test that a module level provider instance is returned unchanged."""
        first = load_provider(f"{provider_module}:config_provider")
        second = load_provider(f"{provider_module}:config_provider")
        assert first is second

    def test_load_providers_keeps_order(self, provider_module):
        """Test that several paths load in order."""
        providers = load_providers([
            f"{provider_module}:DatabaseProvider",
            f"{provider_module}:ConfigProvider"
        ])
        assert [type(p).__name__ for p in providers] == ["DatabaseProvider", "ConfigProvider"]

    @pytest.mark.parametrize("path", ["no_colon", ":Provider", "module:"])
    def test_malformed_path(self, path):
        """Test that paths without module and attribute are rejected."""
        with pytest.raises(ProviderLoadError) as exc_info:
            load_provider(path)
        assert exc_info.value.path == path
        assert exc_info.value.code == "PROVIDER_LOAD_FAILED"

    def test_unknown_module(self):
        """Test that an import failure is wrapped."""
        with pytest.raises(ProviderLoadError) as exc_info:
            load_provider("sk_does_not_exist:Provider")
        assert isinstance(exc_info.value.__cause__, ImportError)

    def test_unknown_attribute(self, provider_module):
        """Test that a missing attribute is reported."""
        with pytest.raises(ProviderLoadError, match="attribute 'Missing' not found"):
            load_provider(f"{provider_module}:Missing")

    def test_non_provider_value(self, provider_module):
        """Test that a value without a register hook is rejected."""
        with pytest.raises(ProviderLoadError, match="not a service provider"):
            load_provider(f"{provider_module}:not_a_provider")

    def test_factory_returning_non_provider(self, provider_module):
        """Test that a factory must produce a provider."""
        with pytest.raises(ProviderLoadError, match="not a service provider"):
            load_provider(f"{provider_module}:make_nothing")
