"""
Tests for provider naming and boot order computation.
"""

import pytest
from types import SimpleNamespace

from servicekernel.core.entities.service_entity import ServiceToken
from servicekernel.core.interfaces.provider_interface import ServiceProvider
from servicekernel.domain.lifecycle.boot_order import BootOrderService
from servicekernel.domain.lifecycle.provider_naming import ProviderNameRegistry
from servicekernel.shared.exceptions.kernel_errors import (
    AmbiguousServiceProviderError,
    CircularProviderDependencyError,
    DuplicateProviderNameError,
    MissingProviderDependencyError,
)


class DatabaseProvider(ServiceProvider):
    def register(self, container):
        pass


class NamedProvider(ServiceProvider):
    def register(self, container):
        pass

    def get_provider_name(self):
        return "custom"


@pytest.fixture
def boot_order_service():
    return BootOrderService(ProviderNameRegistry())


def names(nodes):
    return [node.name for node in nodes]


class TestProviderNaming:
    """Test suite for provider naming."""

    def test_explicit_name_wins(self):
        """Test that get_provider_name takes precedence over the class name."""
        assert ProviderNameRegistry().name_of(NamedProvider()) == "custom"

    def test_class_name_is_used(self):
        """Test that a meaningful class name is used."""
        assert ProviderNameRegistry().name_of(DatabaseProvider()) == "DatabaseProvider"

    def test_generic_objects_get_anonymous_names(self, make_provider):
        """Test that generic providers are numbered per registry."""
        naming = ProviderNameRegistry()
        first = make_provider(None)
        second = SimpleNamespace(register=lambda container: None)

        assert naming.name_of(first) == "AnonymousProvider_1"
        assert naming.name_of(second) == "AnonymousProvider_2"

    def test_names_are_memoized_per_instance(self, make_provider):
        """Test that the same instance keeps its name."""
        naming = ProviderNameRegistry()
        provider = make_provider(None)

        assert naming.name_of(provider) == naming.name_of(provider)
        assert naming.name_of(make_provider(None)) == "AnonymousProvider_2"

    def test_empty_explicit_name_falls_back(self, make_provider):
        """Test that an empty explicit name is ignored."""
        assert ProviderNameRegistry().name_of(make_provider("")) == "AnonymousProvider_1"

    def test_counters_are_per_registry(self, make_provider):
        """Test that separate registries number independently."""
        assert ProviderNameRegistry().name_of(make_provider(None)) == "AnonymousProvider_1"
        assert ProviderNameRegistry().name_of(make_provider(None)) == "AnonymousProvider_1"


class TestBootOrder:
    """Test suite for boot order computation."""

    def test_dependencies_boot_first(self, boot_order_service, make_provider):
        """Test that providers are ordered by declared service dependencies."""
        p1 = make_provider("P1", provides=["x"])
        p2 = make_provider("P2", depends_on=["x"], provides=["y"])
        p3 = make_provider("P3", depends_on=["y"])

        order = boot_order_service.boot_order([p3, p2, p1])

        assert names(order) == ["P1", "P2", "P3"]
        assert names(boot_order_service.shutdown_order([p3, p2, p1])) == ["P3", "P2", "P1"]

    def test_ties_keep_registration_order(self, boot_order_service, make_provider):
        """Test that independent providers keep their registration order."""
        providers = [make_provider(name) for name in ["C", "A", "B"]]
        assert names(boot_order_service.boot_order(providers)) == ["C", "A", "B"]

    def test_diamond(self, boot_order_service, make_provider):
        """Test a diamond shaped dependency graph."""
        base = make_provider("base", provides=["config"])
        left = make_provider("left", depends_on=["config"], provides=["db"])
        right = make_provider("right", depends_on=["config"], provides=["cache"])
        top = make_provider("top", depends_on=["db", "cache"])

        order = names(boot_order_service.boot_order([top, right, left, base]))

        assert order == ["base", "right", "left", "top"]

    def test_self_dependency_is_ignored(self, boot_order_service, make_provider):
        """Test that a provider depending on its own service is not a cycle."""
        provider = make_provider("P", depends_on=["x"], provides=["x"])
        assert names(boot_order_service.boot_order([provider])) == ["P"]

    def test_empty_provider_list(self, boot_order_service):
        """Test that no providers give an empty order."""
        assert boot_order_service.boot_order([]) == []

    def test_duplicate_names_are_rejected(self, boot_order_service, make_provider):
        """Test that two providers named alike are a configuration error."""
        with pytest.raises(DuplicateProviderNameError) as exc_info:
            boot_order_service.boot_order([make_provider("X"), make_provider("X")])
        assert exc_info.value.name == "X"

    def test_missing_dependency(self, boot_order_service, make_provider):
        """Test that a dependency nobody provides is reported."""
        provider = make_provider("P", depends_on=["db"])
        with pytest.raises(MissingProviderDependencyError) as exc_info:
            boot_order_service.boot_order([provider])
        assert exc_info.value.provider_name == "P"
        assert exc_info.value.token == "db"

    def test_ambiguous_provider(self, boot_order_service, make_provider):
        """Test that one token provided twice is a configuration error."""
        with pytest.raises(AmbiguousServiceProviderError) as exc_info:
            boot_order_service.boot_order([
                make_provider("A", provides=["db"]),
                make_provider("B", provides=["db"])
            ])
        assert exc_info.value.providers == ["A", "B"]

    def test_repeated_provided_token_is_harmless(self, boot_order_service, make_provider):
        """Test that a provider listing a token twice is accepted."""
        provider = make_provider("A", provides=["db", "db"])
        assert names(boot_order_service.boot_order([provider])) == ["A"]

    def test_cycle_lists_remaining_providers(self, boot_order_service, make_provider):
        """Test that a provider cycle reports the unordered providers."""
        free = make_provider("free", provides=["z"])
        a = make_provider("A", depends_on=["y"], provides=["x"])
        b = make_provider("B", depends_on=["x"], provides=["y"])

        with pytest.raises(CircularProviderDependencyError) as exc_info:
            boot_order_service.boot_order([a, free, b])
        assert exc_info.value.remaining == ["A", "B"]

    def test_service_token_dependencies(self, boot_order_service, make_provider):
        """Test that symbolic tokens link providers by identity."""
        token = ServiceToken("db")
        provider = make_provider("db", provides=[token])
        consumer = make_provider("app", depends_on=[token])

        assert names(boot_order_service.boot_order([consumer, provider])) == ["db", "app"]

    def test_duck_typed_provider_without_declarations(self, boot_order_service):
        """Test that providers without dependency getters are accepted."""
        provider = SimpleNamespace(register=lambda container: None)
        order = boot_order_service.boot_order([provider])
        assert order[0].depends_on == ()
        assert order[0].provides == ()
