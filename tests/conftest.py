"""
Test configuration and fixtures for the service kernel tests.
"""

import logging
import sys
from typing import Any, Callable, List, Optional, Sequence, Tuple

import pytest

from servicekernel.core.interfaces.provider_interface import SimpleProvider
from servicekernel.shared.di.container import Container
from servicekernel.shared.logging.structured_logger import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_kernel_logging():
    """Restore the package root logger after each test."""
    yield
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
    root.propagate = True


@pytest.fixture
def container() -> Container:
    """Fresh container for each test."""
    return Container()


@pytest.fixture
def events() -> List[Tuple[str, str]]:
    """Shared log of (phase, provider name) hook calls."""
    return []


@pytest.fixture
def make_provider(events) -> Callable[..., SimpleProvider]:
    """
    Build a provider that records its hook calls.

    ``fail_on`` names the phases ("register", "boot", "shutdown") whose
    hook raises RuntimeError.
    """

    def _make(
        name: Optional[str],
        depends_on: Sequence[Any] = (),
        provides: Sequence[Any] = (),
        fail_on: Sequence[str] = (),
        boot: bool = True,
        shutdown: bool = True
    ) -> SimpleProvider:
        def hook(phase: str):
            def _hook(container: Container) -> None:
                events.append((phase, name))
                if phase in fail_on:
                    raise RuntimeError(f"{name} {phase} failed")
            return _hook

        return SimpleProvider(
            register=hook("register"),
            boot=hook("boot") if boot else None,
            shutdown=hook("shutdown") if shutdown else None,
            name=name,
            depends_on=depends_on,
            provides=provides
        )

    return _make


@pytest.fixture
def config_dir(tmp_path):
    """Configuration directory with a minimal base.yaml."""
    directory = tmp_path / "config"
    directory.mkdir()
    (directory / "base.yaml").write_text(
        "application:\n"
        "  name: test-app\n"
        "logging:\n"
        "  level: INFO\n"
        "  format: json\n"
        "providers: []\n"
    )
    return directory


PROVIDER_MODULE_SOURCE = '''
from servicekernel.core.interfaces.provider_interface import LifecycleProvider, ServiceProvider


class ConfigProvider(ServiceProvider):
    def register(self, container):
        container.register_value("config", {"dsn": "sqlite://"})

    def get_provided_services(self):
        return ["config"]


class DatabaseProvider(LifecycleProvider):
    def register(self, container):
        container.register_factory("db", lambda config: config["dsn"], deps=["config"])

    def boot(self, container):
        container.resolve("db")

    def shutdown(self, container):
        pass

    def get_dependencies(self):
        return ["config"]

    def get_provided_services(self):
        return ["db"]


class BrokenProvider(LifecycleProvider):
    def register(self, container):
        pass

    def boot(self, container):
        raise RuntimeError("cannot connect")

    def shutdown(self, container):
        pass


def make_config_provider():
    return ConfigProvider()


config_provider = ConfigProvider()

not_a_provider = 42


def make_nothing():
    return object()
'''


@pytest.fixture
def provider_module(tmp_path, monkeypatch) -> str:
    """Importable module of sample providers; returns its name."""
    name = "sk_sample_providers"
    (tmp_path / f"{name}.py").write_text(PROVIDER_MODULE_SOURCE)
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.delitem(sys.modules, name, raising=False)
    return name
