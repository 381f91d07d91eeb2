"""
Tests for the application facade and the kernel entry point.
"""

import pytest

from servicekernel.application.application import Application, ApplicationState
from servicekernel.application.kernel import Kernel
from servicekernel.core.interfaces.provider_interface import SimpleProvider
from servicekernel.shared.exceptions.kernel_errors import (
    ApplicationBootError,
    ApplicationBootstrapError,
    ApplicationShutdownError,
    DuplicateProviderNameError,
    GroupedShutdownError,
    ServiceBootError,
    ServiceRegistrationError,
)


@pytest.fixture
def app():
    return Application()


class TestApplication:
    """Test suite for the application state machine."""

    def test_starts_idle(self, app):
        """Test the initial state."""
        assert app.state is ApplicationState.IDLE
        assert not app.is_running()

    def test_register_chains(self, app, make_provider):
        """Test that register returns the application."""
        assert app.register(make_provider("A")).register(make_provider("B")) is app

    @pytest.mark.asyncio
    async def test_boot_before_bootstrap_raises(self, app):
        """Test that booting an idle application is rejected."""
        with pytest.raises(ApplicationBootError) as exc_info:
            await app.boot()
        assert str(exc_info.value) == "Application must be bootstrapped before booting"
        assert not app.is_running()

    @pytest.mark.asyncio
    async def test_run_shutdown_run(self, app, make_provider):
        """Test a full lifecycle followed by a second run."""
        app.register(make_provider("A"))

        await app.run()
        assert app.is_running()
        assert app.state is ApplicationState.RUNNING

        await app.shutdown()
        assert not app.is_running()
        assert app.state is ApplicationState.IDLE

        app.register(make_provider("A"))
        await app.run()
        assert app.is_running()

    @pytest.mark.asyncio
    async def test_bootstrap_twice_raises(self, app):
        """Test that bootstrapping is only allowed from idle."""
        await app.bootstrap()
        assert app.state is ApplicationState.BOOTSTRAPPED

        with pytest.raises(ApplicationBootstrapError) as exc_info:
            await app.bootstrap()
        assert str(exc_info.value) == "Application is already bootstrapped"

    @pytest.mark.asyncio
    async def test_boot_twice_raises(self, app):
        """Test that a running application cannot boot again."""
        await app.run()
        with pytest.raises(ApplicationBootError) as exc_info:
            await app.boot()
        assert str(exc_info.value) == "Application is already booted"

    @pytest.mark.asyncio
    async def test_bootstrap_failure_stays_idle(self, app, make_provider):
        """Test that a registration failure is wrapped and leaves the state idle."""
        app.register(make_provider("broken", fail_on=["register"]))

        with pytest.raises(ApplicationBootstrapError) as exc_info:
            await app.bootstrap()

        assert isinstance(exc_info.value.cause, ServiceRegistrationError)
        assert exc_info.value.__cause__ is exc_info.value.cause
        assert app.state is ApplicationState.IDLE

    @pytest.mark.asyncio
    async def test_boot_failure_stays_bootstrapped(self, app, make_provider):
        """Test that a boot failure is wrapped and leaves the state bootstrapped."""
        app.register(make_provider("broken", fail_on=["boot"]))
        await app.bootstrap()

        with pytest.raises(ApplicationBootError) as exc_info:
            await app.boot()

        assert isinstance(exc_info.value.cause, ServiceBootError)
        assert app.state is ApplicationState.BOOTSTRAPPED

    @pytest.mark.asyncio
    async def test_boot_ordering_failure_is_wrapped(self, app, make_provider):
        """Test that configuration errors surface as boot errors."""
        app.register(make_provider("X")).register(make_provider("X"))
        await app.bootstrap()

        with pytest.raises(ApplicationBootError) as exc_info:
            await app.boot()
        assert isinstance(exc_info.value.cause, DuplicateProviderNameError)

    @pytest.mark.asyncio
    async def test_shutdown_when_idle_is_a_noop(self, app, events, make_provider):
        """Test that shutting down an idle application does nothing."""
        app.register(make_provider("A"))
        await app.shutdown()
        assert events == []
        assert app.service_manager.get_pending_providers() != []

    @pytest.mark.asyncio
    async def test_shutdown_from_bootstrapped(self, app, events, make_provider):
        """Test that a bootstrapped application can be shut down."""
        app.register(make_provider("A"))
        await app.bootstrap()
        await app.shutdown()

        assert ("shutdown", "A") in events
        assert app.state is ApplicationState.IDLE

    @pytest.mark.asyncio
    async def test_shutdown_failure_still_returns_to_idle(self, app, events, make_provider):
        """Test that shutdown failures are reported after a full teardown."""
        app.register(make_provider("A", fail_on=["shutdown"]))
        app.register(make_provider("B"))
        await app.run()

        with pytest.raises(ApplicationShutdownError) as exc_info:
            await app.shutdown()

        assert isinstance(exc_info.value.cause, GroupedShutdownError)
        assert ("shutdown", "B") in events
        assert app.state is ApplicationState.IDLE
        assert not app.is_running()

    @pytest.mark.asyncio
    async def test_providers_share_the_container(self, app):
        """Test that services registered by one provider are resolvable by another."""
        resolved = []
        app.register(SimpleProvider(
            register=lambda c: c.register_value("dsn", "sqlite://"),
            name="config",
            provides=["dsn"]
        ))
        app.register(SimpleProvider(
            register=lambda c: None,
            boot=lambda c: resolved.append(c.resolve("dsn")),
            name="db",
            depends_on=["dsn"]
        ))

        await app.run()
        assert resolved == ["sqlite://"]


class TestKernel:
    """Test suite for the kernel entry point."""

    @pytest.mark.asyncio
    async def test_start_and_stop(self, events, make_provider):
        """Test that the kernel runs its providers."""
        kernel = Kernel([make_provider("A", provides=["a"])])
        kernel.register_service_provider(make_provider("B", depends_on=["a"]))

        app = await kernel.start()
        assert app is kernel.application
        assert app.is_running()
        assert [p for e, p in events if e == "boot"] == ["A", "B"]

        await kernel.stop()
        assert not app.is_running()
        assert [p for e, p in events if e == "shutdown"] == ["B", "A"]

    def test_register_service_provider_chains(self, make_provider):
        """Test that provider registration returns the kernel."""
        kernel = Kernel()
        assert kernel.register_service_provider(make_provider("A")) is kernel
        assert len(kernel.providers) == 1

    @pytest.mark.asyncio
    async def test_uses_given_application(self):
        """Test that an injected application is used."""
        app = Application()
        kernel = Kernel(application=app)
        assert await kernel.start() is app
        await kernel.stop()
