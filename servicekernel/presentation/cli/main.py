"""
Command line entry point.

Loads the kernel configuration and the providers it lists, then hands
them to a lifecycle command handler.
"""

import asyncio
from typing import Any, Optional, Type

import click

from ...infrastructure.config.config_manager import ConfigManager
from ...infrastructure.providers.provider_loader import load_providers
from ...shared.exceptions.kernel_errors import ProviderLoadError
from ...shared.logging.logger_interface import LogLevel
from ...shared.logging.structured_logger import configure_logging
from .commands.lifecycle_commands import BootOrderCommand, RunCommand, ServicesCommand
from .formatters.output_formatter import OutputFormatter
from .handlers.cli_handler import CommandHandler


@click.group()
@click.option("--config-dir", default="config", show_default=True,
              type=click.Path(file_okay=False), help="Configuration directory")
@click.option("--env", "environment", default=None,
              help="Environment name, defaults to $SERVICEKERNEL_ENV")
@click.option("--log-level", default=None,
              type=click.Choice([level.value for level in LogLevel], case_sensitive=False),
              help="Override the configured log level")
@click.option("--plain", is_flag=True, help="Plain text tables instead of rich output")
@click.pass_context
def cli(
    ctx: click.Context,
    config_dir: str,
    environment: Optional[str],
    log_level: Optional[str],
    plain: bool
) -> None:
    """Service kernel lifecycle CLI."""
    manager = ConfigManager(config_dir=config_dir, environment=environment)
    try:
        config = manager.load_config()
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    configure_logging(
        level=LogLevel.parse(log_level or config.get_log_level()),
        fmt=config.get_log_format()
    )

    ctx.obj = {
        "config": config,
        "formatter": OutputFormatter(use_rich=not plain),
    }


def _run_command(ctx: click.Context, handler_cls: Type[CommandHandler], **kwargs: Any) -> None:
    handler = handler_cls(ctx.obj["formatter"])
    try:
        providers = load_providers(ctx.obj["config"].get_providers())
    except ProviderLoadError as e:
        result = handler.handle_error(e, "Failed to load service providers")
    else:
        result = asyncio.run(handler.execute(providers=providers, **kwargs))

    if not result.success:
        ctx.exit(1)


@cli.command("boot-order")
@click.option("--reverse", is_flag=True, help="Show the shutdown order")
@click.pass_context
def boot_order(ctx: click.Context, reverse: bool) -> None:
    """Show the provider boot order without running any hook."""
    _run_command(ctx, BootOrderCommand, reverse=reverse)


@cli.command()
@click.pass_context
def services(ctx: click.Context) -> None:
    """Register all providers and list the services they define."""
    _run_command(ctx, ServicesCommand)


@cli.command()
@click.option("--once", is_flag=True, help="Stop right after a successful start")
@click.pass_context
def run(ctx: click.Context, once: bool) -> None:
    """Start all providers and run until SIGINT or SIGTERM."""
    _run_command(ctx, RunCommand, once=once)


if __name__ == "__main__":
    cli()
