"""CLI entry point for Xplit."""

from __future__ import annotations

import sys
import tomllib
from typing import NoReturn

import click
import structlog

from .config import Config, load_config
from .display import reset_all, reset_one, split_monitor
from .runner import CommandError
from .xrandr import discover, list_monitors

structlog.configure(
    processors=[
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(0),
)


@click.group()
@click.option("--config", "-c", "config_path", default=None, help="Config file path")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """Xplit - split one monitor into two xrandr virtual monitors."""
    ctx.ensure_object(dict)
    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValueError, tomllib.TOMLDecodeError) as e:
        _fail(e)
    _configure_logging(config.logging.level)
    ctx.obj["config"] = config


@cli.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """Show connected monitors."""
    _echo_monitors(ctx.obj["config"])


@cli.command()
@click.pass_context
def monitors(ctx: click.Context) -> None:
    """Show the monitors xrandr currently defines, virtual ones included."""
    config: Config = ctx.obj["config"]
    try:
        listed = list_monitors(config.xrandr.tool, config.xrandr.timeout_seconds)
    except CommandError as e:
        _fail(e)
    for mon in listed:
        flags = ("+" if mon.automatic else "") + ("*" if mon.primary else "")
        outputs = " ".join(mon.outputs) or "-"
        click.echo(f"{mon.index}: {mon.name} {flags}".rstrip() + f"  [{outputs}]")


@cli.command("split")
@click.argument("name")
@click.option(
    "--percent", "-p", type=click.IntRange(0, 100), default=None,
    help="Width of the left monitor in percent (default from config)",
)
@click.pass_context
def split_cmd(ctx: click.Context, name: str, percent: int | None) -> None:
    """Split monitor NAME into NAME-0 (left) and NAME-1 (right)."""
    config: Config = ctx.obj["config"]
    if percent is None:
        percent = config.split.default_percent
    error = None
    try:
        left, right = split_monitor(
            name, percent, config.xrandr.tool, config.xrandr.timeout_seconds
        )
        click.echo(f"{left.name}: {left.geometry}")
        click.echo(f"{right.name}: {right.geometry}")
    except (CommandError, LookupError, ValueError) as e:
        error = e
    _finish(config, error)


@cli.command()
@click.argument("name")
@click.pass_context
def reset(ctx: click.Context, name: str) -> None:
    """Remove the virtual monitors of NAME."""
    config: Config = ctx.obj["config"]
    error = None
    try:
        reset_one(name, config.xrandr.tool, config.xrandr.timeout_seconds)
        click.echo(f"Reset {name}.")
    except CommandError as e:
        error = e
    _finish(config, error)


@cli.command("reset-all")
@click.pass_context
def reset_all_cmd(ctx: click.Context) -> None:
    """Remove every listed monitor."""
    config: Config = ctx.obj["config"]
    error = None
    try:
        deleted = reset_all(config.xrandr.tool, config.xrandr.timeout_seconds)
        click.echo(f"Deleted {len(deleted)} monitor(s).")
    except CommandError as e:
        error = e
    _finish(config, error)


@cli.command()
@click.pass_context
def tray(ctx: click.Context) -> None:
    """Start the system tray icon."""
    from .tray import TrayApp

    app = TrayApp(ctx.obj["config"])
    app.run()


def _echo_monitors(config: Config) -> None:
    result = discover(config.xrandr.tool, config.xrandr.timeout_seconds)
    if not result.monitors:
        click.echo("No connected monitors found.")
    for mon in result.monitors:
        click.echo(str(mon))
    for skipped in result.skipped:
        click.echo(f"{skipped.name}: skipped ({skipped.reason})", err=True)


def _finish(config: Config, error: Exception | None) -> None:
    """Refresh the monitor list after an action, then report its failure."""
    _echo_monitors(config)
    if error is not None:
        _fail(error)


def _fail(error: Exception) -> NoReturn:
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


def _configure_logging(level: str) -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}.get(level.upper(), 20)
        ),
        # stdout carries the command output
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


if __name__ == "__main__":
    cli()
