import asyncio
import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hyprland_ipc import __version__, ctl
from hyprland_ipc.config.loader import ConfigError, load_config
from hyprland_ipc.default import default_instance
from hyprland_ipc.errors import HyprError, NoDefaultInstanceError
from hyprland_ipc.ipc.discovery import list_instances
from hyprland_ipc.ipc.envelope import query_async, send_command_async
from hyprland_ipc.logging_config import configure_logging, get_logger
from hyprland_ipc.models import Command, Instance
from hyprland_ipc.paths import hypr_runtime_dir

console = Console()


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)
    raise SystemExit(1)


def _run_async(coro):
    """Run an async command from sync Click commands, reporting Hyprland errors."""
    try:
        return asyncio.run(coro)
    except HyprError as e:
        _fail(str(e))


def _runtime_dir(ctx: click.Context) -> Path:
    return ctx.obj["runtime_dir"] or hypr_runtime_dir()


def _get_instance(ctx: click.Context) -> Instance:
    """Resolve the target instance: --instance, then config, then the environment."""
    signature = ctx.obj["instance"]
    if signature:
        base = _runtime_dir(ctx)
        instance = Instance.from_dir(base / signature)
        if instance is None:
            _fail(f"Instance {signature} not found under {base}")
        get_logger(instance=instance.instance).debug("instance selected", pid=instance.pid)
        return instance

    try:
        if ctx.obj["runtime_dir"]:
            return Instance.from_current_env(ctx.obj["runtime_dir"])
        return default_instance()
    except NoDefaultInstanceError as e:
        _fail(f"{e}. Use --instance to pick one from 'hypr-ipc instances'.")


def _format_started(timestamp: int) -> str:
    try:
        return datetime.fromtimestamp(timestamp).isoformat(timespec="seconds")
    except (OverflowError, OSError, ValueError):
        return str(timestamp)


def _parse_color(value: str) -> ctl.Color:
    text = value.lstrip("#")
    if len(text) not in (6, 8):
        raise click.BadParameter("expected RRGGBB or RRGGBBAA")
    try:
        channels = [int(text[i : i + 2], 16) for i in range(0, len(text), 2)]
    except ValueError as e:
        raise click.BadParameter("expected hex digits") from e
    return ctl.Color(*channels)


@click.group()
@click.version_option(version=__version__, prog_name="hypr-ipc")
@click.option("--config", "config_path", default=None, type=click.Path(path_type=Path), help="Config file path")
@click.option("--instance", default=None, help="Instance signature to talk to")
@click.option("--runtime-dir", default=None, type=click.Path(path_type=Path), help="Hyprland runtime directory")
@click.option("--log-level", default=None, help="Log level (overrides config)")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    instance: str | None,
    runtime_dir: Path | None,
    log_level: str | None,
) -> None:
    """hypr-ipc: talk to running Hyprland instances over their control socket."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        _fail(str(e))

    configure_logging(log_level or config.log_level)
    ctx.ensure_object(dict)
    ctx.obj["instance"] = instance or config.instance
    ctx.obj["runtime_dir"] = runtime_dir or config.runtime_dir


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
@click.pass_context
def instances(ctx: click.Context, as_json: bool) -> None:
    """List running Hyprland instances."""
    try:
        found = list_instances(_runtime_dir(ctx))
    except HyprError as e:
        _fail(str(e))

    if as_json:
        click.echo(json.dumps([i.to_dict() for i in found], indent=2))
        return
    if not found:
        console.print("No running instances.")
        return

    table = Table(title="Hyprland Instances")
    table.add_column("Instance", style="cyan")
    table.add_column("Started", style="blue")
    table.add_column("PID", justify="right")
    table.add_column("Wayland Socket", style="magenta")
    for i in found:
        table.add_row(
            i.instance,
            _format_started(i.time),
            str(i.pid),
            i.wl_socket,
        )
    console.print(table)


@cli.command()
@click.argument("text", nargs=-1, required=True)
@click.option("--json", "as_json", is_flag=True, help="Request and pretty-print a JSON reply")
@click.pass_context
def raw(ctx: click.Context, text: tuple[str, ...], as_json: bool) -> None:
    """Send a raw hyprctl command, e.g. 'hypr-ipc raw --json clients'."""
    instance = _get_instance(ctx)
    command_text = " ".join(text)

    if as_json:
        data = _run_async(query_async(Command.json(command_text), instance=instance))
        click.echo(json.dumps(data, indent=2))
    else:
        reply = _run_async(send_command_async(Command.empty(command_text), instance))
        click.echo(reply)


@cli.command()
@click.pass_context
def reload(ctx: click.Context) -> None:
    """Reload the Hyprland config."""
    _run_async(ctl.reload_async(_get_instance(ctx)))
    console.print("[green]Config reloaded.[/green]")


@cli.command()
@click.pass_context
def kill(ctx: click.Context) -> None:
    """Enter kill mode: the next clicked window is killed."""
    _run_async(ctl.kill_async(_get_instance(ctx)))


@cli.command()
@click.argument("message")
@click.option(
    "--icon",
    type=click.Choice([i.name.lower() for i in ctl.Icon]),
    default="info",
    help="Notification icon",
)
@click.option("--time-ms", default=5000, type=int, help="How long to show it")
@click.option("--color", default="ffffff", help="Text color as RRGGBB[AA]")
@click.pass_context
def notify(ctx: click.Context, message: str, icon: str, time_ms: int, color: str) -> None:
    """Show a notification in Hyprland."""
    try:
        parsed = _parse_color(color)
    except click.BadParameter as e:
        _fail(f"--color: {e.message}")
    _run_async(
        ctl.notify_async(
            ctl.Icon[icon.upper()],
            timedelta(milliseconds=time_ms),
            parsed,
            message,
            _get_instance(ctx),
        )
    )


@cli.command()
@click.option("--amount", default=None, type=click.IntRange(1, 255), help="Dismiss this many (default: all)")
@click.pass_context
def dismiss(ctx: click.Context, amount: int | None) -> None:
    """Dismiss notifications."""
    _run_async(ctl.dismiss_notify_async(amount, _get_instance(ctx)))


@cli.group()
def plugins() -> None:
    """Manage Hyprland plugins."""


@plugins.command("list")
@click.pass_context
def plugins_list(ctx: click.Context) -> None:
    """List loaded plugins."""
    loaded = _run_async(ctl.plugin_list_async(_get_instance(ctx)))
    if not loaded:
        console.print("No plugins loaded.")
        return

    table = Table(title="Plugins")
    table.add_column("Name", style="cyan")
    table.add_column("Version", style="blue")
    table.add_column("Author")
    table.add_column("Description")
    for p in loaded:
        table.add_row(p.name, p.version, p.author, p.description)
    console.print(table)


@plugins.command("load")
@click.argument("path", type=click.Path(path_type=Path))
@click.pass_context
def plugins_load(ctx: click.Context, path: Path) -> None:
    """Load a plugin from an absolute path."""
    _run_async(ctl.plugin_load_async(path.resolve(), _get_instance(ctx)))
    console.print(f"[green]Loaded {escape(str(path))}[/green]")


@plugins.command("unload")
@click.argument("path", type=click.Path(path_type=Path))
@click.pass_context
def plugins_unload(ctx: click.Context, path: Path) -> None:
    """Unload a plugin by the path it was loaded from."""
    _run_async(ctl.plugin_unload_async(path.resolve(), _get_instance(ctx)))
    console.print(f"[green]Unloaded {escape(str(path))}[/green]")
