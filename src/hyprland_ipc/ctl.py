"""hyprctl commands: reload, notifications, outputs, window props and plugins.

Each command comes in a blocking form and an ``_async`` form. ``instance``
defaults to the process-wide default instance.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import IntEnum, StrEnum
from pathlib import Path

from pydantic import BaseModel

from hyprland_ipc.errors import CommandError
from hyprland_ipc.ipc.envelope import query, query_async, send_command, send_command_async
from hyprland_ipc.models.command import Command
from hyprland_ipc.models.instance import Instance

PLUGIN_LOAD_FAILURE = "could not be loaded"
PLUGIN_NOT_LOADED = "plugin not loaded"


@dataclass(frozen=True)
class Color:
    """An 8-bit RGBA color, rendered the way Hyprland parses it."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 255:
                raise ValueError(f"Color channel out of range: {channel}")

    def __str__(self) -> str:
        return f"rgba({self.r:02x}{self.g:02x}{self.b:02x}{self.a:02x})"


class OutputBackend(StrEnum):
    WAYLAND = "wayland"
    X11 = "x11"
    HEADLESS = "headless"
    AUTO = "auto"


class Icon(IntEnum):
    NO_ICON = -1
    WARNING = 0
    INFO = 1
    HINT = 2
    ERROR = 3
    CONFUSED = 4
    OK = 5


XKB_NEXT = "next"
XKB_PREVIOUS = "prev"


@dataclass(frozen=True)
class Prop:
    """A window property for ``setprop``. ``locked`` None omits the lock field."""

    name: str
    value: str
    locked: bool | None = None

    def __str__(self) -> str:
        if self.locked is None:
            return f"{self.name} {self.value}"
        return f"{self.name} {self.value} {'lock' if self.locked else ''}".rstrip()

    @classmethod
    def animation_style(cls, style: str) -> Prop:
        return cls("animationstyle", style)

    @classmethod
    def rounding(cls, radius: int, locked: bool = False) -> Prop:
        return cls("rounding", str(radius), locked)

    @classmethod
    def toggle(cls, name: str, enabled: bool, locked: bool = False) -> Prop:
        """Boolean props such as forcenoblur, forceopaque, nomaxsize, dimaround."""
        return cls(name, str(int(enabled)), locked)

    @classmethod
    def alpha(cls, value: float, locked: bool = False) -> Prop:
        return cls("alpha", f"{value:g}", locked)

    @classmethod
    def alpha_inactive(cls, value: float, locked: bool = False) -> Prop:
        return cls("alphainactive", f"{value:g}", locked)

    @classmethod
    def active_border_color(cls, color: Color, locked: bool = False) -> Prop:
        return cls("activebordercolor", str(color), locked)

    @classmethod
    def inactive_border_color(cls, color: Color, locked: bool = False) -> Prop:
        return cls("inactivebordercolor", str(color), locked)


class Plugin(BaseModel):
    """A loaded plugin as reported by ``plugin list``."""

    name: str
    author: str
    handle: str
    version: str
    description: str


# --- Command builders ---


def reload_command() -> Command:
    return Command.empty("reload")


def kill_command() -> Command:
    return Command.empty("kill")


def set_cursor_command(theme: str, size: int) -> Command:
    return Command.empty(f"setcursor {theme} {size}")


def output_create_command(backend: OutputBackend, name: str | None = None) -> Command:
    return Command.empty(f"output create {backend} {name or ''}".rstrip())


def output_remove_command(name: str) -> Command:
    return Command.empty(f"output remove {name}")


def switch_xkb_layout_command(device: str, cmd: str | int) -> Command:
    return Command.empty(f"switchxkblayout {device} {cmd}")


def set_error_command(color: Color, msg: str) -> Command:
    return Command.empty(f"seterror {color} {msg}")


def notify_command(icon: Icon, time: timedelta, color: Color, msg: str) -> Command:
    millis = int(time / timedelta(milliseconds=1))
    return Command.empty(f"notify {int(icon)} {millis} {color} {msg}")


def dismiss_notify_command(amount: int | None = None) -> Command:
    """``amount`` None dismisses every notification."""
    if amount is not None and not 1 <= amount <= 255:
        raise ValueError(f"amount must be between 1 and 255, got {amount}")
    return Command.empty(f"dismissnotify {amount if amount is not None else -1}")


def set_prop_command(ident: str, prop: Prop, lock: bool = False) -> Command:
    text = f"setprop {ident} {prop}"
    if lock:
        text += " lock"
    return Command.empty(text)


def plugin_list_command() -> Command:
    return Command.json("plugin list")


def plugin_load_command(path: Path) -> Command:
    return Command.empty(f"plugin load {path}")


def plugin_unload_command(path: Path) -> Command:
    return Command.empty(f"plugin unload {path}")


def _check_reply(reply: str, failure: str) -> None:
    if failure in reply:
        raise CommandError(reply.strip())


# --- Blocking commands ---


def reload(instance: Instance | None = None) -> None:
    """Reload the Hyprland config."""
    send_command(reload_command(), instance)


def kill(instance: Instance | None = None) -> None:
    """Enter kill mode (similar to xkill)."""
    send_command(kill_command(), instance)


def set_cursor(theme: str, size: int, instance: Instance | None = None) -> None:
    send_command(set_cursor_command(theme, size), instance)


def output_create(
    backend: OutputBackend, name: str | None = None, instance: Instance | None = None
) -> None:
    """Create a virtual output."""
    send_command(output_create_command(backend, name), instance)


def output_remove(name: str, instance: Instance | None = None) -> None:
    send_command(output_remove_command(name), instance)


def switch_xkb_layout(device: str, cmd: str | int, instance: Instance | None = None) -> None:
    """Switch a keyboard's layout: XKB_NEXT, XKB_PREVIOUS or a layout index."""
    send_command(switch_xkb_layout_command(device, cmd), instance)


def set_error(color: Color, msg: str, instance: Instance | None = None) -> None:
    """Show an error bar in Hyprland."""
    send_command(set_error_command(color, msg), instance)


def notify(
    icon: Icon, time: timedelta, color: Color, msg: str, instance: Instance | None = None
) -> None:
    send_command(notify_command(icon, time, color, msg), instance)


def dismiss_notify(amount: int | None = None, instance: Instance | None = None) -> None:
    send_command(dismiss_notify_command(amount), instance)


def set_prop(ident: str, prop: Prop, lock: bool = False, instance: Instance | None = None) -> None:
    send_command(set_prop_command(ident, prop, lock), instance)


def plugin_list(instance: Instance | None = None) -> list[Plugin]:
    return query(plugin_list_command(), list[Plugin], instance)


def plugin_load(path: Path, instance: Instance | None = None) -> None:
    """Load a plugin by absolute path. Raises CommandError if Hyprland rejects it."""
    _check_reply(send_command(plugin_load_command(path), instance), PLUGIN_LOAD_FAILURE)


def plugin_unload(path: Path, instance: Instance | None = None) -> None:
    _check_reply(send_command(plugin_unload_command(path), instance), PLUGIN_NOT_LOADED)


# --- Async commands ---


async def reload_async(instance: Instance | None = None) -> None:
    await send_command_async(reload_command(), instance)


async def kill_async(instance: Instance | None = None) -> None:
    await send_command_async(kill_command(), instance)


async def set_cursor_async(theme: str, size: int, instance: Instance | None = None) -> None:
    await send_command_async(set_cursor_command(theme, size), instance)


async def output_create_async(
    backend: OutputBackend, name: str | None = None, instance: Instance | None = None
) -> None:
    await send_command_async(output_create_command(backend, name), instance)


async def output_remove_async(name: str, instance: Instance | None = None) -> None:
    await send_command_async(output_remove_command(name), instance)


async def switch_xkb_layout_async(
    device: str, cmd: str | int, instance: Instance | None = None
) -> None:
    await send_command_async(switch_xkb_layout_command(device, cmd), instance)


async def set_error_async(color: Color, msg: str, instance: Instance | None = None) -> None:
    await send_command_async(set_error_command(color, msg), instance)


async def notify_async(
    icon: Icon, time: timedelta, color: Color, msg: str, instance: Instance | None = None
) -> None:
    await send_command_async(notify_command(icon, time, color, msg), instance)


async def dismiss_notify_async(amount: int | None = None, instance: Instance | None = None) -> None:
    await send_command_async(dismiss_notify_command(amount), instance)


async def set_prop_async(
    ident: str, prop: Prop, lock: bool = False, instance: Instance | None = None
) -> None:
    await send_command_async(set_prop_command(ident, prop, lock), instance)


async def plugin_list_async(instance: Instance | None = None) -> list[Plugin]:
    return await query_async(plugin_list_command(), list[Plugin], instance)


async def plugin_load_async(path: Path, instance: Instance | None = None) -> None:
    reply = await send_command_async(plugin_load_command(path), instance)
    _check_reply(reply, PLUGIN_LOAD_FAILURE)


async def plugin_unload_async(path: Path, instance: Instance | None = None) -> None:
    reply = await send_command_async(plugin_unload_command(path), instance)
    _check_reply(reply, PLUGIN_NOT_LOADED)
