"""Typed entry points on top of the raw transport.

Every call site states up front whether it expects a plain status string
(``send_command``) or a JSON document decoded into ``result_type``
(``query``). Passing a command of the other kind is a programming error.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from hyprland_ipc.default import default_instance
from hyprland_ipc.errors import DecodeError
from hyprland_ipc.ipc.transport import write_to_socket, write_to_socket_async
from hyprland_ipc.models.command import Command, CommandKind
from hyprland_ipc.models.instance import Instance

T = TypeVar("T")


def _check_kind(command: Command, expected: CommandKind) -> None:
    if command.kind is not expected:
        raise TypeError(
            f"expected a {expected.value}-kind command, "
            f"got {command.kind.value}-kind {command.text!r}"
        )


def _decode_json(text: str, result_type: type[T] | Any, command: Command) -> T:
    try:
        return TypeAdapter(result_type).validate_json(text)
    except ValidationError as e:
        raise DecodeError(f"Invalid JSON reply to {command.text!r}: {e}") from e


def send_command(command: Command, instance: Instance | None = None) -> str:
    """Send an empty-kind command and return Hyprland's status reply."""
    _check_kind(command, CommandKind.EMPTY)
    return write_to_socket(instance or default_instance(), command)


async def send_command_async(command: Command, instance: Instance | None = None) -> str:
    _check_kind(command, CommandKind.EMPTY)
    return await write_to_socket_async(instance or default_instance(), command)


def query(
    command: Command,
    result_type: type[T] | Any = Any,
    instance: Instance | None = None,
) -> T:
    """Send a JSON-kind command and decode the reply into ``result_type``."""
    _check_kind(command, CommandKind.JSON)
    text = write_to_socket(instance or default_instance(), command)
    return _decode_json(text, result_type, command)


async def query_async(
    command: Command,
    result_type: type[T] | Any = Any,
    instance: Instance | None = None,
) -> T:
    _check_kind(command, CommandKind.JSON)
    text = await write_to_socket_async(instance or default_instance(), command)
    return _decode_json(text, result_type, command)
