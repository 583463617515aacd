"""Client for Hyprland's control socket."""

from hyprland_ipc.default import default_instance, default_instance_or_exit
from hyprland_ipc.ipc.discovery import list_instances
from hyprland_ipc.ipc.envelope import query, query_async, send_command, send_command_async
from hyprland_ipc.ipc.transport import write_to_socket, write_to_socket_async
from hyprland_ipc.models import Command, CommandKind, Instance

__version__ = "0.1.0"

__all__ = [
    "Command",
    "CommandKind",
    "Instance",
    "__version__",
    "default_instance",
    "default_instance_or_exit",
    "list_instances",
    "query",
    "query_async",
    "send_command",
    "send_command_async",
    "write_to_socket",
    "write_to_socket_async",
]
