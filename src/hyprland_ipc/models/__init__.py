from hyprland_ipc.models.command import Command, CommandKind
from hyprland_ipc.models.instance import Instance

__all__ = [
    "Command",
    "CommandKind",
    "Instance",
]
