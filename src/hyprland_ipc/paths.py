"""Filesystem locations used by Hyprland instances."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hyprland_ipc.models.instance import Instance

LOCK_FILE_NAME = "hyprland.lock"
COMMAND_SOCKET_NAME = ".socket.sock"
EVENT_SOCKET_NAME = ".socket2.sock"


def hypr_runtime_dir() -> Path:
    """Return the directory holding one subdirectory per running instance."""
    runtime = os.environ.get("XDG_RUNTIME_DIR")
    if runtime:
        return Path(runtime) / "hypr"
    return Path("/run/user") / str(os.getuid()) / "hypr"


def instance_dir(instance: Instance) -> Path:
    base = instance.base_dir if instance.base_dir is not None else hypr_runtime_dir()
    return base / instance.instance


def command_socket_path(instance: Instance) -> Path:
    return instance_dir(instance) / COMMAND_SOCKET_NAME


def event_socket_path(instance: Instance) -> Path:
    """Path of the push-notification socket, consumed by event listeners."""
    return instance_dir(instance) / EVENT_SOCKET_NAME
