"""Discovery of running Hyprland instances from the runtime directory.

Each instance owns a directory ``<runtime>/hypr/<hash>_<unix-time>_<suffix>``
with a ``hyprland.lock`` file holding the compositor pid and the name of its
Wayland socket. Entries that do not parse are skipped. Candidates are then
checked against the process table in a second pass, so one scan yields one
consistent liveness snapshot.
"""

from __future__ import annotations

import os
from pathlib import Path

from hyprland_ipc.errors import DiscoveryError
from hyprland_ipc.logging_config import get_library_logger
from hyprland_ipc.models.instance import Instance
from hyprland_ipc.paths import hypr_runtime_dir

log = get_library_logger(__name__)

PROC_DIR = Path("/proc")


def pid_exists(pid: int) -> bool:
    """Return True if a process with this pid currently exists."""
    if pid <= 0:
        return False
    if PROC_DIR.is_dir():
        return (PROC_DIR / str(pid)).exists()
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        # Owned by another user, but alive.
        return True
    return True


def list_instances(runtime_dir: Path | None = None) -> list[Instance]:
    """Return the live instances found under the runtime directory.

    Order follows the directory listing and is not stable across calls.
    Raises DiscoveryError if the directory itself cannot be read.
    """
    base = runtime_dir if runtime_dir is not None else hypr_runtime_dir()
    try:
        entries = list(base.iterdir())
    except OSError as e:
        raise DiscoveryError(base, f"Cannot read runtime directory: {e.strerror or e}") from e

    candidates: list[Instance] = []
    for entry in entries:
        instance = Instance.from_dir(entry)
        if instance is None:
            log.debug("skipping instance entry", entry=entry.name)
            continue
        candidates.append(instance)

    alive = [i for i in candidates if pid_exists(i.pid)]
    log.debug(
        "instances discovered",
        runtime_dir=str(base),
        candidates=len(candidates),
        alive=len(alive),
    )
    return alive
