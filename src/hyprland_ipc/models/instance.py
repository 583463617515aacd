from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from hyprland_ipc.errors import NoDefaultInstanceError
from hyprland_ipc.paths import LOCK_FILE_NAME, hypr_runtime_dir

SIGNATURE_ENV = "HYPRLAND_INSTANCE_SIGNATURE"

U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1


def _parse_unsigned(text: str, maximum: int) -> int | None:
    """Parse a decimal with an optional leading "+", rejecting values above ``maximum``."""
    digits = text[1:] if text.startswith("+") else text
    if not digits or not (digits.isascii() and digits.isdigit()):
        return None
    value = int(digits)
    return value if value <= maximum else None


@dataclass(frozen=True)
class Instance:
    """One running Hyprland instance, as described by its runtime directory.

    ``instance`` is the directory name (``<hash>_<unix-time>_<suffix>``) and is
    the only field the transport uses: the command socket lives at
    ``<base_dir>/<instance>/.socket.sock``.
    """

    instance: str
    time: int
    pid: int
    wl_socket: str
    base_dir: Path | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_dir(cls, path: Path) -> Instance | None:
        """Parse an instance directory. Returns None for anything malformed.

        A missing or empty ``hyprland.lock`` means the instance has not finished
        starting up, which is treated the same as a corrupt entry.
        """
        name = path.name
        first = name.find("_")
        last = name.rfind("_")
        if first == -1 or last <= first:
            return None
        time = _parse_unsigned(name[first + 1 : last], U64_MAX)
        if time is None:
            return None

        try:
            content = (path / LOCK_FILE_NAME).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None
        if not content:
            return None

        lines = [line.strip() for line in content.splitlines()]
        if len(lines) != 2:
            return None
        pid = _parse_unsigned(lines[0], U32_MAX)
        if pid is None or not lines[1]:
            return None

        return cls(
            instance=name,
            time=time,
            pid=pid,
            wl_socket=lines[1],
            base_dir=path.parent,
        )

    @classmethod
    def from_current_env(cls, runtime_dir: Path | None = None) -> Instance:
        """Build the instance the calling process is running inside of."""
        signature = os.environ.get(SIGNATURE_ENV)
        if not signature:
            raise NoDefaultInstanceError(
                f"{SIGNATURE_ENV} is not set"
            )
        base = runtime_dir if runtime_dir is not None else hypr_runtime_dir()
        instance = cls.from_dir(base / signature)
        if instance is None:
            raise NoDefaultInstanceError(
                f"{base / signature} does not describe a running instance"
            )
        return instance

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dict suitable for JSON output."""
        return {
            "instance": self.instance,
            "time": self.time,
            "pid": self.pid,
            "wl_socket": self.wl_socket,
        }
