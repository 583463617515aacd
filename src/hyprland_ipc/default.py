"""Process-wide default instance, taken from HYPRLAND_INSTANCE_SIGNATURE."""

from __future__ import annotations

import threading

from hyprland_ipc.errors import NoDefaultInstanceError
from hyprland_ipc.models.instance import Instance

_DEFAULT_INSTANCE: Instance | None = None
_DEFAULT_LOCK = threading.Lock()


def default_instance() -> Instance:
    """Return the instance this process runs inside of, computing it once.

    Only a successful construction is cached. A failure propagates
    NoDefaultInstanceError and the next call tries again.
    """
    global _DEFAULT_INSTANCE

    instance = _DEFAULT_INSTANCE
    if instance is not None:
        return instance
    with _DEFAULT_LOCK:
        if _DEFAULT_INSTANCE is None:
            _DEFAULT_INSTANCE = Instance.from_current_env()
        return _DEFAULT_INSTANCE


def default_instance_or_exit() -> Instance:
    """Like default_instance(), but exits with a diagnostic instead of raising."""
    try:
        return default_instance()
    except NoDefaultInstanceError as e:
        raise SystemExit(
            f"Default instance could not be initialized ({e}). "
            "Pass an explicit Instance instead."
        ) from e
