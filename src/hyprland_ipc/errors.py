"""Exception hierarchy for discovery, transport and command failures."""

from __future__ import annotations

from pathlib import Path


class HyprError(Exception):
    """Base class for every error raised by hyprland_ipc."""


class DiscoveryError(HyprError):
    """Raised when the runtime directory cannot be read at all."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


class NoDefaultInstanceError(HyprError):
    """Raised when the environment does not identify a running instance."""


class ConnectivityError(HyprError):
    """Raised when the command socket is missing or refuses the connection."""

    def __init__(self, socket_path: Path, message: str) -> None:
        self.socket_path = socket_path
        super().__init__(f"{socket_path}: {message}")


class TransportError(HyprError):
    """Raised when a write or read fails partway through an exchange."""


class DecodeError(HyprError):
    """Raised when a reply arrived but is not valid UTF-8 or the expected JSON."""


class CommandError(HyprError):
    """Raised by command wrappers when Hyprland reports a failure in its reply."""
