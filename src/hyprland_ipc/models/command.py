from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class CommandKind(StrEnum):
    EMPTY = "empty"
    JSON = "json"


@dataclass(frozen=True)
class Command:
    """A single request: the reply shape it expects plus the command text."""

    kind: CommandKind
    text: str

    @classmethod
    def empty(cls, text: str) -> Command:
        return cls(CommandKind.EMPTY, text)

    @classmethod
    def json(cls, text: str) -> Command:
        return cls(CommandKind.JSON, text)

    @property
    def wire(self) -> str:
        """The command as Hyprland expects it, with the flag prefix."""
        flags = "j" if self.kind is CommandKind.JSON else ""
        return f"{flags}/{self.text}"

    def encode(self) -> bytes:
        return self.wire.encode("utf-8")
