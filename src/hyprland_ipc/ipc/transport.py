"""Request/response exchange over an instance's command socket.

The protocol: connect, write the whole command, read until the peer closes
the connection, decode the bytes as UTF-8. One connection per call, no
retries and no timeouts. The blocking and asyncio entry points share
``_Exchange`` for everything except the I/O itself.
"""

from __future__ import annotations

import asyncio
import contextlib
import socket
from dataclasses import dataclass
from pathlib import Path

from hyprland_ipc.errors import ConnectivityError, DecodeError, TransportError
from hyprland_ipc.logging_config import get_library_logger
from hyprland_ipc.models.command import Command
from hyprland_ipc.models.instance import Instance
from hyprland_ipc.paths import command_socket_path

log = get_library_logger(__name__)

READ_CHUNK_SIZE = 8192


@dataclass(frozen=True)
class _Exchange:
    socket_path: Path
    payload: bytes

    @classmethod
    def prepare(cls, instance: Instance, command: Command | str) -> _Exchange:
        if isinstance(command, Command):
            payload = command.encode()
        else:
            payload = command.encode("utf-8")
        return cls(command_socket_path(instance), payload)

    def connect_failed(self, e: OSError) -> ConnectivityError:
        return ConnectivityError(
            self.socket_path,
            f"Cannot connect to Hyprland: {e.strerror or e}",
        )

    def io_failed(self, e: OSError) -> TransportError:
        return TransportError(f"{self.socket_path}: exchange failed: {e.strerror or e}")

    def decode(self, raw: bytes) -> str:
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"{self.socket_path}: reply is not valid UTF-8: {e}") from e


def write_to_socket(instance: Instance, command: Command | str) -> str:
    """Send a command and return the full reply, blocking the calling thread."""
    exchange = _Exchange.prepare(instance, command)
    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
        try:
            sock.connect(str(exchange.socket_path))
        except OSError as e:
            raise exchange.connect_failed(e) from e
        log.debug("socket connected", socket_path=str(exchange.socket_path))

        chunks: list[bytes] = []
        try:
            sock.sendall(exchange.payload)
            while chunk := sock.recv(READ_CHUNK_SIZE):
                chunks.append(chunk)
        except OSError as e:
            raise exchange.io_failed(e) from e

    return exchange.decode(b"".join(chunks))


async def write_to_socket_async(instance: Instance, command: Command | str) -> str:
    """Send a command and return the full reply without blocking the event loop."""
    exchange = _Exchange.prepare(instance, command)
    try:
        reader, writer = await asyncio.open_unix_connection(str(exchange.socket_path))
    except OSError as e:
        raise exchange.connect_failed(e) from e
    log.debug("socket connected", socket_path=str(exchange.socket_path))

    try:
        writer.write(exchange.payload)
        await writer.drain()
        raw = await reader.read()
    except OSError as e:
        raise exchange.io_failed(e) from e
    finally:
        writer.close()
        with contextlib.suppress(OSError):
            await writer.wait_closed()

    return exchange.decode(raw)
