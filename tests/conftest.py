from __future__ import annotations

import logging
import socket
import tempfile
import threading
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog

import hyprland_ipc.default
from hyprland_ipc.logging_config import PACKAGE_LOGGER
from hyprland_ipc.models.instance import Instance

INSTANCE_NAME = "abc_1700000000_xyz"


class FakeHyprland:
    """Serves a command socket: reads one request, sends a fixed reply, closes."""

    def __init__(self, socket_path: Path, reply: bytes) -> None:
        self.socket_path = socket_path
        self.reply = reply
        self.received: list[bytes] = []
        self._stop = threading.Event()
        self._sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        self._sock.bind(str(socket_path))
        self._sock.listen(8)
        self._sock.settimeout(0.05)
        self._thread = threading.Thread(target=self._serve, daemon=True)

    def start(self) -> FakeHyprland:
        self._thread.start()
        return self

    def _serve(self) -> None:
        while not self._stop.is_set():
            try:
                conn, _ = self._sock.accept()
            except TimeoutError:
                continue
            except OSError:
                return
            with conn:
                conn.settimeout(5)
                self._handle(conn)

    def _handle(self, conn: socket.socket) -> None:
        self.received.append(conn.recv(65536))
        conn.sendall(self.reply)

    def close(self) -> None:
        self._stop.set()
        self._thread.join(timeout=5)
        self._sock.close()


class ResettingHyprland(FakeHyprland):
    """Closes the connection with the request still unread, so the client sees a reset."""

    def _handle(self, conn: socket.socket) -> None:
        self.received.append(conn.recv(65536, socket.MSG_PEEK))


class SilentHyprland(FakeHyprland):
    """Reads the request, never replies, and records when the client hangs up."""

    def __init__(self, socket_path: Path, reply: bytes) -> None:
        super().__init__(socket_path, reply)
        self.client_closed = threading.Event()

    def _handle(self, conn: socket.socket) -> None:
        conn.settimeout(0.05)
        while not self._stop.is_set():
            try:
                data = conn.recv(65536)
            except TimeoutError:
                continue
            except OSError:
                break
            if not data:
                break
            self.received.append(data)
        self.client_closed.set()


@pytest.fixture(autouse=True)
def reset_default_instance(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(hyprland_ipc.default, "_DEFAULT_INSTANCE", None)


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    yield
    structlog.reset_defaults()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def runtime_dir(tmp_path: Path) -> Path:
    path = tmp_path / "hypr"
    path.mkdir()
    return path


@pytest.fixture
def make_entry() -> Callable[..., Path]:
    """Create ``<runtime>/<name>/hyprland.lock``; ``lock=None`` skips the lock file."""

    def _make(runtime: Path, name: str, lock: str | None) -> Path:
        entry = runtime / name
        entry.mkdir(parents=True)
        if lock is not None:
            (entry / "hyprland.lock").write_text(lock)
        return entry

    return _make


@pytest.fixture
def socket_dir() -> Iterator[Path]:
    # Unix socket paths are limited to ~108 bytes, too short for pytest's tmp_path.
    with tempfile.TemporaryDirectory(prefix="hy", dir="/tmp") as d:
        yield Path(d)


@pytest.fixture
def instance(socket_dir: Path) -> Instance:
    (socket_dir / INSTANCE_NAME).mkdir()
    return Instance(
        instance=INSTANCE_NAME,
        time=1700000000,
        pid=1234,
        wl_socket="wayland-1",
        base_dir=socket_dir,
    )


@pytest.fixture
def hyprland(instance: Instance) -> Iterator[Callable[..., FakeHyprland]]:
    """Start a fake Hyprland (or a ``server_cls`` variant) on ``instance``'s command socket."""
    servers: list[FakeHyprland] = []

    def _start(reply: bytes = b"", server_cls: type[FakeHyprland] = FakeHyprland) -> FakeHyprland:
        path = instance.base_dir / instance.instance / ".socket.sock"
        server = server_cls(path, reply).start()
        servers.append(server)
        return server

    yield _start
    for server in servers:
        server.close()


@pytest.fixture
def resetting_hyprland(hyprland) -> ResettingHyprland:
    return hyprland(server_cls=ResettingHyprland)


@pytest.fixture
def silent_hyprland(hyprland) -> SilentHyprland:
    return hyprland(server_cls=SilentHyprland)
