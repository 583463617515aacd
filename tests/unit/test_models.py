"""Tests for the Instance record and the Command envelope."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from hyprland_ipc.errors import NoDefaultInstanceError
from hyprland_ipc.models import Command, CommandKind, Instance
from hyprland_ipc.paths import command_socket_path, event_socket_path, hypr_runtime_dir


class TestCommandKind:
    def test_values(self):
        assert CommandKind.EMPTY == "empty"
        assert CommandKind.JSON == "json"


class TestCommand:
    def test_empty_wire_form(self):
        cmd = Command.empty("reload")
        assert cmd.kind is CommandKind.EMPTY
        assert cmd.wire == "/reload"
        assert cmd.encode() == b"/reload"

    def test_json_wire_form(self):
        cmd = Command.json("plugin list")
        assert cmd.kind is CommandKind.JSON
        assert cmd.encode() == b"j/plugin list"

    def test_utf8_encoding(self):
        assert Command.empty("notify 1 1000 rgba(ffffffff) héllo").encode().endswith("héllo".encode())

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Command.empty("reload").text = "kill"  # type: ignore[misc]


class TestInstance:
    def test_from_dir(self, runtime_dir: Path, make_entry):
        entry = make_entry(runtime_dir, "9958d29_1752788564_1497316528", "4242\nwayland-1\n")
        instance = Instance.from_dir(entry)
        assert instance == Instance("9958d29_1752788564_1497316528", 1752788564, 4242, "wayland-1")
        assert instance.base_dir == runtime_dir

    def test_from_dir_missing_lock(self, runtime_dir: Path, make_entry):
        assert Instance.from_dir(make_entry(runtime_dir, "a_1_b", None)) is None

    def test_underscores_in_suffix(self, runtime_dir: Path, make_entry):
        # Only the first and last underscore delimit the timestamp.
        entry = make_entry(runtime_dir, "a_17_b", "1\nwayland-1")
        assert Instance.from_dir(entry).time == 17
        entry = make_entry(runtime_dir, "a_1_7_b", "1\nwayland-1")
        assert Instance.from_dir(entry) is None

    def test_leading_plus_accepted(self, runtime_dir: Path, make_entry):
        entry = make_entry(runtime_dir, "a_+17_b", "+4242\nwayland-1")
        instance = Instance.from_dir(entry)
        assert (instance.time, instance.pid) == (17, 4242)

    def test_lone_plus_rejected(self, runtime_dir: Path, make_entry):
        assert Instance.from_dir(make_entry(runtime_dir, "a_+_b", "1\nwayland-1")) is None

    def test_timestamp_limited_to_u64(self, runtime_dir: Path, make_entry):
        at_limit = make_entry(runtime_dir, f"a_{2**64 - 1}_b", "1\nwayland-1")
        assert Instance.from_dir(at_limit).time == 2**64 - 1
        over = make_entry(runtime_dir, f"c_{2**64}_d", "1\nwayland-1")
        assert Instance.from_dir(over) is None

    def test_pid_limited_to_u32(self, runtime_dir: Path, make_entry):
        assert Instance.from_dir(make_entry(runtime_dir, "a_1_b", f"{2**32 - 1}\nw")).pid == 2**32 - 1
        assert Instance.from_dir(make_entry(runtime_dir, "c_1_d", f"{2**32}\nw")) is None

    def test_to_dict(self):
        instance = Instance("abc_1700000000_xyz", 1700000000, 1234, "wayland-1")
        assert instance.to_dict() == {
            "instance": "abc_1700000000_xyz",
            "time": 1700000000,
            "pid": 1234,
            "wl_socket": "wayland-1",
        }

    def test_socket_paths(self, tmp_path: Path):
        instance = Instance("abc_1_xyz", 1, 1, "wayland-1", base_dir=tmp_path)
        assert command_socket_path(instance) == tmp_path / "abc_1_xyz" / ".socket.sock"
        assert event_socket_path(instance) == tmp_path / "abc_1_xyz" / ".socket2.sock"

    def test_socket_path_without_base_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("XDG_RUNTIME_DIR", str(tmp_path))
        instance = Instance("abc_1_xyz", 1, 1, "wayland-1")
        assert command_socket_path(instance) == tmp_path / "hypr" / "abc_1_xyz" / ".socket.sock"


class TestRuntimeDir:
    def test_xdg_runtime_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("XDG_RUNTIME_DIR", str(tmp_path))
        assert hypr_runtime_dir() == tmp_path / "hypr"

    def test_uid_fallback(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("XDG_RUNTIME_DIR", raising=False)
        monkeypatch.setattr("os.getuid", lambda: 1000)
        assert hypr_runtime_dir() == Path("/run/user/1000/hypr")


class TestFromCurrentEnv:
    def test_reads_signature(self, runtime_dir: Path, make_entry, monkeypatch: pytest.MonkeyPatch):
        make_entry(runtime_dir, "abc_1700000000_xyz", "1234\nwayland-1")
        monkeypatch.setenv("HYPRLAND_INSTANCE_SIGNATURE", "abc_1700000000_xyz")
        instance = Instance.from_current_env(runtime_dir)
        assert instance.instance == "abc_1700000000_xyz"
        assert instance.pid == 1234

    def test_no_liveness_check(self, runtime_dir: Path, make_entry, monkeypatch: pytest.MonkeyPatch):
        make_entry(runtime_dir, "abc_1700000000_xyz", f"{2**31 - 1}\nwayland-1")
        monkeypatch.setenv("HYPRLAND_INSTANCE_SIGNATURE", "abc_1700000000_xyz")
        assert Instance.from_current_env(runtime_dir).pid == 2**31 - 1

    def test_missing_signature(self, runtime_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("HYPRLAND_INSTANCE_SIGNATURE", raising=False)
        with pytest.raises(NoDefaultInstanceError, match="HYPRLAND_INSTANCE_SIGNATURE"):
            Instance.from_current_env(runtime_dir)

    def test_signature_without_directory(self, runtime_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("HYPRLAND_INSTANCE_SIGNATURE", "abc_1700000000_xyz")
        with pytest.raises(NoDefaultInstanceError, match="does not describe"):
            Instance.from_current_env(runtime_dir)
