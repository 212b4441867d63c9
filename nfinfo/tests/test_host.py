import logging
import socket
import sys
from datetime import UTC, datetime, timedelta

from nfinfo import filesystems
from nfinfo.host import CLASS_PATH_KEY, PATH_SEPARATOR, SystemHost, interpreter_options
from nfinfo.version import APP_TIMESTAMP, delta_since


def test_interpreter_options_stop_at_script():
    argv = ["/usr/bin/python3", "-X", "dev", "-Xcapsule.mode=x", "-OO", "script.py", "-d"]
    assert interpreter_options(argv) == ["-Xdev", "-Xcapsule.mode=x", "-OO"]


def test_interpreter_options_stop_at_module_flag():
    argv = ["python", "-W", "ignore", "-m", "nfinfo.cli", "info"]
    assert interpreter_options(argv) == ["-Wignore"]
    assert interpreter_options(["python"]) == []


def test_local_address_failure_is_none(monkeypatch):
    def boom(_name):
        raise socket.gaierror("no resolver")

    monkeypatch.setattr(socket, "gethostbyname", boom)
    assert SystemHost().local_address() is None


def test_system_properties_have_class_path():
    props = SystemHost().properties()
    assert CLASS_PATH_KEY in props
    assert props[CLASS_PATH_KEY].split(PATH_SEPARATOR)[0] == sys.path[0]


def test_builtin_scheme_first():
    schemes = filesystems.installed_schemes()
    assert schemes[0] == "file"
    assert len(schemes) == len(set(schemes))


def test_delta_since_units():
    built = datetime.fromtimestamp(APP_TIMESTAMP / 1000, tz=UTC)
    assert delta_since(built) == "(just now)"
    assert delta_since(built - timedelta(days=2)) == "(just now)"
    assert delta_since(built + timedelta(minutes=1)) == "(1 minute ago)"
    assert delta_since(built + timedelta(hours=5, minutes=3)) == "(5 hours ago)"
    assert delta_since(built + timedelta(days=40)) == "(40 days ago)"


# ---------------- filesystem registry ----------------


class _EntryPoint:
    def __init__(self, name: str) -> None:
        self.name = name


class _EntryPoints:
    def __init__(self, names: list[str]) -> None:
        self.names = names
        self.groups: list[str] = []

    def select(self, *, group: str):
        self.groups.append(group)
        return [_EntryPoint(n) for n in self.names]


def test_plugin_schemes_follow_builtins_in_order(monkeypatch, caplog):
    eps = _EntryPoints(["s3", "file", "gs", "s3"])
    monkeypatch.setattr(filesystems, "entry_points", lambda: eps)
    with caplog.at_level(logging.WARNING, logger="nfinfo.filesystems"):
        assert filesystems.installed_schemes() == ["file", "s3", "gs"]
    assert eps.groups == [filesystems.ENTRYPOINT_GROUP]
    assert "Duplicate filesystem scheme detected: file" in caplog.text
    assert "Duplicate filesystem scheme detected: s3" in caplog.text


def test_broken_entry_points_fall_back_to_builtins(monkeypatch, caplog):
    def boom():
        raise RuntimeError("metadata unavailable")

    monkeypatch.setattr(filesystems, "entry_points", boom)
    with caplog.at_level(logging.ERROR, logger="nfinfo.filesystems"):
        assert filesystems.installed_schemes() == ["file"]
    assert "Failed to read entry points" in caplog.text


def test_system_host_reports_registry(monkeypatch):
    monkeypatch.setattr(filesystems, "entry_points", lambda: _EntryPoints(["gs"]))
    assert SystemHost().providers() == ["file", "gs"]
