# nfinfo/host.py
"""
Read-only view of the running process and the machine it runs on.

Everything the reporter shows comes through a :class:`Host`. The default
:class:`SystemHost` reads live state on every call; tests pass their own
``Host`` subclass with fixed values.
"""

from __future__ import annotations

import getpass
import locale
import os
import platform
import socket
import sys
import tempfile
from datetime import UTC, datetime

from nfinfo.filesystems import installed_schemes

CLASS_PATH_KEY = "sys.path"
# list separator for path-like values and the class path, the same on every platform
PATH_SEPARATOR = ":"

# interpreter options whose value may come as a separate argv item
_OPTS_WITH_VALUE = {"-X", "-W", "--check-hash-based-pycs"}


def interpreter_options(orig_argv: list[str]) -> list[str]:
    """
    Options given to the interpreter itself, before the script / ``-m`` / ``-c``.

    ``-X name=value`` and ``-Xname=value`` both come back as ``-Xname=value``.
    """
    opts: list[str] = []
    items = orig_argv[1:]
    i = 0
    while i < len(items):
        arg = items[i]
        if arg in ("-m", "-c", "-", "--") or not arg.startswith("-"):
            break
        if arg in _OPTS_WITH_VALUE and i + 1 < len(items):
            sep = "" if len(arg) == 2 else "="
            opts.append(f"{arg}{sep}{items[i + 1]}")
            i += 2
            continue
        opts.append(arg)
        i += 1
    return opts


def _safe_user() -> str:
    try:
        return getpass.getuser()
    except (OSError, KeyError):
        return ""


class Host:
    """Capability interface. Every method is a read-only query."""

    def os_name(self) -> str:
        raise NotImplementedError

    def os_version(self) -> str:
        raise NotImplementedError

    def runtime_version(self) -> str:
        raise NotImplementedError

    def vm_name(self) -> str:
        raise NotImplementedError

    def vm_version(self) -> str:
        raise NotImplementedError

    def default_encoding(self) -> str:
        raise NotImplementedError

    def native_encoding(self) -> str:
        raise NotImplementedError

    def process_name(self) -> str:
        raise NotImplementedError

    def local_address(self) -> str | None:
        raise NotImplementedError

    def providers(self) -> list[str]:
        raise NotImplementedError

    def args(self) -> list[str]:
        raise NotImplementedError

    def env(self) -> dict[str, str]:
        raise NotImplementedError

    def properties(self) -> dict[str, str]:
        raise NotImplementedError

    def now(self) -> datetime:
        return datetime.now(tz=UTC)


class SystemHost(Host):
    def os_name(self) -> str:
        return platform.system()

    def os_version(self) -> str:
        return platform.release()

    def runtime_version(self) -> str:
        return platform.python_version()

    def vm_name(self) -> str:
        return platform.python_implementation()

    def vm_version(self) -> str:
        v = sys.implementation.version
        return f"{v.major}.{v.minor}.{v.micro}"

    def default_encoding(self) -> str:
        return locale.getpreferredencoding(False)

    def native_encoding(self) -> str:
        return sys.getfilesystemencoding()

    def process_name(self) -> str:
        return f"{os.getpid()}@{socket.gethostname()}"

    def local_address(self) -> str | None:
        try:
            return socket.gethostbyname(socket.gethostname())
        except OSError:
            return None

    def providers(self) -> list[str]:
        return installed_schemes()

    def args(self) -> list[str]:
        return interpreter_options(list(getattr(sys, "orig_argv", [])))

    def env(self) -> dict[str, str]:
        return dict(os.environ)

    def properties(self) -> dict[str, str]:
        return {
            "os.name": platform.system(),
            "os.version": platform.release(),
            "os.arch": platform.machine(),
            "file.encoding": self.default_encoding(),
            "native.encoding": self.native_encoding(),
            "file.separator": os.sep,
            "path.separator": os.pathsep,
            "line.separator": os.linesep,
            "python.version": platform.python_version(),
            "python.implementation": platform.python_implementation(),
            "python.executable": sys.executable,
            "python.prefix": sys.prefix,
            "python.home": sys.base_prefix,
            "user.name": _safe_user(),
            "user.home": os.path.expanduser("~"),
            "user.dir": os.getcwd(),
            "tmp.dir": tempfile.gettempdir(),
            "host.name": socket.gethostname(),
            CLASS_PATH_KEY: PATH_SEPARATOR.join(sys.path),
        }
