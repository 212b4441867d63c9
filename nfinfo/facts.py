# nfinfo/facts.py
"""
Diagnostic facts and the collector that gathers them from a :class:`Host`.

A fact value is decided once, here, by :func:`classify`:
``Absent`` (render the key alone), ``Scalar`` (one line) or
``Sequence`` (a header plus one line per element). The renderer never
looks at raw host values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from nfinfo.host import CLASS_PATH_KEY, PATH_SEPARATOR, Host
from nfinfo.version import APP_BUILDNUM, APP_TIMESTAMP_UTC, APP_VER, delta_since

ENV_PREFIX = "NXF_"
CAPSULE_PREFIX = "-Xcapsule."

# key markers that turn a separator-joined string into a list
_PATH_KEY_NAMES = {"PERL5LIB"}
_PATH_KEY_PARTS = (".path", "-path", ".dir")


class Verbosity(IntEnum):
    BASIC = 0
    DETAILED = 1
    FULL = 2

    @classmethod
    def from_flags(cls, detailed: bool = False, more_detailed: bool = False) -> Verbosity:
        if more_detailed:
            return cls.FULL
        return cls.DETAILED if detailed else cls.BASIC


# -------------------- Values --------------------


@dataclass(frozen=True)
class Absent:
    pass


@dataclass(frozen=True)
class Scalar:
    text: str


@dataclass(frozen=True)
class Sequence:
    items: tuple[str, ...] = ()


Value = Absent | Scalar | Sequence

ABSENT = Absent()


def is_path_key(key: str) -> bool:
    return (
        key.endswith("PATH")
        or key in _PATH_KEY_NAMES
        or any(part in key for part in _PATH_KEY_PARTS)
    )


def split_path_list(text: str, sep: str) -> tuple[str, ...]:
    """Split on ``sep``; trailing empty elements are dropped, inner ones kept."""
    parts = text.split(sep)
    while parts and parts[-1] == "":
        parts.pop()
    return tuple(parts)


def classify(key: str, value: Any, sep: str = PATH_SEPARATOR) -> Value:
    if isinstance(value, str):
        if sep and sep in value and is_path_key(key):
            return Sequence(split_path_list(value, sep))
        return Scalar(value) if value else ABSENT
    if isinstance(value, list | tuple):
        return Sequence(tuple(str(x) for x in value))
    if not value:
        return ABSENT
    return Scalar(str(value))


@dataclass(frozen=True)
class DiagnosticFact:
    key: str
    value: Value = ABSENT


# -------------------- Collected facts --------------------


@dataclass(frozen=True)
class CoreFacts:
    version: str
    build: str
    modified: str
    modified_delta: str
    os_name: str
    os_version: str
    runtime_version: str
    vm_name: str
    vm_version: str
    encoding: str
    native_encoding: str


@dataclass(frozen=True)
class ProcessIdentity:
    name: str
    address: str | None = None

    @property
    def text(self) -> str:
        return f"{self.name} [{self.address}]" if self.address else self.name


@dataclass(frozen=True)
class LaunchArguments:
    capsule: tuple[str, ...] = ()
    others: tuple[DiagnosticFact, ...] = ()


@dataclass
class Report:
    level: Verbosity
    core: CoreFacts
    process: ProcessIdentity | None = None
    schemes: list[str] = field(default_factory=list)
    launch: LaunchArguments = field(default_factory=LaunchArguments)
    environment: list[DiagnosticFact] = field(default_factory=list)
    properties: list[DiagnosticFact] = field(default_factory=list)
    class_path: DiagnosticFact | None = None


# -------------------- Collector --------------------


class FactCollector:
    """Pulls exactly the facts a verbosity level needs out of a host."""

    def __init__(self, host: Host) -> None:
        self.host = host

    def _classify(self, key: str, value: Any) -> DiagnosticFact:
        return DiagnosticFact(key, classify(key, value))

    def collect_core(self) -> CoreFacts:
        h = self.host
        return CoreFacts(
            version=APP_VER,
            build=str(APP_BUILDNUM),
            modified=APP_TIMESTAMP_UTC,
            modified_delta=delta_since(h.now()),
            os_name=h.os_name(),
            os_version=h.os_version(),
            runtime_version=h.runtime_version(),
            vm_name=h.vm_name(),
            vm_version=h.vm_version(),
            encoding=h.default_encoding(),
            native_encoding=h.native_encoding(),
        )

    def collect_process_identity(self) -> ProcessIdentity:
        return ProcessIdentity(self.host.process_name(), self.host.local_address())

    def collect_filesystem_schemes(self) -> list[str]:
        return list(self.host.providers())

    def collect_launch_arguments(self) -> LaunchArguments:
        capsule: list[str] = []
        others: list[DiagnosticFact] = []
        for arg in self.host.args():
            if arg.startswith(CAPSULE_PREFIX):
                capsule.append(arg[2:])
                continue
            key, eq, value = arg.partition("=")
            others.append(self._classify(key, value) if eq else DiagnosticFact(arg))
        return LaunchArguments(tuple(capsule), tuple(others))

    def collect_environment(self, level: int) -> list[DiagnosticFact]:
        env = self.host.env()
        return [
            self._classify(key, env[key])
            for key in sorted(env)
            if key.startswith(ENV_PREFIX) or level > Verbosity.DETAILED
        ]

    def collect_properties(self, level: int) -> list[DiagnosticFact]:
        if level < Verbosity.FULL:
            return []
        props = self.host.properties()
        return [
            self._classify(key, props[key]) for key in sorted(props) if key != CLASS_PATH_KEY
        ]

    def collect_class_path(self) -> DiagnosticFact:
        return self._classify("Class-path", self.host.properties().get(CLASS_PATH_KEY))

    def collect(self, level: int, include_process: bool = False) -> Report:
        level = Verbosity(max(Verbosity.BASIC, min(int(level), Verbosity.FULL)))
        report = Report(level=level, core=self.collect_core())
        if include_process:
            report.process = self.collect_process_identity()
        if level == Verbosity.BASIC:
            return report

        report.schemes = self.collect_filesystem_schemes()
        report.launch = self.collect_launch_arguments()
        report.environment = self.collect_environment(level)
        report.properties = self.collect_properties(level)
        report.class_path = self.collect_class_path()
        return report
