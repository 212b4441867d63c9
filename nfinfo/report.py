# nfinfo/report.py
from __future__ import annotations

from nfinfo.facts import (
    Absent,
    DiagnosticFact,
    FactCollector,
    Report,
    Scalar,
    Sequence,
    Verbosity,
)
from nfinfo.host import Host, SystemHost

BLANK = "  "
NEWLINE = "\n"

# only these exact values are escaped, anything else is printed verbatim
_ESCAPES = {
    "\n": "\\n",
    "\r": "\\r",
    "\n\r": "\\n\\r",
    "\r\n": "\\r\\n",
}


def blanks(n: int) -> str:
    return BLANK * n


def separator(indent: int) -> str:
    return ":" if indent == 1 else "="


def dump(fact: DiagnosticFact, indent: int, out: list[str]) -> None:
    """
    Append the lines of one key/value pair to ``out``.

      Sequence -> "key<sep>" + one line per item, one level deeper
      Scalar   -> "key<sep>value"
      Absent   -> "key"
    """
    value = fact.value
    if isinstance(value, Sequence):
        out.append(blanks(indent) + fact.key + separator(indent))
        for item in value.items:
            out.append(NEWLINE + blanks(indent + 1) + item)
    elif isinstance(value, Scalar):
        out.append(blanks(indent) + fact.key + separator(indent))
        out.append(_ESCAPES.get(value.text, value.text))
    elif isinstance(value, Absent) and fact.key:
        out.append(blanks(indent) + fact.key)
    out.append(NEWLINE)


def _line(text: str, out: list[str]) -> None:
    out.append(BLANK + text + NEWLINE)


def render(report: Report) -> str:
    out: list[str] = []
    core = report.core
    _line(f"Version: {core.version} build {core.build}", out)
    _line(f"Modified: {core.modified} {core.modified_delta}", out)
    _line(f"System: {core.os_name} {core.os_version}", out)
    _line(f"Runtime: Python {core.runtime_version} on {core.vm_name} {core.vm_version}", out)
    _line(f"Encoding: {core.encoding} ({core.native_encoding})", out)

    if report.process is not None:
        _line(f"Process: {report.process.text}", out)

    if report.level == Verbosity.BASIC:
        return "".join(out)

    _line("File systems: " + ", ".join(report.schemes), out)

    _line("Python opts:", out)
    for fact in report.launch.others:
        dump(fact, 2, out)

    dump(DiagnosticFact("Capsule", Sequence(report.launch.capsule)), 1, out)

    _line("Environment:", out)
    for fact in report.environment:
        dump(fact, 2, out)

    if report.level >= Verbosity.FULL:
        _line("Properties:", out)
        for fact in report.properties:
            dump(fact, 2, out)

    if report.class_path is not None:
        dump(report.class_path, 1, out)

    return "".join(out)


def get_info(level: int, print_proc: bool = False, host: Host | None = None) -> str:
    """
    Runtime information report.

    ``level`` 0 shows the core lines only, 1 adds file systems, interpreter
    options and ``NXF_*`` variables, 2 adds every variable and the property table.
    """
    collector = FactCollector(host or SystemHost())
    return render(collector.collect(level, include_process=print_proc))


def status(detailed: bool = False, host: Host | None = None) -> str:
    return get_info(Verbosity.DETAILED if detailed else Verbosity.BASIC, True, host)
