# nfinfo/version.py
from __future__ import annotations

from datetime import UTC, datetime

APP_NAME = "nfinfo"
APP_VER = "0.4.1"
APP_BUILDNUM = 1042

# epoch millis of the release build
APP_TIMESTAMP = 1789646400000
APP_TIMESTAMP_UTC = datetime.fromtimestamp(APP_TIMESTAMP / 1000, tz=UTC).strftime(
    "%d-%m-%Y %H:%M UTC"
)

_UNITS = (("day", 86400), ("hour", 3600), ("minute", 60))


def delta_since(now: datetime | None = None) -> str:
    """Time elapsed since the build, in the largest whole unit."""
    now = now or datetime.now(tz=UTC)
    secs = int(now.timestamp() - APP_TIMESTAMP / 1000)
    for unit, size in _UNITS:
        if secs >= size:
            n = secs // size
            return f"({n} {unit}{'s' if n != 1 else ''} ago)"
    return "(just now)"
