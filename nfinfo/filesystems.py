# nfinfo/filesystems.py
from __future__ import annotations

import logging
from importlib.metadata import entry_points

logger = logging.getLogger(__name__)

ENTRYPOINT_GROUP = "nfinfo.filesystems"

# schemes served without any plugin
BUILTIN_SCHEMES: tuple[str, ...] = ("file",)


def installed_schemes() -> list[str]:
    """
    Scheme names of the installed filesystem providers, in registration order:
    built-ins first, then plugins from the ``nfinfo.filesystems`` entry-point group.

    Only entry-point names are read, plugin modules are never imported here.
    """
    schemes: list[str] = list(BUILTIN_SCHEMES)
    try:
        candidates = entry_points().select(group=ENTRYPOINT_GROUP)
    except Exception:
        logger.exception("Failed to read entry points")
        return schemes

    for ep in candidates:
        if ep.name in schemes:
            logger.warning("Duplicate filesystem scheme detected: %s (keeping first)", ep.name)
            continue
        schemes.append(ep.name)
    return schemes
