# nfinfo/logs.py
from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from pathlib import Path

DEFAULT_LOG_DIR = Path(os.path.expanduser("~")) / ".nfinfo"
DEFAULT_LOG_FILE = DEFAULT_LOG_DIR / "nfinfo.log"
DEFAULT_LEVEL = os.environ.get("NXF_LOG_LEVEL", "WARNING").upper()


def setup_logging(
    level: str | None = None, file_path: str | os.PathLike[str] | None = None
) -> Path:
    """
    Configure logging once per process:
      - rotating file, 1 MB x 5 backups
      - stream handler on stderr, so report text on stdout stays clean
      - format: ts level logger msg
    Level comes from NXF_LOG_LEVEL (WARNING by default).
    Path comes from NXF_LOG_FILE (~/.nfinfo/nfinfo.log by default).
    """
    log_level = (level or DEFAULT_LEVEL).upper()
    log_file = Path(file_path or os.environ.get("NXF_LOG_FILE", DEFAULT_LOG_FILE))
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    if getattr(root, "_nfinfo_configured", False):
        return log_file

    root.setLevel(log_level)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    fh = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=1_000_000, backupCount=5, encoding="utf-8"
    )
    fh.setFormatter(fmt)
    fh.setLevel(log_level)
    root.addHandler(fh)

    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(fmt)
    ch.setLevel(log_level)
    root.addHandler(ch)

    root._nfinfo_configured = True  # type: ignore[attr-defined]
    logging.getLogger(__name__).debug("Logging initialized at %s, file=%s", log_level, log_file)
    return log_file
