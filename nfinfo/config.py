# nfinfo/config.py
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)

CONFIG_PATH = Path(os.path.expanduser("~")) / ".nfinfo" / "config.json"

DEFAULTS: dict[str, Any] = {
    "home": str(Path(os.path.expanduser("~")) / ".nextflow"),
    "assets": "",
    "default_organization": "nextflow-io",
}


def load_config(path: Path | None = None) -> dict[str, Any]:
    cfg_path = path or CONFIG_PATH
    data: dict[str, Any] = {}
    if cfg_path.exists():
        try:
            raw = json.loads(cfg_path.read_text(encoding="utf-8"))
            if isinstance(raw, dict):
                data = raw
            else:
                log.warning("Ignoring config %s: top-level value is not an object", cfg_path)
        except (OSError, ValueError) as e:
            log.warning("Failed to read config %s (%s). Using defaults.", cfg_path, e)
    merged = {**DEFAULTS, **data}
    # ENV overlay (takes precedence over the file)
    env_overlay = {
        "home": os.getenv("NXF_HOME") or merged["home"],
        "assets": os.getenv("NXF_ASSETS") or merged["assets"],
        "default_organization": os.getenv("NXF_ORG") or merged["default_organization"],
    }
    merged.update(env_overlay)
    return merged


def assets_root(cfg: dict[str, Any] | None = None) -> Path:
    cfg = cfg if cfg is not None else load_config()
    if cfg.get("assets"):
        return Path(os.path.expanduser(cfg["assets"]))
    return Path(os.path.expanduser(cfg["home"])) / "assets"
