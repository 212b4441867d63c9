# nfinfo/assets.py
"""
Local pipeline assets.

A pipeline ``owner/name`` lives in ``<assets root>/owner/name`` as a git
checkout. Metadata comes from the ``manifest`` scope of its
``nextflow.config``; revisions are read straight from ``.git`` (loose refs
plus ``packed-refs``), no git binary is needed.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

from nfinfo.config import assets_root, load_config
from nfinfo.errors import AbortOperationError

log = logging.getLogger(__name__)

MANIFEST_FILE = "nextflow.config"
DEFAULT_MAIN_FILE = "main.nf"
DEFAULT_HUB_URL = "https://github.com"

_URL_PREFIX = re.compile(r"^[a-z][a-z0-9+.-]*://[^/]+/", re.IGNORECASE)
_NAME_PART = re.compile(r"^(?!\.\.?$)[\w.-]+$")
# manifest.key = 'value'   /   key = "value" (inside a manifest { } block)
_DOTTED_ENTRY = re.compile(r"""^\s*manifest\.(\w+)\s*=\s*(['"])(.*?)\2""")
_PLAIN_ENTRY = re.compile(r"""^\s*(\w+)\s*=\s*(['"])(.*?)\2""")
_BLOCK_START = re.compile(r"^\s*manifest\s*\{")


def parse_manifest(text: str) -> dict[str, str]:
    manifest: dict[str, str] = {}
    in_block = False
    for line in text.splitlines():
        if in_block:
            if line.strip().startswith("}"):
                in_block = False
                continue
            m = _PLAIN_ENTRY.match(line)
            if m:
                manifest[m.group(1)] = m.group(3)
            continue
        if _BLOCK_START.match(line):
            in_block = not line.rstrip().endswith("}")
            continue
        m = _DOTTED_ENTRY.match(line)
        if m:
            manifest[m.group(1)] = m.group(3)
    return manifest


def _read_packed_refs(git_dir: Path) -> dict[str, str]:
    refs: dict[str, str] = {}
    packed = git_dir / "packed-refs"
    if not packed.exists():
        return refs
    for line in packed.read_text(encoding="utf-8").splitlines():
        if not line or line[0] in "#^":
            continue
        sha, _, ref = line.partition(" ")
        refs[ref.strip()] = sha
    return refs


def read_refs(git_dir: Path, kind: str) -> dict[str, str]:
    """Name -> sha for ``refs/<kind>`` (``heads`` or ``tags``)."""
    prefix = f"refs/{kind}/"
    refs = {
        ref[len(prefix):]: sha
        for ref, sha in _read_packed_refs(git_dir).items()
        if ref.startswith(prefix)
    }
    base = git_dir / "refs" / kind
    if base.is_dir():
        for p in base.rglob("*"):
            if p.is_file():
                refs[p.relative_to(base).as_posix()] = p.read_text(encoding="utf-8").strip()
    return refs


class AssetManager:
    def __init__(self, project: str | None = None, *, cfg: dict[str, Any] | None = None) -> None:
        self.cfg = cfg if cfg is not None else load_config()
        self.root = assets_root(self.cfg)
        self.project = project
        self._manifest: dict[str, str] | None = None

    # -------------------- name resolution --------------------

    def resolve_name(self, name: str) -> str | None:
        """
        ``owner/name`` is taken as is; a bare ``name`` is matched against the
        local assets. No match falls back to the default organization.
        """
        name = _URL_PREFIX.sub("", (name or "").strip())
        if name.endswith(".git"):
            name = name[: -len(".git")]
        name = name.strip("/")
        parts = name.split("/")
        if not name or len(parts) > 2 or not all(_NAME_PART.match(p) for p in parts):
            return None
        if len(parts) == 2:
            return name

        matches = sorted(
            f"{d.parent.name}/{d.name}"
            for d in self.root.glob(f"*/{name}")
            if d.is_dir()
        )
        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            choices = "\n".join(f"  {m}" for m in matches)
            raise AbortOperationError(
                f"A project named '{name}' exists in more than one repository\n"
                f"{choices}\n\nWhich one do you mean?"
            )
        return f"{self.cfg['default_organization']}/{name}"

    # -------------------- properties --------------------

    def _require_project(self) -> str:
        if not self.project:
            raise AbortOperationError("No pipeline selected")
        return self.project

    @property
    def pipeline(self) -> str:
        return self._require_project()

    @property
    def local_path(self) -> Path:
        return self.root / self._require_project()

    def is_local(self) -> bool:
        return self.local_path.is_dir()

    @property
    def manifest(self) -> dict[str, str]:
        if self._manifest is None:
            cfg_file = self.local_path / MANIFEST_FILE
            try:
                self._manifest = parse_manifest(cfg_file.read_text(encoding="utf-8"))
            except FileNotFoundError:
                self._manifest = {}
            except OSError as e:
                log.warning("Cannot read manifest %s (%s)", cfg_file, e)
                self._manifest = {}
        return self._manifest

    @property
    def home_page(self) -> str:
        return self.manifest.get("homePage") or f"{DEFAULT_HUB_URL}/{self.pipeline}"

    @property
    def main_script_name(self) -> str:
        return self.manifest.get("mainScript") or DEFAULT_MAIN_FILE

    @property
    def description(self) -> str | None:
        return self.manifest.get("description") or None

    # -------------------- revisions --------------------

    def current_revision(self) -> str | None:
        head = self.local_path / ".git" / "HEAD"
        if not head.exists():
            return None
        content = head.read_text(encoding="utf-8").strip()
        if content.startswith("ref:"):
            return content.split("refs/heads/", 1)[-1]
        # detached head: report the tag pointing at it, else the short sha
        for tag, sha in read_refs(self.local_path / ".git", "tags").items():
            if sha == content:
                return tag
        return content[:7]

    def get_revisions(self) -> list[str]:
        git_dir = self.local_path / ".git"
        if not git_dir.is_dir():
            return []
        current = self.current_revision()
        result: list[str] = []
        for name in sorted(read_refs(git_dir, "heads")):
            mark = "*" if name == current else " "
            result.append(f"{mark} {name}")
        for name in sorted(read_refs(git_dir, "tags")):
            mark = "*" if name == current else " "
            result.append(f"{mark} {name} [t]")
        return result


def describe_pipeline(name: str, cfg: dict[str, Any] | None = None) -> list[str]:
    """Lines shown by ``info NAME``; raises AbortOperationError for unknown pipelines."""
    repo = AssetManager(cfg=cfg).resolve_name(name)
    if not repo:
        raise AbortOperationError(f"Unknown pipeline '{name}'")

    manager = AssetManager(repo, cfg=cfg)
    if not manager.is_local():
        raise AbortOperationError(f"Unknown pipeline '{name}'")

    lines = [
        f" repo name  : {manager.pipeline}",
        f" home page  : {manager.home_page}",
        f" local path : {manager.local_path}",
        f" main script: {manager.main_script_name}",
    ]
    if manager.description:
        lines.append(f" description: {manager.description}")

    revs = manager.get_revisions()
    if len(revs) == 1:
        lines.append(f" revision   : {revs[0]}")
    else:
        lines.append(" revisions  : ")
        lines.extend(f" {rev}" for rev in revs)
    return lines
