"""ManifestPatcher — write a ``package==version`` pin into a checkout."""

from __future__ import annotations

import os
from pathlib import Path

import structlog

from vulnfixer.engines.manifest_patcher.requirements import pin_requirement
from vulnfixer.exceptions import ManifestNotFound

log = structlog.get_logger("vulnfixer.engine")

MANIFEST_SUFFIX = "requirements.txt"
_SKIP_DIRS = {".git"}


def find_manifest(repo_root: Path) -> Path:
    """Return the first ``*requirements.txt`` under *repo_root*.

    Walks top-down with directory and file names sorted, so the result is
    stable across platforms. Raises :class:`ManifestNotFound`.
    """
    if not repo_root.is_dir():
        raise ManifestNotFound(f"{repo_root} is not a directory")

    for dirpath, dirnames, filenames in os.walk(repo_root):
        dirnames[:] = sorted(d for d in dirnames if d not in _SKIP_DIRS)
        for name in sorted(filenames):
            if name.endswith(MANIFEST_SUFFIX):
                return Path(dirpath) / name

    raise ManifestNotFound(f"no *{MANIFEST_SUFFIX} under {repo_root}")


def apply_pin(repo_root: Path, package_name: str, version: str) -> Path | None:
    """Pin *package_name* to *version* in the checkout's manifest.

    Returns the rewritten file, or None when the checkout has no
    requirements manifest (the tree is left untouched). The file is
    overwritten in place.
    """
    try:
        manifest = find_manifest(repo_root)
    except ManifestNotFound as exc:
        log.info("manifest.not_found", repo_root=str(repo_root), reason=str(exc))
        return None

    # Undecodable bytes round-trip unchanged through surrogateescape.
    content = manifest.read_text(encoding="utf-8", errors="surrogateescape")
    updated = pin_requirement(content, package_name, version)
    manifest.write_text(updated, encoding="utf-8", errors="surrogateescape")

    log.info(
        "manifest.pinned",
        file=str(manifest.relative_to(repo_root)),
        package=package_name,
        version=version,
    )
    return manifest
