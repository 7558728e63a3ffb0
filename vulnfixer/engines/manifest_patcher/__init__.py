"""Manifest patcher engine — pin a dependency in requirements.txt."""

from vulnfixer.engines.manifest_patcher.patcher import apply_pin, find_manifest
from vulnfixer.engines.manifest_patcher.requirements import (
    ManifestEntry,
    normalize_name,
    parse_manifest,
    pin_requirement,
)

__all__ = [
    "ManifestEntry",
    "apply_pin",
    "find_manifest",
    "normalize_name",
    "parse_manifest",
    "pin_requirement",
]
