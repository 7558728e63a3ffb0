"""Line model for pip requirements.txt files."""

from __future__ import annotations

import re
from dataclasses import dataclass

# Matches: package_name followed by optional version specifier(s)
_REQ_RE = re.compile(
    r"^([A-Za-z0-9]([A-Za-z0-9._-]*[A-Za-z0-9])?)"  # package name
    r"\s*"
    r"(.*)?$",  # everything after name = constraint
)

_NORMALIZE_RE = re.compile(r"[-_.]+")


@dataclass(frozen=True)
class ManifestEntry:
    """One requirement line, e.g. ``flask ==2.0  # web``."""

    name: str
    constraint: str | None
    line_no: int
    raw_line: str


def normalize_name(name: str) -> str:
    """PEP 503 normalisation: case-insensitive, ``-_.`` runs are equivalent."""
    return _NORMALIZE_RE.sub("-", name).lower()


def parse_manifest(content: str) -> list[ManifestEntry]:
    """Return the requirement entries in *content*, in file order.

    ``line_no`` indexes ``content.split("\\n")``. Blank lines, comments and
    pip options (``-r``, ``-e``, ``--hash`` ...) are skipped.
    """
    entries: list[ManifestEntry] = []

    for line_no, raw_line in enumerate(content.split("\n")):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith(("-r", "-c", "-e", "--")):
            continue

        m = _REQ_RE.match(line)
        if not m:
            continue

        constraint = (m.group(3) or "").split("#", 1)[0].strip() or None
        entries.append(
            ManifestEntry(
                name=m.group(1),
                constraint=constraint,
                line_no=line_no,
                raw_line=raw_line,
            )
        )

    return entries


def find_entry(content: str, package_name: str) -> ManifestEntry | None:
    """First entry for *package_name*, or None."""
    wanted = normalize_name(package_name)
    for entry in parse_manifest(content):
        if normalize_name(entry.name) == wanted:
            return entry
    return None


def pin_requirement(content: str, package_name: str, version: str) -> str:
    """Pin *package_name* to *version* in *content*.

    The first line naming the package is replaced; other lines are kept
    byte for byte. Without such a line the pin is appended after a newline.
    """
    pin = f"{package_name}=={version}"
    entry = find_entry(content, package_name)
    if entry is None:
        return content + "\n" + pin

    lines = content.split("\n")
    lines[entry.line_no] = pin
    return "\n".join(lines)
