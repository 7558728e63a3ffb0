"""Data models for the advisory source engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Vulnerability:
    """One affected package inside an advisory."""

    package_name: str
    vulnerable_version_range: str = ""
    first_patched_version: str = ""
    ecosystem: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Vulnerability:
        package = data.get("package") or {}
        return cls(
            package_name=package.get("name") or "",
            ecosystem=package.get("ecosystem") or "",
            vulnerable_version_range=data.get("vulnerable_version_range") or "",
            first_patched_version=_patched_version(data.get("first_patched_version")),
        )


@dataclass(frozen=True)
class Advisory:
    """A security advisory as returned by the GitHub global advisories API.

    Read-only; fetched fresh per run and discarded after selection.
    """

    cve_id: str
    ghsa_id: str = ""
    ecosystem: str = ""
    severity: str = ""
    summary: str = ""
    html_url: str = ""
    vulnerabilities: tuple[Vulnerability, ...] = field(default_factory=tuple)

    @property
    def primary(self) -> Vulnerability | None:
        """The only vulnerability entry that selection looks at."""
        return self.vulnerabilities[0] if self.vulnerabilities else None

    @property
    def label(self) -> str:
        return self.cve_id or self.ghsa_id or "<no id>"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Advisory:
        vulns = tuple(Vulnerability.from_api(v) for v in data.get("vulnerabilities") or [])
        ecosystem = vulns[0].ecosystem if vulns else ""
        return cls(
            cve_id=data.get("cve_id") or "",
            ghsa_id=data.get("ghsa_id") or "",
            ecosystem=ecosystem,
            severity=data.get("severity") or "",
            summary=data.get("summary") or "",
            html_url=data.get("html_url") or "",
            vulnerabilities=vulns,
        )


@dataclass(frozen=True)
class SelectionResult:
    """The resolved fix target handed to the manifest patcher.

    ``version`` is always a concrete version string, never a range.
    """

    cve: str
    package_name: str
    version: str

    @property
    def pin(self) -> str:
        return f"{self.package_name}=={self.version}"


def _patched_version(value: Any) -> str:
    # Global advisories send a plain string; repository advisories an object.
    if value is None:
        return ""
    if isinstance(value, dict):
        return value.get("identifier") or ""
    return str(value)
