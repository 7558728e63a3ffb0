"""Shared fixtures for vulnfixer tests. No network, no database."""

from __future__ import annotations

import pytest

from vulnfixer.engines.advisory_source.models import Advisory, Vulnerability


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


def make_advisory(
    cve_id: str = "CVE-2024-0001",
    *,
    package: str = "flask",
    range_text: str = "<= 2.3.0",
    patched: str = "2.3.1",
    with_vuln: bool = True,
) -> Advisory:
    vulns = (
        (
            Vulnerability(
                package_name=package,
                vulnerable_version_range=range_text,
                first_patched_version=patched,
                ecosystem="pip",
            ),
        )
        if with_vuln
        else ()
    )
    return Advisory(cve_id=cve_id, ecosystem="pip", severity="critical", vulnerabilities=vulns)


@pytest.fixture
def advisory_factory():
    return make_advisory
