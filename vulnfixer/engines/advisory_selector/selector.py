"""AdvisorySelector — pick one fixable advisory from the head of the feed."""

from __future__ import annotations

import random
from collections.abc import Sequence

import structlog

from vulnfixer.engines.advisory_source.models import Advisory, SelectionResult
from vulnfixer.engines.version_range.parser import parse_target_version
from vulnfixer.exceptions import NoCandidateFound

log = structlog.get_logger("vulnfixer.engine")

# Feeds come back roughly severity/recency sorted; sample only the head.
DEFAULT_WINDOW = 20

# Rejection reasons
MISSING_CVE = "missing-cve"
NO_VULNERABILITIES = "no-vulnerabilities"
LESS_THAN_RANGE = "less-than-range"
NO_PATCHED_VERSION = "no-patched-version"


def rejection_reason(advisory: Advisory) -> str | None:
    """Return why *advisory* is unusable, or None if it can be fixed."""
    if not advisory.cve_id:
        return MISSING_CVE
    vuln = advisory.primary
    if vuln is None:
        return NO_VULNERABILITIES
    # An open "< X" bound gives no concrete vulnerable version to name.
    if "< " in vuln.vulnerable_version_range:
        return LESS_THAN_RANGE
    if not vuln.first_patched_version:
        return NO_PATCHED_VERSION
    return None


class AdvisorySelector:
    """Choose a usable advisory.

    Every advisory in the first *window* entries is checked; one of the valid
    ones is picked uniformly at random. When the window has none, the rest of
    the list is scanned in order and the first valid advisory wins.
    """

    def __init__(self, *, window: int = DEFAULT_WINDOW, rng: random.Random | None = None) -> None:
        if window < 1:
            raise ValueError(f"window must be >= 1, got {window}")
        self._window = window
        self._rng = rng or random.Random()

    def select_candidate(self, advisories: Sequence[Advisory]) -> Advisory:
        rejections: list[tuple[str, str]] = []

        valid: list[Advisory] = []
        for advisory in advisories[: self._window]:
            if self._evaluate(advisory, rejections):
                valid.append(advisory)
        if valid:
            return self._rng.choice(valid)

        for advisory in advisories[self._window :]:
            if self._evaluate(advisory, rejections):
                return advisory

        raise NoCandidateFound(rejections)

    def select(self, advisories: Sequence[Advisory]) -> SelectionResult:
        """Select an advisory and resolve the version to pin."""
        advisory = self.select_candidate(advisories)
        vuln = advisory.primary
        if vuln is None:
            raise NoCandidateFound([(advisory.label, NO_VULNERABILITIES)])
        version = parse_target_version(vuln.vulnerable_version_range, cve=advisory.cve_id)
        result = SelectionResult(
            cve=advisory.cve_id,
            package_name=vuln.package_name,
            version=version,
        )
        log.info(
            "selector.selected",
            cve=result.cve,
            package=result.package_name,
            version=result.version,
            range=vuln.vulnerable_version_range,
        )
        return result

    @staticmethod
    def _evaluate(advisory: Advisory, rejections: list[tuple[str, str]]) -> bool:
        vuln = advisory.primary
        range_text = vuln.vulnerable_version_range if vuln else ""
        reason = rejection_reason(advisory)
        if reason is not None:
            log.info("selector.rejected", cve=advisory.cve_id, range=range_text, reason=reason)
            rejections.append((advisory.label, reason))
            return False
        log.info("selector.accepted", cve=advisory.cve_id, range=range_text)
        return True
