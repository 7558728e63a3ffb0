"""AdvisorySource — fetch security advisories for one ecosystem."""

from __future__ import annotations

import httpx
import structlog

from vulnfixer.engines.advisory_source.github_client import GitHubClient, RateLimitError
from vulnfixer.engines.advisory_source.models import Advisory
from vulnfixer.exceptions import SourceUnavailable

log = structlog.get_logger("vulnfixer.engine")

_ADVISORIES_PATH = "/advisories"
_DEFAULT_PER_PAGE = 100


class AdvisorySource:
    """Reads the GitHub global security advisory feed.

    Filtering by ecosystem and severity happens server-side. Only the first
    page is read: selection only ever samples the head of the list.
    """

    def __init__(self, client: GitHubClient, *, per_page: int = _DEFAULT_PER_PAGE) -> None:
        self._client = client
        self._per_page = per_page

    async def fetch_advisories(self, ecosystem: str, min_severity: str) -> list[Advisory]:
        """Return advisories for *ecosystem* at *min_severity*, feed order preserved.

        Raises :class:`SourceUnavailable` when the feed cannot be reached or
        answers with an error.
        """
        params = {
            "ecosystem": ecosystem,
            "severity": min_severity,
            "type": "reviewed",
            "per_page": self._per_page,
        }
        try:
            data = await self._client.get(_ADVISORIES_PATH, params=params)
        except httpx.HTTPStatusError as exc:
            raise SourceUnavailable(
                f"advisory feed returned HTTP {exc.response.status_code} "
                f"for ecosystem={ecosystem} severity={min_severity}"
            ) from exc
        except (httpx.HTTPError, RateLimitError) as exc:
            raise SourceUnavailable(f"advisory feed unreachable: {exc}") from exc
        except ValueError as exc:
            raise SourceUnavailable(f"advisory feed returned invalid JSON: {exc}") from exc

        if not isinstance(data, list):
            raise SourceUnavailable(
                f"advisory feed returned {type(data).__name__}, expected a list"
            )

        advisories = [Advisory.from_api(item) for item in data if isinstance(item, dict)]
        log.info(
            "advisories.fetched",
            ecosystem=ecosystem,
            severity=min_severity,
            count=len(advisories),
        )
        return advisories
