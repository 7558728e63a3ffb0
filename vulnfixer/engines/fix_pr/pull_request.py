"""Open the fix pull request on GitHub."""

from __future__ import annotations

from dataclasses import dataclass

import httpx
import structlog

from vulnfixer.core.github import parse_repo_url
from vulnfixer.engines.advisory_source.github_client import GitHubClient
from vulnfixer.exceptions import PullRequestError

log = structlog.get_logger("vulnfixer.engine")


@dataclass(frozen=True)
class PullRequest:
    number: int
    html_url: str


async def open_pull_request(
    client: GitHubClient,
    repo_url: str,
    *,
    head: str,
    base: str,
    title: str,
    body: str,
) -> PullRequest:
    """Create a PR from *head* into *base* on the repo behind *repo_url*."""
    owner, repo = parse_repo_url(repo_url)
    payload = {"title": title, "head": head, "base": base, "body": body}
    try:
        data = await client.post(f"/repos/{owner}/{repo}/pulls", payload)
    except httpx.HTTPStatusError as exc:
        raise PullRequestError(
            f"GitHub rejected PR {head} -> {base} on {owner}/{repo}: "
            f"HTTP {exc.response.status_code} {exc.response.text}"
        ) from exc
    except httpx.HTTPError as exc:
        raise PullRequestError(f"could not reach GitHub to open PR: {exc}") from exc

    pr = PullRequest(number=int(data.get("number", 0)), html_url=data.get("html_url", ""))
    log.info("pr.created", repo=f"{owner}/{repo}", number=pr.number, url=pr.html_url)
    return pr
