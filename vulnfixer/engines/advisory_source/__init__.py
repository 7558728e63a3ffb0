"""Advisory source engine — read the security advisory feed."""

from vulnfixer.engines.advisory_source.github_client import GitHubClient, RateLimitError
from vulnfixer.engines.advisory_source.models import Advisory, SelectionResult, Vulnerability
from vulnfixer.engines.advisory_source.source import AdvisorySource

__all__ = [
    "Advisory",
    "AdvisorySource",
    "GitHubClient",
    "RateLimitError",
    "SelectionResult",
    "Vulnerability",
]
