"""Fix-PR engine — clone, pin, commit, push, and open the pull request."""

from vulnfixer.engines.fix_pr.pull_request import PullRequest, open_pull_request
from vulnfixer.engines.fix_pr.runner import FixPRRunner, FixResult, select_fix
from vulnfixer.engines.fix_pr.text import TextGenerator, resolve_messages

__all__ = [
    "FixPRRunner",
    "FixResult",
    "PullRequest",
    "TextGenerator",
    "open_pull_request",
    "resolve_messages",
    "select_fix",
]
