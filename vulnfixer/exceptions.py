"""Custom exceptions for vulnfixer."""

from __future__ import annotations


class FixerError(Exception):
    """Base exception for all vulnfixer errors."""


class SourceUnavailable(FixerError):
    """Raised when the advisory feed cannot be reached or returns an error."""


class NoCandidateFound(FixerError):
    """Raised when no advisory in the result list passes the selection rules."""

    def __init__(self, rejections: list[tuple[str, str]] | None = None):
        self.rejections = list(rejections or [])
        if self.rejections:
            detail = ", ".join(f"{ident}: {reason}" for ident, reason in self.rejections)
            msg = f"no usable advisory among {len(self.rejections)} evaluated ({detail})"
        else:
            msg = "no usable advisory: advisory list is empty"
        super().__init__(msg)


class UnsupportedRangeFormat(FixerError):
    """Raised when a vulnerable-version-range cannot be turned into a version."""

    def __init__(self, range_text: str, cve: str | None = None):
        self.range_text = range_text
        self.cve = cve
        where = f" for {cve}" if cve else ""
        super().__init__(f"unexpected version range string{where}: {range_text!r}")


class ManifestNotFound(FixerError):
    """Raised when no ``*requirements.txt`` exists under the checkout."""


class GitCommandError(FixerError):
    """Raised when a git subprocess exits non-zero."""

    def __init__(self, cmd: list[str], returncode: int, stderr: str):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"git command failed (exit {returncode}): {stderr}")


class PullRequestError(FixerError):
    """Raised when GitHub refuses to open the pull request."""


class TextGenerationError(FixerError):
    """Raised when the LLM returns no usable text for an ``<auto>`` field."""
