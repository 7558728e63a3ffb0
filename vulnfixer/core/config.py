"""Run configuration — one explicit struct passed into the engines."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path

from dotenv import load_dotenv

from vulnfixer.exceptions import FixerError

# Field value that asks the text generator to write the value.
AUTO = "<auto>"

DEFAULT_ECOSYSTEM = "pip"
DEFAULT_SEVERITY = "critical"
DEFAULT_LLM_MODEL = "gemini/gemini-1.5-flash"

# env var -> FixConfig field
_ENV_FIELDS = {
    "REPO_URL": "repo_url",
    "BRANCH_PREFIX": "branch_prefix",
    "AUTHOR_NAME": "author_name",
    "AUTHOR_EMAIL": "author_email",
    "BASE_BRANCH": "base_branch",
    "COMMIT_MESSAGE": "commit_message",
    "PR_TITLE": "pr_title",
    "PR_BODY": "pr_body",
    "VULNFIXER_ECOSYSTEM": "ecosystem",
    "VULNFIXER_SEVERITY": "severity",
    "VULNFIXER_LLM_MODEL": "llm_model",
}


class ConfigError(FixerError, ValueError):
    """Raised when required configuration is missing."""


@dataclass
class FixConfig:
    """Everything a fix-PR run needs, resolved up front."""

    github_token: str
    repo_url: str = ""
    branch_prefix: str = "vulnfix"
    author_name: str = "vulnfixer"
    author_email: str = "vulnfixer@users.noreply.github.com"
    base_branch: str = "main"
    commit_message: str = AUTO
    pr_title: str = AUTO
    pr_body: str = AUTO
    ecosystem: str = DEFAULT_ECOSYSTEM
    severity: str = DEFAULT_SEVERITY
    llm_model: str = DEFAULT_LLM_MODEL
    workdir: Path | None = None
    sample_window: int = 20

    @classmethod
    def from_env(cls, env_file: str | Path | None = None, **overrides: object) -> FixConfig:
        """Build a config from ``.env`` + process environment.

        Empty environment values fall back to the field defaults.
        *overrides* (e.g. CLI options) win over the environment when not None.
        """
        load_dotenv(env_file)

        token = os.environ.get("GITHUB_TOKEN", "")
        kwargs: dict[str, object] = {}
        for env_name, field_name in _ENV_FIELDS.items():
            value = os.environ.get(env_name)
            if value:
                kwargs[field_name] = value
        workdir = os.environ.get("VULNFIXER_WORKDIR")
        if workdir:
            kwargs["workdir"] = Path(workdir)

        known = {f.name for f in fields(cls)}
        for key, value in overrides.items():
            if key not in known:
                raise ConfigError(f"unknown config field: {key}")
            if value is not None:
                kwargs[key] = value

        token = str(kwargs.pop("github_token", token) or "")
        if not token:
            raise ConfigError("GITHUB_TOKEN environment variable not set")
        return cls(github_token=token, **kwargs)  # type: ignore[arg-type]

    def require_repo(self) -> str:
        if not self.repo_url:
            raise ConfigError("REPO_URL environment variable not set")
        return self.repo_url
