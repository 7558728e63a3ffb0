"""Generated commit / PR text — thin async wrapper around litellm.acompletion()."""

from __future__ import annotations

from dataclasses import replace

import litellm
import structlog

from vulnfixer.core.config import AUTO, FixConfig
from vulnfixer.engines.advisory_source.models import SelectionResult
from vulnfixer.exceptions import TextGenerationError

log = structlog.get_logger("vulnfixer.engine")

_SYSTEM = "You write short, plain-text git and GitHub metadata. No markdown fences, no placeholders."


class TextGenerator:
    """One-shot prompts against a single model."""

    def __init__(self, model: str, *, api_key: str | None = None, max_tokens: int = 512) -> None:
        self.model = model
        self._api_key = api_key
        self._max_tokens = max_tokens

    async def generate(self, prompt: str) -> str:
        kwargs = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": _SYSTEM},
                {"role": "user", "content": prompt},
            ],
            "temperature": 0.2,
            "max_tokens": self._max_tokens,
        }
        if self._api_key:
            kwargs["api_key"] = self._api_key

        try:
            raw = await litellm.acompletion(**kwargs)
        except Exception as exc:
            log.warning("text.completion_failed", model=self.model, error=str(exc))
            raise TextGenerationError(f"{self.model} completion failed: {exc}") from exc
        text = (raw.choices[0].message.content or "").strip()
        if not text:
            raise TextGenerationError(f"{self.model} returned an empty completion")
        log.debug("text.generated", model=self.model, chars=len(text))
        return text


async def resolve_messages(
    config: FixConfig,
    selection: SelectionResult,
    generator: TextGenerator,
) -> FixConfig:
    """Fill every ``<auto>`` message field of *config*; others pass through.

    Each prompt builds on the text generated before it, so the order is
    commit message, PR title, PR body, branch prefix.
    """
    subject = (
        f"{selection.cve}: pin {selection.package_name} to "
        f"{selection.version} in requirements.txt"
    )

    commit_message = config.commit_message
    if commit_message == AUTO:
        commit_message = await generator.generate(
            f"Generate a short, complete commit message for a Git commit that does this: {subject}"
        )
    pr_title = config.pr_title
    if pr_title == AUTO:
        pr_title = await generator.generate(
            "Generate a concise pull request title with no placeholders for a "
            f"GitHub pull request related to the commit: {commit_message}"
        )
    pr_body = config.pr_body
    if pr_body == AUTO:
        pr_body = await generator.generate(
            "Generate a pull request body with no placeholders for a GitHub pull "
            f"request with the title {pr_title!r}. It addresses {selection.cve} in "
            f"{selection.package_name}."
        )
    branch_prefix = config.branch_prefix
    if branch_prefix == AUTO:
        branch_prefix = await generator.generate(
            "Generate a GitHub branch name with no markdown, only lowercase letters, "
            f"digits and dashes, to hold the pull request {pr_title!r} for {selection.cve}"
        )
        branch_prefix = branch_prefix.split()[0].strip("`'\"")

    return replace(
        config,
        commit_message=commit_message,
        pr_title=pr_title,
        pr_body=pr_body,
        branch_prefix=branch_prefix,
    )
