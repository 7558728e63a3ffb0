"""FixPRRunner — advisory to pull request, one sequential run."""

from __future__ import annotations

import tempfile
from dataclasses import dataclass
from pathlib import Path

import structlog

from vulnfixer.core.config import FixConfig
from vulnfixer.core.github import authenticated_clone_url
from vulnfixer.engines.advisory_selector.selector import AdvisorySelector
from vulnfixer.engines.advisory_source.github_client import GitHubClient
from vulnfixer.engines.advisory_source.models import SelectionResult
from vulnfixer.engines.advisory_source.source import AdvisorySource
from vulnfixer.engines.fix_pr import git
from vulnfixer.engines.fix_pr.pull_request import open_pull_request
from vulnfixer.engines.fix_pr.text import TextGenerator, resolve_messages
from vulnfixer.engines.manifest_patcher.patcher import apply_pin

log = structlog.get_logger("vulnfixer.engine")


@dataclass
class FixResult:
    """Summary of a single run."""

    selection: SelectionResult
    manifest_path: str | None = None
    branch: str | None = None
    pr_number: int | None = None
    pr_url: str | None = None

    @property
    def skipped(self) -> bool:
        return self.manifest_path is None


async def select_fix(
    source: AdvisorySource,
    selector: AdvisorySelector,
    ecosystem: str,
    severity: str,
) -> SelectionResult:
    """fetch -> select -> parse. Every failure here is fatal for the run."""
    advisories = await source.fetch_advisories(ecosystem, severity)
    return selector.select(advisories)


class FixPRRunner:
    """Select an advisory, pin it in a fresh clone, push, and open a PR.

    Nothing is pushed unless selection, version parsing, and the manifest
    rewrite all succeed. A checkout without a requirements manifest ends
    the run early with :attr:`FixResult.skipped` set.
    """

    def __init__(
        self,
        config: FixConfig,
        client: GitHubClient,
        *,
        selector: AdvisorySelector | None = None,
        text_generator: TextGenerator | None = None,
    ) -> None:
        self._config = config
        self._client = client
        self._source = AdvisorySource(client)
        self._selector = selector or AdvisorySelector(window=config.sample_window)
        self._text = text_generator or TextGenerator(config.llm_model)

    async def run(self) -> FixResult:
        config = self._config
        repo_url = config.require_repo()

        selection = await select_fix(
            self._source, self._selector, config.ecosystem, config.severity
        )
        config = await resolve_messages(config, selection, self._text)

        workdir = config.workdir
        if workdir is not None:
            workdir.mkdir(parents=True, exist_ok=True)
        with tempfile.TemporaryDirectory(prefix="vulnfixer-", dir=workdir) as tmpdir:
            return await self._fix_in_checkout(config, repo_url, selection, Path(tmpdir))

    async def _fix_in_checkout(
        self,
        config: FixConfig,
        repo_url: str,
        selection: SelectionResult,
        tmpdir: Path,
    ) -> FixResult:
        result = FixResult(selection=selection)

        log.info("fix.cloning", repo=repo_url)
        checkout = await git.clone(
            authenticated_clone_url(repo_url, config.github_token), tmpdir / "repo"
        )

        branch = git.branch_name(config.branch_prefix)
        await git.create_branch(checkout, branch)

        manifest = apply_pin(checkout, selection.package_name, selection.version)
        if manifest is None:
            log.warning("fix.skipped_no_manifest", repo=repo_url, cve=selection.cve)
            return result
        result.manifest_path = str(manifest.relative_to(checkout))

        await git.commit_all(
            checkout, config.commit_message, config.author_name, config.author_email
        )
        log.info("fix.pushing", branch=branch)
        await git.push_branch(checkout, branch)
        result.branch = branch

        pr = await open_pull_request(
            self._client,
            repo_url,
            head=branch,
            base=config.base_branch,
            title=config.pr_title,
            body=config.pr_body,
        )
        result.pr_number = pr.number
        result.pr_url = pr.html_url
        return result
