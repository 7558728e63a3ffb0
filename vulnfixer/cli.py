"""CLI entry point: vulnfixer.

Subcommands:
    vulnfixer select [--ecosystem pip] [--severity critical] [--json]
    vulnfixer pin /path/to/checkout flask 2.3.1
    vulnfixer run [--repo-url URL] [--env-file .env]
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

import click

from vulnfixer.core.config import ConfigError, FixConfig
from vulnfixer.core.logging import setup_logging
from vulnfixer.engines.advisory_selector.selector import DEFAULT_WINDOW, AdvisorySelector
from vulnfixer.engines.advisory_source.github_client import GitHubClient
from vulnfixer.engines.advisory_source.models import SelectionResult
from vulnfixer.engines.advisory_source.source import AdvisorySource
from vulnfixer.engines.fix_pr.runner import FixPRRunner, FixResult, select_fix
from vulnfixer.engines.manifest_patcher.patcher import apply_pin
from vulnfixer.exceptions import FixerError


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """vulnfixer: open a pull request pinning a patched dependency version."""
    setup_logging("DEBUG" if verbose else None)


@main.command("select")
@click.option("--ecosystem", default=None, help="Advisory ecosystem (default: pip)")
@click.option("--severity", default=None, help="Advisory severity (default: critical)")
@click.option("--window", default=DEFAULT_WINDOW, show_default=True, help="Sampled head of the feed")
@click.option("--env-file", type=click.Path(dir_okay=False), default=None, help=".env file to load")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def select(
    ecosystem: str | None,
    severity: str | None,
    window: int,
    env_file: str | None,
    as_json: bool,
) -> None:
    """Pick an advisory and print the pin it resolves to."""
    config = _load_config(env_file, ecosystem=ecosystem, severity=severity, sample_window=window)

    async def _select() -> SelectionResult:
        async with GitHubClient(config.github_token) as client:
            return await select_fix(
                AdvisorySource(client),
                AdvisorySelector(window=config.sample_window),
                config.ecosystem,
                config.severity,
            )

    selection = _run_or_exit(_select())
    if as_json:
        click.echo(
            json.dumps(
                {
                    "cve": selection.cve,
                    "package_name": selection.package_name,
                    "version": selection.version,
                },
                indent=2,
            )
        )
    else:
        click.echo(f"{selection.cve}  {selection.pin}")


@main.command("pin")
@click.argument("repo_root", type=click.Path(exists=True, file_okay=False))
@click.argument("package_name")
@click.argument("version")
def pin(repo_root: str, package_name: str, version: str) -> None:
    """Pin PACKAGE_NAME==VERSION in the first *requirements.txt under REPO_ROOT."""
    root = Path(repo_root)
    manifest = apply_pin(root, package_name, version)
    if manifest is None:
        click.echo(f"No requirements.txt under {root}, nothing to do.")
        return
    click.echo(f"Pinned {package_name}=={version} in {manifest.relative_to(root)}")


@main.command("run")
@click.option("--repo-url", default=None, help="Repository to fix (default: $REPO_URL)")
@click.option("--base-branch", default=None, help="PR base branch (default: $BASE_BRANCH or main)")
@click.option("--ecosystem", default=None, help="Advisory ecosystem (default: pip)")
@click.option("--severity", default=None, help="Advisory severity (default: critical)")
@click.option("--env-file", type=click.Path(dir_okay=False), default=None, help=".env file to load")
def run(
    repo_url: str | None,
    base_branch: str | None,
    ecosystem: str | None,
    severity: str | None,
    env_file: str | None,
) -> None:
    """Full workflow: select, clone, pin, commit, push, open PR."""
    config = _load_config(
        env_file,
        repo_url=repo_url,
        base_branch=base_branch,
        ecosystem=ecosystem,
        severity=severity,
    )

    async def _run() -> FixResult:
        async with GitHubClient(config.github_token) as client:
            return await FixPRRunner(config, client).run()

    result = _run_or_exit(_run())
    click.echo(f"Selected {result.selection.cve}: {result.selection.pin}")
    if result.skipped:
        click.echo("No requirements.txt in the repository; no pull request opened.")
        return
    click.echo(f"Successfully created PR #{result.pr_number}")
    click.echo(f"PR URL: {result.pr_url}")


def _load_config(env_file: str | None, **overrides: object) -> FixConfig:
    try:
        return FixConfig.from_env(env_file, **overrides)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _run_or_exit(coro):
    try:
        return asyncio.run(coro)
    except FixerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
