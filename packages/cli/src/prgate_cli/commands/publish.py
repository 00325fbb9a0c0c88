"""publish command — post a review run's findings to a pull request."""

from __future__ import annotations

import click
from rich.console import Console

from prgate_core.errors import PrgateError
from prgate_core.findings import load_findings
from prgate_core.gh.pull_request import GitHubSource
from prgate_core.publisher import print_shadow_report, publish

console = Console()


@click.command("publish")
@click.option("--repo", required=True, help="GitHub repository in owner/name format.")
@click.option("--pr", "pr_number", type=int, required=True, help="Pull request number.")
@click.option(
    "--findings",
    "findings_path",
    required=True,
    type=click.Path(dir_okay=False),
    help="JSON or YAML file with warnings, errors, messages and markdowns.",
)
@click.option(
    "--danger-id",
    default=None,
    help="Identifier separating this bot configuration's report from others. Overrides config file.",
)
@click.option(
    "--shadow",
    "-s",
    is_flag=True,
    help="Dry-run mode: print the report and status without posting to GitHub.",
)
@click.pass_context
def publish_cmd(ctx, repo: str, pr_number: int, findings_path: str, danger_id: str | None, shadow: bool):
    """Post the report comment and commit status for a review run.

    Creates, updates or deletes the single report comment for the danger id,
    then sets the commit status. Exits non-zero when the run has errors and
    the status could not be recorded.

    \b
    Required environment variables:
      DANGER_GITHUB_API_TOKEN  GitHub token (or GITHUB_TOKEN, or use gh CLI)
    Optional:
      DANGER_GITHUB_API_BASE_URL  API endpoint for GitHub Enterprise
    """
    from prgate_core.config import load_config
    from prgate_cli.auth import resolve_github_token

    config_path = (ctx.obj or {}).get("config_path", ".prgate.yml")
    config = load_config(config_path, cli_overrides={"danger_id": danger_id})

    token = resolve_github_token()
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set DANGER_GITHUB_API_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )
    config["github_token"] = token

    try:
        findings = load_findings(findings_path)
        source = GitHubSource.from_config(config, repo, pr_number)
        if shadow:
            print_shadow_report(source, findings, danger_id=config["danger_id"], config=config)
            return
        result = publish(source, findings, danger_id=config["danger_id"], config=config)
    except PrgateError as e:
        raise click.ClickException(str(e))

    if result.abort is not None:
        raise click.ClickException(result.abort.message)

    if result.comment_url:
        console.print(f"[green]Report: {result.comment_url}[/green]")
    if result.status is not None:
        console.print(f"Status: {result.status.state} — {result.status.description}")
