"""The publish step run once at the end of every review."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.console import Console

from prgate_core.findings import FindingSet
from prgate_core.ignores import scan_ignore_directives
from prgate_core.models import FatalAbort, PullRequestRef
from prgate_core.reconciler import DELETED, NOOP, UPDATED, plan_report, reconcile
from prgate_core.status import DEFAULT_CONTEXT, StatusOutcome, build_status_outcome, submit_status

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class PublishResult:
    """What publish() did. ``abort`` is set when the run must exit non-zero."""

    action: str
    comment_url: str | None = None
    status: StatusOutcome | None = None
    abort: FatalAbort | None = None


def _apply_ignores(pr: PullRequestRef, findings: FindingSet, config: dict) -> FindingSet:
    ignored = scan_ignore_directives(pr.description)
    if not ignored or not config.get("apply_ignores", True):
        return findings
    logger.debug("Ignoring violations from PR description: %s", ignored)
    return findings.without_ignored(ignored)


def publish(source, findings: FindingSet, danger_id: str = "danger", config: dict | None = None) -> PublishResult:
    """Post the report comment and commit status for one review run.

    Call once per run. The source caches the PR's comments, so a second call
    on the same source would not see the comment the first one created.
    """
    config = config or {}
    pr = source.get_pull_request()
    findings = _apply_ignores(pr, findings, config)

    outcome = reconcile(source, findings, danger_id=danger_id)
    console.print(f"[dim]Report comment for {danger_id!r}: {outcome.action}[/dim]")

    submission = submit_status(
        source,
        findings,
        head_sha=pr.head_sha,
        details_url=outcome.comment_url,
        private=pr.private,
        context=config.get("status_context", DEFAULT_CONTEXT),
    )
    return PublishResult(
        action=outcome.action,
        comment_url=outcome.comment_url,
        status=submission.outcome,
        abort=submission.abort,
    )


def print_shadow_report(source, findings: FindingSet, danger_id: str = "danger", config: dict | None = None) -> None:
    """Print the report and status a publish would produce, without posting to GitHub."""
    config = config or {}
    pr = source.get_pull_request()
    findings = _apply_ignores(pr, findings, config)

    plan = plan_report(source.get_comments(), findings, danger_id=danger_id)

    if plan.action == DELETED:
        console.print(f"[yellow]Shadow mode: would delete {len(plan.stale)} report comment(s).[/yellow]")
    elif plan.action == NOOP:
        console.print("[yellow]Shadow mode: nothing to report.[/yellow]")
    else:
        verb = "update" if plan.action == UPDATED else "create"
        console.print(f"\n[bold]Shadow report — would {verb} this comment (not posted)[/bold]\n")
        console.print(plan.body, markup=False, highlight=False)
        if plan.stale:
            console.print(f"[yellow]Would delete {len(plan.stale)} older report comment(s).[/yellow]")

    status = build_status_outcome(findings, context=config.get("status_context", DEFAULT_CONTEXT))
    color = "green" if status.state == "success" else "red"
    console.print(f"Status [bold]{status.context}[/bold]: [{color}]{status.state}[/{color}] — {status.description}")
