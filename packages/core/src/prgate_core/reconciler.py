"""Converge the PR's report comment with the current run's findings."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from prgate_core.comments import classify, ledger_is_empty, parse_ledger
from prgate_core.findings import FindingSet
from prgate_core.models import ReportComment
from prgate_core.renderer import render as default_render

logger = logging.getLogger(__name__)

CREATED = "created"
UPDATED = "updated"
DELETED = "deleted"
NOOP = "noop"


@dataclass
class ReconcileOutcome:
    action: str  # "created" | "updated" | "deleted" | "noop"
    comment_url: str | None = None


@dataclass
class ReportPlan:
    """What reconcile() is going to do, decided without touching GitHub.

    ``current`` is the report to update, ``stale`` the reports to delete and
    ``body`` the rendered comment (None when nothing is posted).
    """

    action: str
    current: ReportComment | None = None
    stale: list[ReportComment] = field(default_factory=list)
    body: str | None = None


def plan_report(comments, findings: FindingSet, danger_id: str = "danger", render=default_render) -> ReportPlan:
    ours = classify(comments, danger_id)
    current = ours[-1] if ours else None
    previous_ledger = parse_ledger(current.body) if current else None

    if ledger_is_empty(previous_ledger) and findings.is_empty():
        return ReportPlan(action=DELETED if ours else NOOP, stale=ours)

    body = render(
        warnings=findings.warnings,
        errors=findings.errors,
        messages=findings.messages,
        markdowns=findings.markdowns,
        previous_ledger=previous_ledger or {},
        danger_id=danger_id,
    )
    if current is None:
        return ReportPlan(action=CREATED, body=body)
    # Older duplicates (e.g. from an interrupted run) are superseded by the updated comment.
    return ReportPlan(action=UPDATED, current=current, stale=ours[:-1], body=body)


def reconcile(source, findings: FindingSet, danger_id: str = "danger", render=default_render) -> ReconcileOutcome:
    """Delete, update or create the report comment for ``danger_id``.

    Exactly one of the three happens. Whatever the outcome, at most one
    comment for ``danger_id`` is left on the PR; comments of other ids and
    human comments are never touched.
    """
    plan = plan_report(source.get_comments(), findings, danger_id=danger_id, render=render)

    if plan.action == NOOP:
        logger.debug("Nothing to report and no previous report for %r.", danger_id)
        return ReconcileOutcome(action=NOOP)

    comment_url = None
    if plan.action == CREATED:
        comment_url = source.create_comment(plan.body).url
    elif plan.action == UPDATED:
        comment_url = source.update_comment(plan.current.id, plan.body).url

    for comment in plan.stale:
        source.delete_comment(comment.id)
    if plan.action == DELETED:
        logger.debug("Nothing to report; deleted %d previous report(s) for %r.", len(plan.stale), danger_id)
    return ReconcileOutcome(action=plan.action, comment_url=comment_url)
