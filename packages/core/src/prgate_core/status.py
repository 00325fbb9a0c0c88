"""Commit status submission.

A status is the gate CI systems and branch protection look at, so a run with
errors must never end looking green. When the token cannot write statuses
(forks, read-only bots on public repos) the only remaining way to fail the
build is to abort the process, which is reported back as a FatalAbort.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.console import Console

from prgate_core.errors import StatusPermissionError
from prgate_core.findings import FindingSet
from prgate_core.models import FatalAbort
from prgate_core.renderer import generate_description, pluralize

console = Console()
logger = logging.getLogger(__name__)

DEFAULT_CONTEXT = "danger/danger"


@dataclass
class StatusOutcome:
    state: str  # "success" | "failure"
    description: str
    context: str = DEFAULT_CONTEXT
    target_url: str | None = None


@dataclass
class StatusSubmission:
    outcome: StatusOutcome | None = None
    submitted: bool = False
    abort: FatalAbort | None = None


def build_status_outcome(
    findings: FindingSet, details_url: str | None = None, context: str = DEFAULT_CONTEXT
) -> StatusOutcome:
    return StatusOutcome(
        state="success" if not findings.errors else "failure",
        description=generate_description(warnings=findings.warnings, errors=findings.errors),
        context=context,
        target_url=details_url,
    )


def _permission_abort(error_count: int, private: bool) -> FatalAbort:
    found = f"Found {pluralize('error', error_count)}"
    if private:
        return FatalAbort(
            f"\nDanger has failed this build. \n{found} and I don't have write access to the PR to set a PR status."
        )
    return FatalAbort(f"\nDanger has failed this build. \n{found}.")


def submit_status(
    source,
    findings: FindingSet,
    head_sha: str | None,
    details_url: str | None = None,
    private: bool = False,
    context: str = DEFAULT_CONTEXT,
) -> StatusSubmission:
    if not head_sha:
        return StatusSubmission(abort=FatalAbort("Couldn't find a commit to update its status"))

    outcome = build_status_outcome(findings, details_url, context)
    try:
        source.set_commit_status(
            head_sha,
            state=outcome.state,
            description=outcome.description,
            context=outcome.context,
            target_url=outcome.target_url,
        )
    except StatusPermissionError as e:
        if findings.errors:
            logger.debug("Status write refused with %d error(s) to report: %s", len(findings.errors), e)
            return StatusSubmission(outcome=outcome, abort=_permission_abort(len(findings.errors), private))
        logger.warning("Could not set commit status (%s); reporting on the console instead.", e)
        console.print(outcome.description)
        return StatusSubmission(outcome=outcome)

    logger.debug("Set %s status %r on %s", outcome.state, outcome.context, head_sha)
    return StatusSubmission(outcome=outcome, submitted=True)
