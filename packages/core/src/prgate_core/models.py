"""Data passed between the GitHub source and the reconciliation core.

Decoupled from PyGithub so the core can be driven by any object that
implements the source interface (tests use MagicMock fakes).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PullRequestRef:
    """The pull request a run reconciles against."""

    repo_slug: str
    pull_request_id: int
    head_sha: str | None
    base_sha: str | None
    description: str | None = None
    private: bool = False


@dataclass
class ReportComment:
    """An issue comment on the pull request, ours or not."""

    id: int
    body: str
    author: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class FatalAbort:
    """The run must stop with a non-zero exit and this message.

    Returned rather than raised so callers decide how to terminate.
    """

    message: str
