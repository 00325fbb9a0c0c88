from __future__ import annotations

import logging

from github import Github, GithubException

from prgate_core.errors import RepoMovedError, StatusPermissionError
from prgate_core.models import PullRequestRef, ReportComment

logger = logging.getLogger(__name__)

# Status codes GitHub answers with when the token cannot write statuses.
_NO_WRITE_ACCESS = {401, 403, 404}


def get_repo(repo_name: str, token: str, api_url: str | None = None):
    if api_url:
        return Github(token, base_url=api_url).get_repo(repo_name)
    return Github(token).get_repo(repo_name)


def _to_comment(issue_comment) -> ReportComment:
    user = getattr(issue_comment, "user", None)
    return ReportComment(
        id=issue_comment.id,
        body=issue_comment.body or "",
        author=getattr(user, "login", None),
        url=issue_comment.html_url,
    )


class GitHubSource:
    """PyGithub-backed access to one pull request's comments and statuses.

    PyGithub's paginated lists are always iterated to exhaustion, so
    get_comments() returns every comment on the PR's issue.
    """

    def __init__(self, repo_slug: str, pull_request_id: int, token: str, api_url: str | None = None, repo_obj=None):
        self.repo_slug = repo_slug
        self.pull_request_id = pull_request_id
        self._repo = repo_obj if repo_obj is not None else get_repo(repo_slug, token, api_url)
        self._pr = None
        self._comments: list[ReportComment] | None = None

    @classmethod
    def from_config(cls, config: dict, repo_slug: str, pull_request_id: int) -> GitHubSource:
        return cls(repo_slug, pull_request_id, token=config["github_token"], api_url=config.get("api_url"))

    def _pull(self):
        if self._pr is None:
            try:
                self._pr = self._repo.get_pull(self.pull_request_id)
            except GithubException as e:
                if e.status == 301:
                    raise RepoMovedError(self.repo_slug) from e
                raise
        return self._pr

    def get_pull_request(self) -> PullRequestRef:
        pr = self._pull()
        return PullRequestRef(
            repo_slug=self.repo_slug,
            pull_request_id=self.pull_request_id,
            head_sha=pr.head.sha,
            base_sha=pr.base.sha,
            description=pr.body,
            private=bool(pr.base.repo.private),
        )

    def get_comments(self) -> list[ReportComment]:
        if self._comments is None:
            self._comments = [_to_comment(c) for c in self._pull().get_issue_comments()]
        return self._comments

    def create_comment(self, body: str) -> ReportComment:
        created = self._pull().create_issue_comment(body)
        logger.debug("Created comment %s on %s#%s", created.id, self.repo_slug, self.pull_request_id)
        return _to_comment(created)

    def update_comment(self, comment_id: int, body: str) -> ReportComment:
        comment = self._repo.get_issue_comment(comment_id)
        comment.edit(body)
        logger.debug("Updated comment %s on %s#%s", comment_id, self.repo_slug, self.pull_request_id)
        return _to_comment(comment)

    def delete_comment(self, comment_id: int) -> None:
        self._repo.get_issue_comment(comment_id).delete()
        logger.debug("Deleted comment %s on %s#%s", comment_id, self.repo_slug, self.pull_request_id)

    def set_commit_status(
        self, sha: str, state: str, description: str, context: str, target_url: str | None = None
    ) -> None:
        # PyGithub rejects None for optional status fields; omit them instead.
        kwargs = {"description": description, "context": context}
        if target_url:
            kwargs["target_url"] = target_url
        try:
            self._repo.get_commit(sha).create_status(state, **kwargs)
        except GithubException as e:
            if e.status in _NO_WRITE_ACCESS:
                raise StatusPermissionError(f"No write access to set a status on {self.repo_slug}@{sha}") from e
            raise
