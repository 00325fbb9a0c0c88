"""Exceptions raised by prgate."""


class PrgateError(Exception):
    """Base exception for all prgate errors."""


class ConfigError(PrgateError):
    """Configuration-related errors (missing token, unreadable findings)."""


class RepoMovedError(PrgateError):
    """The pull request's repository was moved or renamed."""

    def __init__(self, repo_slug: str):
        super().__init__(f"Repo {repo_slug} moved or renamed, make sure to update the git remote")
        self.repo_slug = repo_slug


class StatusPermissionError(PrgateError):
    """The token has no write access to set a commit status."""
