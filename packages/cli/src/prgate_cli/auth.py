"""Token lookup for the publish command.

prgate usually runs as the last step of a CI job, where the bot account's
token is exported as DANGER_GITHUB_API_TOKEN. A dedicated bot token keeps
report comments and statuses attributed to the bot instead of the person
who triggered the job. Actions jobs without one can fall back to the
injected GITHUB_TOKEN. For a local ``prgate publish --shadow`` dry run, the
developer's own ``gh`` login is enough.
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

_TOKEN_ENV_VARS = ("DANGER_GITHUB_API_TOKEN", "GITHUB_TOKEN")
_GH_TIMEOUT_SECONDS = 5


def _token_from_gh_cli() -> str | None:
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=_GH_TIMEOUT_SECONDS,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        logger.debug("gh CLI token lookup unavailable: %s", e)
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def resolve_github_token() -> str | None:
    """Return the first token found in the environment, then the gh session.

    Returns None when nothing is configured; publish_cmd turns that into a
    UsageError naming DANGER_GITHUB_API_TOKEN.
    """
    for name in _TOKEN_ENV_VARS:
        token = os.environ.get(name)
        if token:
            logger.debug("Using GitHub token from %s.", name)
            return token

    token = _token_from_gh_cli()
    if token:
        logger.debug("Using GitHub token from the gh CLI session.")
    return token
