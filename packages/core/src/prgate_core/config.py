import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "danger_id": "danger",
    "status_context": "danger/danger",
    "apply_ignores": True,  # drop warnings/errors silenced with `> danger: ignore "..."`
}


def _api_url() -> Optional[str]:
    # DANGER_GITHUB_API_HOST is the legacy name and still wins when both are set.
    return os.environ.get("DANGER_GITHUB_API_HOST") or os.environ.get("DANGER_GITHUB_API_BASE_URL")


def load_config(config_path: str = ".prgate.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prgate.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Resolve credentials and endpoints from environment variables
    config["github_token"] = os.environ.get("DANGER_GITHUB_API_TOKEN") or os.environ.get("GITHUB_TOKEN")
    config["api_url"] = _api_url()

    return config
