"""Findings produced by a review run.

A FindingSet is the only input reconciliation needs from the review itself.
It is built once per run (usually from a JSON or YAML file written by the
review step) and never mutated afterwards.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path

import yaml

from prgate_core.errors import ConfigError

WARNING = "warning"
ERROR = "error"
MESSAGE = "message"
MARKDOWN = "markdown"

KINDS = (WARNING, ERROR, MESSAGE, MARKDOWN)


@dataclass(frozen=True)
class Finding:
    """One reported item. Sticky findings survive into later reports as resolved."""

    kind: str
    message: str
    sticky: bool = False


@dataclass(frozen=True)
class FindingSet:
    warnings: tuple[Finding, ...] = field(default_factory=tuple)
    errors: tuple[Finding, ...] = field(default_factory=tuple)
    messages: tuple[Finding, ...] = field(default_factory=tuple)
    markdowns: tuple[Finding, ...] = field(default_factory=tuple)

    def is_empty(self) -> bool:
        return not (self.warnings or self.errors or self.messages or self.markdowns)

    def without_ignored(self, ignored: list[str]) -> FindingSet:
        """Drop warnings and errors whose message the author asked to ignore."""
        if not ignored:
            return self
        skip = set(ignored)
        return replace(
            self,
            warnings=tuple(f for f in self.warnings if f.message not in skip),
            errors=tuple(f for f in self.errors if f.message not in skip),
        )

    @classmethod
    def from_dict(cls, data: dict | None) -> FindingSet:
        data = data or {}
        unknown = set(data) - {f"{k}s" for k in KINDS}
        if unknown:
            raise ConfigError(f"Unknown finding kinds: {', '.join(sorted(unknown))}")

        def _entries(kind: str) -> tuple[Finding, ...]:
            entries = []
            for raw in data.get(f"{kind}s") or []:
                if isinstance(raw, str):
                    entries.append(Finding(kind=kind, message=raw))
                elif isinstance(raw, dict) and raw.get("message"):
                    entries.append(Finding(kind=kind, message=str(raw["message"]), sticky=bool(raw.get("sticky"))))
                else:
                    raise ConfigError(f"Invalid {kind} entry: {raw!r}")
            return tuple(entries)

        return cls(
            warnings=_entries(WARNING),
            errors=_entries(ERROR),
            messages=_entries(MESSAGE),
            markdowns=_entries(MARKDOWN),
        )


def load_findings(path: str) -> FindingSet:
    """Load a FindingSet from a ``.json`` or YAML file."""
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Findings file not found: {path}")
    text = p.read_text()
    try:
        data = json.loads(text) if p.suffix == ".json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not parse findings file {path}: {e}") from e
    if data is not None and not isinstance(data, dict):
        raise ConfigError(f"Findings file {path} must contain a mapping at the top level.")
    return FindingSet.from_dict(data)
