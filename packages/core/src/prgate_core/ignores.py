from __future__ import annotations

import re

_IGNORE_RE = re.compile(r'>\s*danger\s*:\s*ignore\s*"(.*)"', re.IGNORECASE)


def scan_ignore_directives(description: str | None) -> list[str]:
    """Return every token quoted in a ``> danger: ignore "..."`` line, in order."""
    if not description:
        return []
    return _IGNORE_RE.findall(description.rstrip("\r\n"))
