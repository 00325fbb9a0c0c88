"""Recognising our own report comments and reading back their ledger."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from prgate_core.findings import ERROR, MESSAGE, WARNING

if TYPE_CHECKING:
    from prgate_core.models import ReportComment

_TABLE_RE = re.compile(r"<table>(.*?)</table>", re.DOTALL)
_KIND_RE = re.compile(r'data-kind="(\w+)"')
_STICKY_RE = re.compile(r'<td data-sticky="true">(?:<del>)?(.*?)(?:</del>)?\s*</td>', re.DOTALL | re.IGNORECASE)

_KIND_BY_TITLE = {"Error": ERROR, "Warning": WARNING, "Message": MESSAGE}


def danger_marker(danger_id: str) -> str:
    """The signature every rendered report carries for ``danger_id``."""
    return f'data-meta="generated_by_{danger_id}"'


def generated_by_danger(body: str | None, danger_id: str) -> bool:
    return danger_marker(danger_id) in (body or "")


def classify(comments: list[ReportComment], danger_id: str) -> list[ReportComment]:
    """Return the comments we posted for ``danger_id``, preserving order."""
    return [c for c in comments if generated_by_danger(c.body, danger_id)]


def parse_ledger(body: str | None) -> dict[str, list[str]] | None:
    """Recover the sticky findings rendered into a previous report body.

    Returns None when the body has no report tables, e.g. a comment written
    before any sticky finding existed or one edited by hand.
    """
    tables = _TABLE_RE.findall(body or "")
    ledger: dict[str, list[str]] = {}
    for table in tables:
        kind_match = _KIND_RE.search(table)
        if not kind_match or kind_match.group(1) not in _KIND_BY_TITLE:
            continue
        kind = _KIND_BY_TITLE[kind_match.group(1)]
        ledger.setdefault(kind, []).extend(text.strip() for text in _STICKY_RE.findall(table))
    if not ledger:
        return None
    return ledger


def ledger_is_empty(ledger: dict[str, list[str]] | None) -> bool:
    return not ledger or not any(ledger.values())
