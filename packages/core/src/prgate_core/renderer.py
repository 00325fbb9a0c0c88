"""Default report renderer.

Produces the GitHub comment body for a run. Each non-empty kind gets its own
HTML table tagged with ``data-kind`` and one row per finding; the row's
``data-sticky`` attribute is what later runs read back as the ledger (see
prgate_core.comments.parse_ledger). The footer carries the danger marker that
identifies the comment as ours.
"""

from __future__ import annotations

from prgate_core.comments import danger_marker
from prgate_core.findings import ERROR, MESSAGE, WARNING, Finding

_TABLES = (
    (ERROR, "Error", ":no_entry_sign:"),
    (WARNING, "Warning", ":warning:"),
    (MESSAGE, "Message", ":book:"),
)
_RESOLVED_EMOJI = ":white_check_mark:"


def pluralize(word: str, count: int) -> str:
    """``pluralize("error", 1) -> "1 error"``, ``pluralize("error", 0) -> "0 errors"``."""
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def generate_description(warnings, errors) -> str:
    """Short summary used as the commit status description."""
    if not errors and not warnings:
        return "All green."
    parts = []
    if errors:
        parts.append(pluralize("error", len(errors)))
    if warnings:
        parts.append(pluralize("warning", len(warnings)))
    return ", ".join(parts)


def _row(emoji: str, text: str, sticky: bool) -> str:
    return (
        "    <tr>\n"
        f"      <td>{emoji}</td>\n"
        f'      <td data-sticky="{"true" if sticky else "false"}">{text}</td>\n'
        "    </tr>"
    )


def _table(title: str, emoji: str, findings: list[Finding], resolved: list[str]) -> str:
    rows = [_row(emoji, f.message, f.sticky) for f in findings]
    rows += [_row(_RESOLVED_EMOJI, f"<del>{text}</del>", True) for text in resolved]
    lines = [
        "<table>",
        "  <thead>",
        "    <tr>",
        '      <th width="50"></th>',
        f'      <th width="100%" data-danger-table="true" data-kind="{title}">',
        f"        {pluralize(title, len(findings))}",
        "      </th>",
        "    </tr>",
        "  </thead>",
        "  <tbody>",
        *rows,
        "  </tbody>",
        "</table>",
    ]
    return "\n".join(lines)


def render(warnings, errors, messages, markdowns, previous_ledger: dict | None, danger_id: str) -> str:
    """Render the report comment body. Pure: no I/O, no state."""
    previous_ledger = previous_ledger or {}
    current = {ERROR: list(errors), WARNING: list(warnings), MESSAGE: list(messages)}

    sections = []
    for kind, title, emoji in _TABLES:
        findings = current[kind]
        # parse_ledger strips ledger entries.
        still_reported = {f.message.strip() for f in findings}
        resolved = [text for text in previous_ledger.get(kind, []) if text.strip() not in still_reported]
        if findings or resolved:
            sections.append(_table(title, emoji, findings, resolved))

    for note in markdowns:
        sections.append(note.message)

    sections.append(f'<p align="right" {danger_marker(danger_id)}>\n  Generated by :no_entry_sign: prgate\n</p>')
    return "\n\n".join(sections) + "\n"
