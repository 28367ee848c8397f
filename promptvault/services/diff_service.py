"""Diff engine — line comparison between two version bodies.

The comparison is positional, not a minimal edit script: lines are paired
by index, so one line inserted mid-body shows every following line as a
removed/added pair. Display code relies on this pairing.
"""

from __future__ import annotations

from promptvault.schemas.version import DiffKind, DiffLine, DiffSummary


def diff_lines(old_text: str, new_text: str) -> list[DiffLine]:
    old_lines = old_text.split("\n")
    new_lines = new_text.split("\n")
    diff: list[DiffLine] = []

    i = j = 0
    while i < len(old_lines) or j < len(new_lines):
        if i >= len(old_lines):
            diff.append(DiffLine(kind=DiffKind.ADDED, line=new_lines[j]))
            j += 1
        elif j >= len(new_lines):
            diff.append(DiffLine(kind=DiffKind.REMOVED, line=old_lines[i]))
            i += 1
        elif old_lines[i] == new_lines[j]:
            diff.append(DiffLine(kind=DiffKind.SAME, line=old_lines[i]))
            i += 1
            j += 1
        else:
            diff.append(DiffLine(kind=DiffKind.REMOVED, line=old_lines[i]))
            diff.append(DiffLine(kind=DiffKind.ADDED, line=new_lines[j]))
            i += 1
            j += 1

    return diff


def summarize(diff: list[DiffLine]) -> DiffSummary:
    summary = DiffSummary()
    for entry in diff:
        if entry.kind == DiffKind.ADDED:
            summary.added += 1
        elif entry.kind == DiffKind.REMOVED:
            summary.removed += 1
        else:
            summary.unchanged += 1
    return summary
