"""Unified-diff patch parsing.

Works on the per-file ``patch`` strings GitHub returns for a pull request:
no ``diff --git`` preamble, usually starting straight at the first ``@@``
header. Anything before the first header (``---``/``+++`` file markers when
present) belongs to no hunk.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from roastlens_core.models import FILE_STATUSES, ParsedFileChange, PullRequestFile, UnifiedDiffHunk

_HUNK_HEADER_RE = re.compile(r"^@@ -(\d+),?(\d*) \+(\d+),?(\d*) @@")


@dataclass(frozen=True)
class ChangedLines:
    added: str = ""
    removed: str = ""
    context: str = ""


def _count(value: str) -> int:
    # "@@ -3 +3 @@" omits the length; unified diff defines that as one line.
    return int(value) if value else 1


def parse_patch(patch_text: str | None) -> list[UnifiedDiffHunk]:
    """Split a patch into hunks, in the order their headers appear."""
    if not patch_text:
        return []

    hunks: list[UnifiedDiffHunk] = []
    header: re.Match | None = None
    body: list[str] = []

    def close() -> None:
        hunks.append(
            UnifiedDiffHunk(
                old_start=int(header.group(1)),
                old_line_count=_count(header.group(2)),
                new_start=int(header.group(3)),
                new_line_count=_count(header.group(4)),
                raw_content="\n".join(body),
            )
        )

    for line in patch_text.split("\n"):
        match = _HUNK_HEADER_RE.match(line)
        if match:
            if header is not None:
                close()
            header = match
            body = [line]
        elif header is not None:
            body.append(line)

    if header is not None:
        close()

    return hunks


def extract_added_lines(patch_text: str | None) -> str:
    """Return the added lines of a patch with their ``+`` marker stripped."""
    if not patch_text:
        return ""
    added = [
        line[1:]
        for line in patch_text.split("\n")
        if line.startswith("+") and not line.startswith("+++")
    ]
    return "\n".join(added)


def extract_changed_lines(patch_text: str | None) -> ChangedLines:
    """Partition a patch's body lines into added, removed and context text."""
    if not patch_text:
        return ChangedLines()

    added: list[str] = []
    removed: list[str] = []
    context: list[str] = []

    for line in patch_text.split("\n"):
        if line.startswith("@@"):
            continue
        if line.startswith("+") and not line.startswith("+++"):
            added.append(line[1:])
        elif line.startswith("-") and not line.startswith("---"):
            removed.append(line[1:])
        elif line.startswith(" "):
            context.append(line[1:])

    return ChangedLines(added="\n".join(added), removed="\n".join(removed), context="\n".join(context))


def normalize_status(status: str | None) -> str:
    """Fold GitHub's extra statuses (copied, changed, unchanged) into "modified"."""
    return status if status in FILE_STATUSES else "modified"


def parse_file_change(file: PullRequestFile) -> ParsedFileChange:
    patch = file.patch or ""
    return ParsedFileChange(
        filename=file.filename,
        status=normalize_status(file.status),
        additions_count=file.additions,
        deletions_count=file.deletions,
        hunks=tuple(parse_patch(patch)),
        raw_patch=patch,
    )
