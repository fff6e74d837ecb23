"""Combine per-file patches into one bounded document for the prompt."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 50_000
TRUNCATION_MARKER = "\n... (additional files truncated due to length)\n"


def _get(file: Any, name: str, default: Any = None) -> Any:
    if isinstance(file, Mapping):
        return file.get(name, default)
    return getattr(file, name, default)


def render_section(file: Any) -> str:
    return (
        f"\n=== {_get(file, 'filename')} "
        f"({_get(file, 'status')}: +{_get(file, 'additions', 0)}/-{_get(file, 'deletions', 0)}) ===\n"
        f"{_get(file, 'patch')}\n"
    )


def combine(files: Iterable[Any], max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """Concatenate file sections in input order, stopping before the budget is exceeded.

    Files without a patch (binary, unchanged) are skipped. Truncation is at
    whole-file granularity: once the next section would push the total past
    ``max_length`` a single marker is appended and every later file is
    omitted. The only exception is an oversized first section, which is cut
    at ``max_length`` so the document is never empty when there is a patch.
    """
    parts: list[str] = []
    total = 0

    for file in files:
        if not _get(file, "patch"):
            continue

        section = render_section(file)
        if total + len(section) > max_length:
            if not parts:
                parts.append(section[:max_length])
            logger.debug("Diff budget of %d chars reached at %s", max_length, _get(file, "filename"))
            parts.append(TRUNCATION_MARKER)
            break

        parts.append(section)
        total += len(section)

    return "".join(parts)
