"""Review history data models.

Decoupled from roastlens_core so the store layer can be used independently
and roastlens_core has no knowledge of persistence concerns.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass
class ReviewRecord:
    """A completed roast persisted to the store.

    Created by the CLI layer after a roast returns a RoastOutcome. ``result``
    is the serialized ReviewResult (``ReviewResult.to_dict()``) and is stored
    verbatim next to the roasted code.
    """

    owner: str
    title: str
    code: str
    provider: str
    model: str
    result: dict
    source_type: str = "PASTE"  # "PASTE" | "GITHUB_PR"
    language: str | None = None
    source_url: str | None = None
    pr_number: int | None = None
    repo_owner: str | None = None
    repo_name: str | None = None
    created_at: str = ""  # ISO-8601 UTC timestamp
    id: str = ""  # assigned by the store on save()


@dataclass
class ReviewPage:
    """One page of an owner's review history, newest first."""

    reviews: list[ReviewRecord] = field(default_factory=list)
    page: int = 1
    limit: int = 10
    total: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0
