"""No-op store — the default when no store is configured.

Roasts are shown in the terminal but not persisted anywhere. Using a
NoOpStore rather than None lets the CLI always call store.save() without
conditional checks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from roastlens_store.base import BaseStore
from roastlens_store.models import ReviewPage

if TYPE_CHECKING:
    from roastlens_store.models import ReviewRecord


class NoOpStore(BaseStore):
    """Silently discards all records — zero configuration required."""

    def save(self, record: ReviewRecord) -> str:
        return ""

    def get(self, review_id: str, owner: str) -> ReviewRecord | None:
        return None

    def list_reviews(self, owner: str, page: int = 1, limit: int = 10) -> ReviewPage:
        return ReviewPage(page=page, limit=limit)

    def delete(self, review_id: str, owner: str) -> bool:
        return False
