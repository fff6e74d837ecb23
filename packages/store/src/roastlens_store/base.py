"""Abstract store interface.

Any storage backend (SQLite, Postgres, S3) implements this interface. The
CLI depends on BaseStore, not on a concrete backend, so backends are
swappable without touching CLI code. Every read and delete is scoped to an
owner: a review id alone never grants access.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from roastlens_store.models import ReviewPage, ReviewRecord


class BaseStore(ABC):
    """Pluggable persistence layer for roast history."""

    @abstractmethod
    def save(self, record: ReviewRecord) -> str:
        """Persist a completed review and return its opaque id ("" when nothing was stored)."""

    @abstractmethod
    def get(self, review_id: str, owner: str) -> ReviewRecord | None:
        """Return the review if it exists and belongs to ``owner``, else None."""

    @abstractmethod
    def list_reviews(self, owner: str, page: int = 1, limit: int = 10) -> ReviewPage:
        """Return one page of ``owner``'s reviews, newest first.

        Returns an empty page if no reviews exist — never raises.
        """

    @abstractmethod
    def delete(self, review_id: str, owner: str) -> bool:
        """Delete the review if it belongs to ``owner``. Returns False if nothing was deleted."""

    def close(self) -> None:
        """Release any resources held by the store (connections, file handles).

        Optional — subclasses that need cleanup should override this.
        Default is a no-op so callers can always call close() safely.
        """
