"""SQLiteStore — local file-based roast history.

Schema:
  reviews — one row per completed roast. The serialized result is kept as
            JSON text next to the roasted code so a row can be shown again
            without re-running the model.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import uuid
from datetime import datetime, timezone

from roastlens_store.base import BaseStore
from roastlens_store.models import ReviewPage, ReviewRecord

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS reviews (
    id           TEXT PRIMARY KEY,
    owner        TEXT NOT NULL,
    title        TEXT,
    code         TEXT NOT NULL,
    language     TEXT,
    provider     TEXT,
    model        TEXT,
    result_json  TEXT NOT NULL DEFAULT '{}',
    source_type  TEXT DEFAULT 'PASTE',
    source_url   TEXT,
    pr_number    INTEGER,
    repo_owner   TEXT,
    repo_name    TEXT,
    created_at   TEXT
);
CREATE INDEX IF NOT EXISTS idx_reviews_owner ON reviews (owner, created_at);
"""


class SQLiteStore(BaseStore):
    """Stores roast history in a local SQLite database file.

    The database file path defaults to `.roastlens.db` in the current working
    directory. Configure via .roastlens.yml: `store_path: /path/to/roastlens.db`.
    """

    def __init__(self, db_path: str = ".roastlens.db"):
        self._conn = sqlite3.connect(db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(_SCHEMA)
        self._conn.commit()

    def save(self, record: ReviewRecord) -> str:
        review_id = record.id or uuid.uuid4().hex
        created_at = record.created_at or datetime.now(timezone.utc).isoformat()
        self._conn.execute(
            """
            INSERT INTO reviews
              (id, owner, title, code, language, provider, model, result_json,
               source_type, source_url, pr_number, repo_owner, repo_name, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                review_id,
                record.owner,
                record.title,
                record.code,
                record.language,
                record.provider,
                record.model,
                json.dumps(record.result),
                record.source_type,
                record.source_url,
                record.pr_number,
                record.repo_owner,
                record.repo_name,
                created_at,
            ),
        )
        self._conn.commit()
        logger.debug("Saved review %s for %s", review_id, record.owner)
        return review_id

    def get(self, review_id: str, owner: str) -> ReviewRecord | None:
        row = self._conn.execute(
            "SELECT * FROM reviews WHERE id=? AND owner=?",
            (review_id, owner),
        ).fetchone()
        return self._row_to_record(row) if row else None

    def list_reviews(self, owner: str, page: int = 1, limit: int = 10) -> ReviewPage:
        total = self._conn.execute("SELECT COUNT(*) FROM reviews WHERE owner=?", (owner,)).fetchone()[0]
        rows = self._conn.execute(
            "SELECT * FROM reviews WHERE owner=? ORDER BY created_at DESC, rowid DESC LIMIT ? OFFSET ?",
            (owner, limit, (page - 1) * limit),
        ).fetchall()
        return ReviewPage(
            reviews=[self._row_to_record(r) for r in rows],
            page=page,
            limit=limit,
            total=total,
        )

    def delete(self, review_id: str, owner: str) -> bool:
        cursor = self._conn.execute("DELETE FROM reviews WHERE id=? AND owner=?", (review_id, owner))
        self._conn.commit()
        return cursor.rowcount > 0

    def close(self) -> None:
        self._conn.close()

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> ReviewRecord:
        try:
            result = json.loads(row["result_json"] or "{}")
        except json.JSONDecodeError:
            logger.warning("Review %s has an unreadable result; showing it as empty", row["id"])
            result = {}
        return ReviewRecord(
            id=row["id"],
            owner=row["owner"],
            title=row["title"] or "",
            code=row["code"],
            language=row["language"],
            provider=row["provider"] or "",
            model=row["model"] or "",
            result=result,
            source_type=row["source_type"] or "PASTE",
            source_url=row["source_url"],
            pr_number=row["pr_number"],
            repo_owner=row["repo_owner"],
            repo_name=row["repo_name"],
            created_at=row["created_at"] or "",
        )
