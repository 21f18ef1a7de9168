"""SQLite storage for reputation scores."""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path

from nanda_reputation.config import HISTORY_LIMIT
from nanda_reputation.models import ReputationScore

from .base import ReputationStorage


class SqliteReputationStorage(ReputationStorage):
    """SQLite-backed current scores plus an append-only history table."""

    def __init__(self, db_path: str = ":memory:") -> None:
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(db_path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()
        self._create_tables()

    def _create_tables(self) -> None:
        with self._lock:
            self.conn.executescript("""
                CREATE TABLE IF NOT EXISTS reputation_scores (
                    subject_id TEXT PRIMARY KEY,
                    overall_score INTEGER NOT NULL,
                    algorithm_id TEXT NOT NULL,
                    last_updated TEXT NOT NULL,
                    record_json TEXT NOT NULL
                );
                CREATE TABLE IF NOT EXISTS reputation_history (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    subject_id TEXT NOT NULL,
                    overall_score INTEGER NOT NULL,
                    algorithm_id TEXT NOT NULL,
                    last_updated TEXT NOT NULL,
                    record_json TEXT NOT NULL
                );
                CREATE INDEX IF NOT EXISTS idx_rep_history_subject
                    ON reputation_history(subject_id, id);
            """)
            self.conn.commit()

    def save(self, score: ReputationScore) -> None:
        params = (
            score.subject_id,
            score.overall_score,
            score.algorithm_id,
            score.last_updated.isoformat(),
            score.model_dump_json(),
        )
        with self._lock:
            self.conn.execute(
                """INSERT INTO reputation_scores
                   (subject_id, overall_score, algorithm_id, last_updated, record_json)
                   VALUES (?, ?, ?, ?, ?)
                   ON CONFLICT(subject_id) DO UPDATE SET
                     overall_score=excluded.overall_score,
                     algorithm_id=excluded.algorithm_id,
                     last_updated=excluded.last_updated,
                     record_json=excluded.record_json""",
                params,
            )
            self.conn.execute(
                """INSERT INTO reputation_history
                   (subject_id, overall_score, algorithm_id, last_updated, record_json)
                   VALUES (?, ?, ?, ?, ?)""",
                params,
            )
            self.conn.commit()

    def get_current(self, subject_id: str) -> ReputationScore | None:
        with self._lock:
            row = self.conn.execute(
                "SELECT record_json FROM reputation_scores WHERE subject_id = ?",
                (subject_id,),
            ).fetchone()
        return ReputationScore.model_validate_json(row["record_json"]) if row else None

    def get_history(
        self, subject_id: str, limit: int = HISTORY_LIMIT
    ) -> list[ReputationScore]:
        if limit <= 0:
            return []
        with self._lock:
            rows = self.conn.execute(
                """SELECT record_json FROM reputation_history
                   WHERE subject_id = ? ORDER BY id DESC LIMIT ?""",
                (subject_id, limit),
            ).fetchall()
        return [ReputationScore.model_validate_json(r["record_json"]) for r in reversed(rows)]

    def close(self) -> None:
        self.conn.close()
