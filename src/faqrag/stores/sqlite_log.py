# src/faqrag/stores/sqlite_log.py
"""SQLite ingestion log implementation."""

import json
import sqlite3
from datetime import datetime
from pathlib import Path

from faqrag.models import IngestionLogEntry
from faqrag.stores.base import IngestionLog


class SQLiteIngestionLog(IngestionLog):
    """SQLite-based ingestion history, capped at max_entries."""

    def __init__(self, db_path: str, max_entries: int = 25) -> None:
        """Initialize the SQLite log."""
        self.db_path = db_path
        self.max_entries = max_entries
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        """Create tables if they don't exist."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS ingestion_log (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    id TEXT NOT NULL UNIQUE,
                    created_at TEXT NOT NULL,
                    summary TEXT NOT NULL,
                    base_url TEXT,
                    pdf_urls TEXT NOT NULL,
                    chunk_count INTEGER NOT NULL
                )
            """)
            conn.commit()

    def append(self, entry: IngestionLogEntry) -> None:
        """Record an entry and trim the log to max_entries."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """
                INSERT INTO ingestion_log (id, created_at, summary, base_url, pdf_urls, chunk_count)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.id,
                    entry.created_at.isoformat(),
                    entry.summary,
                    entry.base_url,
                    json.dumps(entry.pdf_urls),
                    entry.chunk_count,
                ),
            )
            conn.execute(
                """
                DELETE FROM ingestion_log WHERE seq NOT IN (
                    SELECT seq FROM ingestion_log ORDER BY seq DESC LIMIT ?
                )
                """,
                (self.max_entries,),
            )
            conn.commit()

    def entries(self) -> list[IngestionLogEntry]:
        """Entries, newest first."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                """
                SELECT id, created_at, summary, base_url, pdf_urls, chunk_count
                FROM ingestion_log ORDER BY seq DESC
                """
            )
            return [
                IngestionLogEntry(
                    id=row[0],
                    created_at=datetime.fromisoformat(row[1]),
                    summary=row[2],
                    base_url=row[3],
                    pdf_urls=json.loads(row[4]),
                    chunk_count=row[5],
                )
                for row in cursor.fetchall()
            ]

    def clear(self) -> None:
        """Delete all entries."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("DELETE FROM ingestion_log")
            conn.commit()
