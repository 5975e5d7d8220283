# src/faqrag/stores/sqlite_chunk.py
"""SQLite chunk store implementation."""

import json
import sqlite3
from datetime import datetime
from pathlib import Path

from faqrag.models import Chunk, KnowledgeBaseStats, SourceStats
from faqrag.stores.base import ChunkStore

_COLUMNS = "id, source_url, title, content, embedding, tokens, created_at"


def _row_to_chunk(row: tuple) -> Chunk:
    return Chunk(
        id=row[0],
        source_url=row[1],
        title=row[2],
        content=row[3],
        embedding=json.loads(row[4]),
        tokens=row[5],
        created_at=datetime.fromisoformat(row[6]),
    )


def _chunk_to_row(chunk: Chunk) -> tuple:
    return (
        chunk.id,
        chunk.source_url,
        chunk.title,
        chunk.content,
        json.dumps(chunk.embedding),
        chunk.tokens,
        chunk.created_at.isoformat(),
    )


class SQLiteChunkStore(ChunkStore):
    """SQLite-based chunk store.

    Embeddings are stored as JSON arrays. Replacement by origin runs in a
    single transaction.
    """

    def __init__(self, db_path: str) -> None:
        """Initialize the SQLite store."""
        self.db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        """Create tables if they don't exist."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS chunks (
                    id TEXT PRIMARY KEY,
                    source_url TEXT NOT NULL,
                    title TEXT NOT NULL,
                    content TEXT NOT NULL,
                    embedding TEXT NOT NULL,
                    tokens INTEGER NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_source_url ON chunks(source_url)")
            conn.commit()

    def get_chunks(self) -> list[Chunk]:
        """Return every stored chunk, in insertion order."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(f"SELECT {_COLUMNS} FROM chunks ORDER BY rowid")
            return [_row_to_chunk(row) for row in cursor.fetchall()]

    def replace_chunks_for_origin(self, origin: str, chunks: list[Chunk]) -> None:
        """Delete chunks whose source URL starts with origin, then insert chunks."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                "DELETE FROM chunks WHERE substr(source_url, 1, length(?)) = ?",
                (origin, origin),
            )
            conn.executemany(
                f"INSERT OR REPLACE INTO chunks ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                [_chunk_to_row(c) for c in chunks],
            )
            conn.commit()

    def clear(self) -> None:
        """Delete all chunks."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("DELETE FROM chunks")
            conn.commit()

    def count_chunks(self) -> int:
        """Count the total number of chunks in the store."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute("SELECT COUNT(id) FROM chunks")
            count = cursor.fetchone()
            return count[0] if count else 0

    def stats(self) -> KnowledgeBaseStats:
        """Aggregate counts per source and overall."""
        with sqlite3.connect(self.db_path) as conn:
            total_chunks, total_tokens, last_created = conn.execute(
                "SELECT COUNT(id), COALESCE(SUM(tokens), 0), MAX(created_at) FROM chunks"
            ).fetchone()
            rows = conn.execute(
                """
                SELECT source_url, MAX(title), COUNT(id)
                FROM chunks
                GROUP BY source_url
                ORDER BY source_url
                """
            ).fetchall()

        return KnowledgeBaseStats(
            total_chunks=total_chunks,
            total_sources=len(rows),
            total_tokens=total_tokens,
            last_ingested_at=datetime.fromisoformat(last_created) if last_created else None,
            sources=[SourceStats(url=row[0], title=row[1], chunks=row[2]) for row in rows],
        )
