"""Local filesystem storage configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from faqrag.stores import ChunkStore, IngestionLog, SettingsStore


@dataclass(frozen=True)
class LocalStorage:
    """Local filesystem storage using SQLite.

    All data is persisted to the specified directory:
    - chunks.db: Embedded chunks
    - ingestions.db: Ingestion history
    - settings.db: Admin-editable settings

    Args:
        data_dir: Base directory for all storage files.
                  Created if it doesn't exist.

    Example:
        storage = LocalStorage("./faqrag_data")
    """

    data_dir: str

    def build_stores(self) -> tuple[ChunkStore, IngestionLog, SettingsStore]:
        """Build all three storage components.

        Returns:
            Tuple of (chunk_store, ingestion_log, settings_store)
        """
        from faqrag.stores import SQLiteChunkStore, SQLiteIngestionLog, SQLiteSettingsStore

        Path(self.data_dir).mkdir(parents=True, exist_ok=True)

        chunk_store = SQLiteChunkStore(os.path.join(self.data_dir, "chunks.db"))
        ingestion_log = SQLiteIngestionLog(os.path.join(self.data_dir, "ingestions.db"))
        settings_store = SQLiteSettingsStore(os.path.join(self.data_dir, "settings.db"))

        return chunk_store, ingestion_log, settings_store
