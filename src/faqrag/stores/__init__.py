"""Storage abstractions for faqrag."""

from faqrag.stores.base import ChunkStore, IngestionLog, SettingsStore
from faqrag.stores.sqlite_chunk import SQLiteChunkStore
from faqrag.stores.sqlite_log import SQLiteIngestionLog
from faqrag.stores.sqlite_settings import SQLiteSettingsStore

__all__ = [
    "ChunkStore",
    "IngestionLog",
    "SettingsStore",
    "SQLiteChunkStore",
    "SQLiteIngestionLog",
    "SQLiteSettingsStore",
]
