"""Abstract base classes for storage."""

from abc import ABC, abstractmethod
from typing import Any

from faqrag.models import AppSettings, Chunk, IngestionLogEntry, KnowledgeBaseStats


class ChunkStore(ABC):
    """Abstract base class for chunk storage.

    Readers get a complete snapshot: a replacement is never visible half-done.
    """

    @abstractmethod
    def get_chunks(self) -> list[Chunk]:
        """Return every stored chunk, in insertion order."""
        ...

    @abstractmethod
    def replace_chunks_for_origin(self, origin: str, chunks: list[Chunk]) -> None:
        """Delete every chunk whose source URL starts with origin, then store chunks."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Delete all chunks."""
        ...

    @abstractmethod
    def count_chunks(self) -> int:
        """Count the total number of chunks in the store."""
        ...

    @abstractmethod
    def stats(self) -> KnowledgeBaseStats:
        """Aggregate counts per source and overall."""
        ...


class IngestionLog(ABC):
    """Abstract base class for the ingestion history."""

    max_entries: int = 25

    @abstractmethod
    def append(self, entry: IngestionLogEntry) -> None:
        """Record an entry, dropping the oldest beyond max_entries."""
        ...

    @abstractmethod
    def entries(self) -> list[IngestionLogEntry]:
        """Entries, newest first."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Delete all entries."""
        ...


class SettingsStore(ABC):
    """Abstract base class for admin-editable application settings."""

    @abstractmethod
    def get_settings(self) -> AppSettings:
        """Current settings, defaults if never saved."""
        ...

    @abstractmethod
    def update_settings(self, **changes: Any) -> AppSettings:
        """Merge changes into the stored settings and return the result."""
        ...
